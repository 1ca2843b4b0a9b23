# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""Tests for the git-backed version control provider."""

from __future__ import annotations

import subprocess
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest
from semverkit.errors import GitCommandError
from semverkit.vcs import Git, VersionControl, parse_merge_subject

_Responder = Callable[[list[str]], tuple[int, str, str]]
_StubGit = Callable[[_Responder], tuple[Git, list[list[str]]]]


def _fake_run(responder: _Responder, calls: list[list[str]]) -> Callable[..., subprocess.CompletedProcess[str]]:
    def run(cmd: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        calls.append(cmd)
        code, out, err = responder(cmd)
        return subprocess.CompletedProcess(cmd, code, stdout=out, stderr=err)

    return run


@pytest.fixture
def stub_git(monkeypatch: pytest.MonkeyPatch) -> _StubGit:
    """Patch subprocess.run with *responder* and return a Git plus its call log."""

    def make(responder: _Responder) -> tuple[Git, list[list[str]]]:
        calls: list[list[str]] = []
        monkeypatch.setattr('semverkit.vcs.subprocess.run', _fake_run(responder, calls))
        return Git('/repo'), calls

    return make


class TestParseMergeSubject:
    """Tests for parse_merge_subject()."""

    @pytest.mark.parametrize(
        ('subject', 'branch'),
        [
            ('Merge pull request #42 from octo-org/feature/login', 'feature/login'),
            ("Merge branch 'bugfix/npe' into main", 'bugfix/npe'),
            ("Merge branch 'docs/readme'", 'docs/readme'),
            ("Merge remote-tracking branch 'origin/misc/ci'", 'misc/ci'),
            ('feat: add login (#42)', ''),
            ('', ''),
        ],
    )
    def test_subjects(self, subject: str, branch: str) -> None:
        """Test subjects."""
        assert parse_merge_subject(subject) == branch


class TestGit:
    """Tests for Git against a patched subprocess.run."""

    def test_satisfies_protocol(self) -> None:
        """Test satisfies protocol."""
        assert isinstance(Git(), VersionControl)

    def test_is_repo(self, stub_git: _StubGit) -> None:
        """Test is repo."""
        git, calls = stub_git(lambda cmd: (0, 'true\n', ''))
        assert git.is_repo() is True
        assert calls == [['git', 'rev-parse', '--is-inside-work-tree']]

    def test_is_repo_outside(self, stub_git: _StubGit) -> None:
        """Test is repo outside."""
        git, _ = stub_git(lambda cmd: (128, '', 'fatal: not a git repository'))
        assert git.is_repo() is False

    def test_make_safe(self, stub_git: _StubGit) -> None:
        """Test make safe."""
        git, calls = stub_git(lambda cmd: (0, '', ''))
        git.make_safe()
        assert calls[0][:5] == ['git', 'config', '--global', '--add', 'safe.directory']
        assert calls[0][5] == str(Path('/repo').resolve())

    def test_make_safe_failure(self, stub_git: _StubGit) -> None:
        """Test make safe failure."""
        git, _ = stub_git(lambda cmd: (255, '', 'error: could not lock config file'))
        with pytest.raises(GitCommandError, match='could not lock config file') as excinfo:
            git.make_safe()
        assert excinfo.value.command[:2] == ['git', 'config']

    def test_current_branch(self, stub_git: _StubGit) -> None:
        """Test current branch."""
        git, _ = stub_git(lambda cmd: (0, 'main\n', ''))
        assert git.current_branch() == 'main'

    def test_current_branch_detached(self, stub_git: _StubGit) -> None:
        """Test current branch detached."""
        git, _ = stub_git(lambda cmd: (0, 'HEAD\n', ''))
        with pytest.raises(GitCommandError, match='detached'):
            git.current_branch()

    def test_source_branch_from_subject(self, stub_git: _StubGit) -> None:
        """Test source branch from subject."""
        git, calls = stub_git(lambda cmd: (0, 'Merge pull request #7 from octo/feature/login\n', ''))
        assert git.source_branch('81918ffc') == 'feature/login'
        assert calls == [['git', 'log', '-1', '--format=%s', '81918ffc']]

    def test_source_branch_from_name_rev(self, stub_git: _StubGit) -> None:
        """Test source branch from name rev."""

        def responder(cmd: list[str]) -> tuple[int, str, str]:
            if cmd[1] == 'log':
                return 0, 'Squashed change\n', ''
            return 0, 'remotes/origin/bugfix/npe~2\n', ''

        git, calls = stub_git(responder)
        assert git.source_branch('81918ffc') == 'bugfix/npe'
        assert calls[1] == ['git', 'name-rev', '--name-only', '--exclude=tags/*', '81918ffc^2']

    def test_source_branch_defaults_to_head(self, stub_git: _StubGit) -> None:
        """Test source branch defaults to head."""
        git, calls = stub_git(lambda cmd: (0, "Merge branch 'misc/ci'\n", ''))
        assert git.source_branch('') == 'misc/ci'
        assert calls[0][-1] == 'HEAD'

    def test_source_branch_not_a_merge(self, stub_git: _StubGit) -> None:
        """Test source branch not a merge."""

        def responder(cmd: list[str]) -> tuple[int, str, str]:
            if cmd[1] == 'log':
                return 0, 'fix: typo\n', ''
            return 0, 'undefined\n', ''

        git, _ = stub_git(responder)
        with pytest.raises(GitCommandError, match='not a merge commit'):
            git.source_branch('81918ffc')

    def test_latest_tag(self, stub_git: _StubGit) -> None:
        """Test latest tag."""
        git, calls = stub_git(lambda cmd: (0, 'v0.2.1\n', ''))
        assert git.latest_tag() == 'v0.2.1'
        assert calls == [['git', 'describe', '--tags', '--abbrev=0']]

    def test_latest_tag_none(self, stub_git: _StubGit) -> None:
        """Test latest tag none."""
        git, _ = stub_git(lambda cmd: (128, '', 'fatal: No names found'))
        assert git.latest_tag() == ''

    def test_ancestor_tag(self, stub_git: _StubGit) -> None:
        """Test ancestor tag."""
        git, calls = stub_git(lambda cmd: (0, 'v0.2.0\n', ''))
        assert git.ancestor_tag('v[0-9]*', 'v[0-9]*-alpha*', 'main') == 'v0.2.0'
        assert calls == [
            ['git', 'describe', '--tags', '--abbrev=0', '--match', 'v[0-9]*', '--exclude', 'v[0-9]*-alpha*', 'main'],
        ]

    def test_ancestor_tag_without_exclude(self, stub_git: _StubGit) -> None:
        """Test ancestor tag without exclude."""
        git, calls = stub_git(lambda cmd: (0, 'v0.2.0-alpha.1\n', ''))
        git.ancestor_tag('v[0-9]*-alpha*', '', 'main')
        assert '--exclude' not in calls[0]

    def test_ancestor_tag_none(self, stub_git: _StubGit) -> None:
        """Test ancestor tag none."""
        git, _ = stub_git(lambda cmd: (128, '', 'fatal: No names found'))
        assert git.ancestor_tag('v[0-9]*', '', 'main') == ''

    def test_git_missing(self) -> None:
        """Test git missing."""
        with patch('semverkit.vcs.subprocess.run', side_effect=FileNotFoundError('git')):
            with pytest.raises(GitCommandError) as excinfo:
                Git('/repo').current_branch()
        assert 'installed' in excinfo.value.hint

    def test_timeout(self) -> None:
        """Test timeout."""
        with patch('semverkit.vcs.subprocess.run', side_effect=subprocess.TimeoutExpired(['git'], 30)):
            with pytest.raises(GitCommandError):
                Git('/repo').make_safe()
