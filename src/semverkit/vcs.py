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

"""Version control provider.

:class:`VersionControl` is the narrow interface tag resolution needs
from a repository. :class:`Git` implements it by shelling out to the
``git`` executable; tests substitute an in-memory fake.

Commands used::

    make_safe        git config --global --add safe.directory <repo>
    is_repo          git rev-parse --is-inside-work-tree
    current_branch   git rev-parse --abbrev-ref HEAD
    source_branch    git log -1 --format=%s <sha>
                     git name-rev --name-only --exclude=tags/* <sha>^2
    latest_tag       git describe --tags --abbrev=0
    ancestor_tag     git describe --tags --abbrev=0 --match <inc> [--exclude <exc>] <branch>
"""

from __future__ import annotations

import re
import subprocess
from pathlib import Path
from typing import Protocol, runtime_checkable

from semverkit.errors import GitCommandError
from semverkit.logging import get_logger

__all__ = [
    'Git',
    'VersionControl',
    'parse_merge_subject',
]

logger = get_logger(__name__)

# "Merge pull request #12 from octo-org/feature/login"
_PR_MERGE_RE: re.Pattern[str] = re.compile(r'^Merge pull request #\d+ from (?P<owner>[^/\s]+)/(?P<branch>\S+)')
# "Merge branch 'feature/login' into main"
_BRANCH_MERGE_RE: re.Pattern[str] = re.compile(r"^Merge branch '(?P<branch>[^']+)'")
# "Merge remote-tracking branch 'origin/feature/login'"
_REMOTE_MERGE_RE: re.Pattern[str] = re.compile(r"^Merge remote-tracking branch '(?:[^/']+/)?(?P<branch>[^']+)'")
_NAME_REV_SUFFIX_RE: re.Pattern[str] = re.compile(r'[~^].*$')
_NAME_REV_REMOTE_RE: re.Pattern[str] = re.compile(r'^(?:remotes/)?(?:origin/)?')


@runtime_checkable
class VersionControl(Protocol):
    """Repository facts tag resolution depends on."""

    def is_repo(self) -> bool:
        """Return ``True`` if the working directory is inside a repository."""
        ...

    def make_safe(self) -> None:
        """Mark the repository as safe to operate on. Idempotent."""
        ...

    def current_branch(self) -> str:
        """Return the checked-out branch (the merge destination)."""
        ...

    def source_branch(self, commit_sha: str) -> str:
        """Return the branch that *commit_sha* merged in."""
        ...

    def latest_tag(self) -> str:
        """Return the most recent reachable tag, or ``""``."""
        ...

    def ancestor_tag(self, include: str, exclude: str, branch: str) -> str:
        """Return the most recent tag on *branch* matching the globs, or ``""``."""
        ...


def parse_merge_subject(subject: str) -> str:
    """Extract the merged branch from a merge commit subject.

    >>> parse_merge_subject('Merge pull request #7 from octo/feature/login')
    'feature/login'
    >>> parse_merge_subject("Merge branch 'bugfix/npe' into main")
    'bugfix/npe'
    >>> parse_merge_subject('fix: typo')
    ''
    """
    for pattern in (_PR_MERGE_RE, _REMOTE_MERGE_RE, _BRANCH_MERGE_RE):
        match = pattern.match(subject.strip())
        if match:
            return match.group('branch')
    return ''


class Git:
    """:class:`VersionControl` backed by the ``git`` executable.

    Args:
        repo_dir: Repository working directory.
        timeout: Seconds before a single git command is abandoned.
    """

    def __init__(self, repo_dir: Path | str = '.', *, timeout: float = 30.0) -> None:
        """Initialize with the repository directory."""
        self.repo_dir = Path(repo_dir)
        self.timeout = timeout

    def _run(self, *args: str) -> str:
        cmd = ['git', *args]
        try:
            proc = subprocess.run(  # noqa: S603 - intentional subprocess call
                cmd,
                cwd=self.repo_dir,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise GitCommandError(cmd, str(exc), hint='Ensure git is installed and on PATH.') from exc
        if proc.returncode != 0:
            logger.debug('git_failed', cmd=cmd, returncode=proc.returncode, stderr=proc.stderr.strip())
            raise GitCommandError(cmd, proc.stderr)
        return proc.stdout.strip()

    def is_repo(self) -> bool:
        """Return ``True`` if :attr:`repo_dir` is inside a work tree."""
        try:
            return self._run('rev-parse', '--is-inside-work-tree') == 'true'
        except GitCommandError:
            return False

    def make_safe(self) -> None:
        """Add :attr:`repo_dir` to git's ``safe.directory`` list.

        Raises:
            GitCommandError: If the git config could not be updated.
        """
        self._run('config', '--global', '--add', 'safe.directory', str(self.repo_dir.resolve()))

    def current_branch(self) -> str:
        """Return the checked-out branch name.

        Raises:
            GitCommandError: If git fails or ``HEAD`` is detached.
        """
        cmd = ['rev-parse', '--abbrev-ref', 'HEAD']
        branch = self._run(*cmd)
        if not branch or branch == 'HEAD':
            raise GitCommandError(['git', *cmd], 'HEAD is detached', hint='Check out the destination branch.')
        return branch

    def source_branch(self, commit_sha: str) -> str:
        """Return the branch merged by *commit_sha*.

        The merge commit subject is tried first; when it carries no
        branch name, the commit's second parent is named with
        ``git name-rev``.

        Raises:
            GitCommandError: If neither method yields a branch.
        """
        ref = commit_sha or 'HEAD'
        branch = parse_merge_subject(self._run('log', '-1', '--format=%s', ref))
        if branch:
            return branch

        cmd = ['name-rev', '--name-only', '--exclude=tags/*', f'{ref}^2']
        name = self._run(*cmd)
        name = _NAME_REV_REMOTE_RE.sub('', _NAME_REV_SUFFIX_RE.sub('', name))
        if not name or name == 'undefined':
            raise GitCommandError(['git', *cmd], f'{ref} is not a merge commit', hint='Run on the merge commit.')
        return name

    def latest_tag(self) -> str:
        """Return the most recent reachable tag, or ``""`` if there is none."""
        try:
            return self._run('describe', '--tags', '--abbrev=0')
        except GitCommandError:
            return ''

    def ancestor_tag(self, include: str, exclude: str, branch: str) -> str:
        """Return the most recent tag on *branch* matching the globs, or ``""``."""
        args = ['describe', '--tags', '--abbrev=0']
        if include:
            args += ['--match', include]
        if exclude:
            args += ['--exclude', exclude]
        args.append(branch)
        try:
            return self._run(*args)
        except GitCommandError:
            return ''
