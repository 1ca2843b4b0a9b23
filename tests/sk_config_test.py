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

"""Tests for parameter loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest
from semverkit.config import (
    Params,
    get_input,
    load_config_file,
    load_params,
    parse_bool,
)
from semverkit.errors import ConfigError, ErrorCode
from semverkit.versioning import MiscPolicy, SemVer


class TestDefaults:
    """Tests for default parameter values."""

    def test_empty_environment(self, tmp_path: Path) -> None:
        """Test empty environment."""
        params = load_params({'repo_dir': str(tmp_path)}, env={})
        assert params == Params(repo_dir=str(tmp_path))
        assert params.prefix == 'v'
        assert params.prerelease_id == 'pre'
        assert params.branch_name == 'main'
        assert params.bump == 'auto'
        assert params.force_prerelease is False
        assert params.base_version is None
        assert params.misc_policy is MiscPolicy.BUILD

    def test_describe(self) -> None:
        """Test describe."""
        described = Params(base_version=SemVer(1, 2, 3)).describe()
        assert described['base_version'] == '1.2.3'
        assert described['misc_policy'] == 'build'


class TestActionInputs:
    """Tests for INPUT_* environment inputs."""

    def test_reads_inputs(self, tmp_path: Path) -> None:
        """Test reads inputs."""
        env = {
            'GITHUB_SHA': '81918ffc',
            'INPUT_REPO_DIR': str(tmp_path),
            'INPUT_BUMP': 'minor',
            'INPUT_PREFIX': 'release-',
            'INPUT_PRERELEASE_ID': 'alpha',
            'INPUT_FORCE_PRERELEASE': 'true',
            'INPUT_BRANCH_NAME': 'develop',
            'INPUT_BASE_VERSION': 'release-4.2.0',
            'INPUT_MISC_POLICY': 'skip',
            'INPUT_DEBUG': '1',
        }
        params = load_params(env=env)
        assert params == Params(
            commit_sha='81918ffc',
            repo_dir=str(tmp_path),
            bump='minor',
            base_version=SemVer(4, 2, 0),
            prefix='release-',
            prerelease_id='alpha',
            force_prerelease=True,
            branch_name='develop',
            debug=True,
            misc_policy=MiscPolicy.SKIP,
        )

    def test_get_input(self) -> None:
        """Test get input."""
        assert get_input('prerelease id', {'INPUT_PRERELEASE_ID': 'rc'}) == 'rc'
        assert get_input('missing', {}) == ''

    def test_blank_input_falls_back_to_default(self, tmp_path: Path) -> None:
        """Test blank input falls back to default."""
        params = load_params({'repo_dir': str(tmp_path)}, env={'INPUT_PREFIX': '  '})
        assert params.prefix == 'v'


class TestValidation:
    """Tests for parameter validation errors."""

    @pytest.mark.parametrize(
        ('env', 'message'),
        [
            ({'GITHUB_SHA': 'not-a-sha'}, 'invalid commit-sha format'),
            ({'INPUT_BUMP': 'huge'}, 'invalid bump value'),
            ({'INPUT_DEBUG': 'yes'}, 'invalid debug argument'),
            ({'INPUT_FORCE_PRERELEASE': 'maybe'}, 'invalid force_prerelease argument'),
            ({'INPUT_BASE_VERSION': 'v1.2'}, 'invalid base_version format'),
            ({'INPUT_PRERELEASE_ID': '123'}, 'invalid prerelease_id'),
            ({'INPUT_PRERELEASE_ID': 'al.pha'}, 'invalid prerelease_id'),
            ({'INPUT_MISC_POLICY': 'ignore'}, 'invalid misc_policy value'),
        ],
    )
    def test_rejects(self, tmp_path: Path, env: dict[str, str], message: str) -> None:
        """Test rejects."""
        with pytest.raises(ConfigError, match=message) as excinfo:
            load_params({'repo_dir': str(tmp_path)}, env=env)
        assert excinfo.value.code is ErrorCode.CONFIG

    @pytest.mark.parametrize('sha', ['81918ffc', 'a' * 40, 'abcde'])
    def test_accepts_sha(self, tmp_path: Path, sha: str) -> None:
        """Test accepts sha."""
        assert load_params({'repo_dir': str(tmp_path)}, env={'GITHUB_SHA': sha}).commit_sha == sha


class TestParseBool:
    """Tests for parse_bool()."""

    @pytest.mark.parametrize('value', ['1', 't', 'T', 'TRUE', 'true', 'True', True])
    def test_true(self, value: str | bool) -> None:
        """Test true."""
        assert parse_bool(value, 'x') is True

    @pytest.mark.parametrize('value', ['0', 'f', 'F', 'FALSE', 'false', 'False', False])
    def test_false(self, value: str | bool) -> None:
        """Test false."""
        assert parse_bool(value, 'x') is False

    @pytest.mark.parametrize('value', ['', 'yes', 'on', 'tRUE'])
    def test_invalid(self, value: str) -> None:
        """Test invalid."""
        with pytest.raises(ConfigError, match='invalid x argument'):
            parse_bool(value, 'x')


class TestConfigFile:
    """Tests for semverkit.toml and [tool.semverkit]."""

    def test_missing(self, tmp_path: Path) -> None:
        """Test missing."""
        assert load_config_file(tmp_path) == {}

    def test_semverkit_toml(self, tmp_path: Path) -> None:
        """Test semverkit toml."""
        (tmp_path / 'semverkit.toml').write_text(
            '# release settings\nprefix = "rel-"\nforce_prerelease = true\nprerelease_id = "beta"\n',
            encoding='utf-8',
        )
        params = load_params({'repo_dir': str(tmp_path)}, env={})
        assert params.prefix == 'rel-'
        assert params.force_prerelease is True
        assert params.prerelease_id == 'beta'

    def test_pyproject_table(self, tmp_path: Path) -> None:
        """Test pyproject table."""
        (tmp_path / 'pyproject.toml').write_text(
            '[project]\nname = "x"\n\n[tool.semverkit]\nbranch_name = "trunk"\n',
            encoding='utf-8',
        )
        assert load_config_file(tmp_path) == {'branch_name': 'trunk'}

    def test_pyproject_without_table(self, tmp_path: Path) -> None:
        """Test pyproject without table."""
        (tmp_path / 'pyproject.toml').write_text('[project]\nname = "x"\n', encoding='utf-8')
        assert load_config_file(tmp_path) == {}

    def test_semverkit_toml_wins(self, tmp_path: Path) -> None:
        """Test semverkit toml wins."""
        (tmp_path / 'semverkit.toml').write_text('prefix = "a-"\n', encoding='utf-8')
        (tmp_path / 'pyproject.toml').write_text('[tool.semverkit]\nprefix = "b-"\n', encoding='utf-8')
        assert load_config_file(tmp_path) == {'prefix': 'a-'}

    def test_unknown_key(self, tmp_path: Path) -> None:
        """Test unknown key."""
        (tmp_path / 'semverkit.toml').write_text('prefx = "v"\n', encoding='utf-8')
        with pytest.raises(ConfigError, match='Unknown key'):
            load_config_file(tmp_path)

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Test invalid toml."""
        (tmp_path / 'semverkit.toml').write_text('prefix = \n', encoding='utf-8')
        with pytest.raises(ConfigError, match='failed to parse'):
            load_config_file(tmp_path)

    def test_wrong_type(self, tmp_path: Path) -> None:
        """Test wrong type."""
        (tmp_path / 'semverkit.toml').write_text('prefix = 1\n', encoding='utf-8')
        with pytest.raises(ConfigError, match='prefix must be a string'):
            load_params({'repo_dir': str(tmp_path)}, env={})


class TestPrecedence:
    """Overrides beat inputs, which beat the config file."""

    def test_order(self, tmp_path: Path) -> None:
        """Test order."""
        (tmp_path / 'semverkit.toml').write_text(
            'prefix = "file-"\nprerelease_id = "file"\nbranch_name = "file"\n',
            encoding='utf-8',
        )
        env = {'INPUT_PRERELEASE_ID': 'input', 'INPUT_BRANCH_NAME': 'input'}
        params = load_params({'repo_dir': str(tmp_path), 'branch_name': 'flag'}, env=env)
        assert params.prefix == 'file-'
        assert params.prerelease_id == 'input'
        assert params.branch_name == 'flag'

    def test_none_override_ignored(self, tmp_path: Path) -> None:
        """Test none override ignored."""
        params = load_params({'repo_dir': str(tmp_path), 'bump': None}, env={'INPUT_BUMP': 'patch'})
        assert params.bump == 'patch'

    def test_false_override_applies(self, tmp_path: Path) -> None:
        """Test false override applies."""
        params = load_params(
            {'repo_dir': str(tmp_path), 'force_prerelease': False},
            env={'INPUT_FORCE_PRERELEASE': 'true'},
        )
        assert params.force_prerelease is False
