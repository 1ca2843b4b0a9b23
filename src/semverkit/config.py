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

"""Parameter loading for semverkit.

Parameters are merged from four sources, lowest precedence first::

    ┌──────────────────────────┬───────────────────────────────────────────┐
    │ Source                   │ Example                                   │
    ├──────────────────────────┼───────────────────────────────────────────┤
    │ Built-in defaults        │ prefix = "v", prerelease_id = "pre"       │
    ├──────────────────────────┼───────────────────────────────────────────┤
    │ semverkit.toml, or       │ prefix = "release-"                       │
    │ [tool.semverkit] in      │ force_prerelease = true                   │
    │ pyproject.toml           │                                           │
    ├──────────────────────────┼───────────────────────────────────────────┤
    │ GitHub Actions inputs    │ INPUT_BUMP=minor, GITHUB_SHA=81918ffc     │
    ├──────────────────────────┼───────────────────────────────────────────┤
    │ Explicit overrides (CLI) │ --prerelease-id alpha                     │
    └──────────────────────────┴───────────────────────────────────────────┘

Every value is validated once, here; the resolution core trusts
:class:`Params` as given.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import ParseError

from semverkit.errors import ConfigError
from semverkit.logging import get_logger
from semverkit.versioning import BUMP_OVERRIDES, MiscPolicy, SemVer

__all__ = [
    'CONFIG_FILE',
    'Params',
    'get_input',
    'load_config_file',
    'load_params',
    'parse_bool',
]

logger = get_logger(__name__)

CONFIG_FILE = 'semverkit.toml'

_COMMIT_SHA_RE: re.Pattern[str] = re.compile(r'\b[0-9a-f]{5,40}\b')
# A semver prerelease identifier that is not purely numeric.
_PRERELEASE_ID_RE: re.Pattern[str] = re.compile(r'^[0-9A-Za-z-]*[A-Za-z-][0-9A-Za-z-]*$')

_TRUE_STRINGS = frozenset({'1', 't', 'T', 'TRUE', 'true', 'True'})
_FALSE_STRINGS = frozenset({'0', 'f', 'F', 'FALSE', 'false', 'False'})

# Keys accepted in semverkit.toml / [tool.semverkit].
_FILE_KEYS: frozenset[str] = frozenset({
    'base_version',
    'branch_name',
    'bump',
    'debug',
    'force_prerelease',
    'misc_policy',
    'prefix',
    'prerelease_id',
})
_BOOL_KEYS: frozenset[str] = frozenset({'debug', 'force_prerelease'})

_DEFAULTS: dict[str, Any] = {
    'repo_dir': '.',
    'bump': 'auto',
    'prefix': 'v',
    'prerelease_id': 'pre',
    'force_prerelease': False,
    'branch_name': 'main',
    'debug': False,
    'misc_policy': MiscPolicy.BUILD.value,
    'base_version': '',
}


@dataclass(frozen=True)
class Params:
    """Validated parameters for one tag computation.

    Attributes:
        commit_sha: The merge commit to inspect; empty means ``HEAD``.
        repo_dir: Repository working directory.
        bump: ``auto`` to follow branch naming, or a forced
            ``major``/``minor``/``patch``.
        base_version: Starting value used instead of the latest tag.
        prefix: Tag prefix, e.g. ``"v"``.
        prerelease_id: First prerelease identifier, e.g. ``"alpha"``.
        force_prerelease: Keep prerelease fields on the computed tag.
        branch_name: The mainline branch name.
        debug: Enable debug logging.
        misc_policy: What docs/misc merges into mainline produce.
    """

    commit_sha: str = ''
    repo_dir: str = '.'
    bump: str = 'auto'
    base_version: SemVer | None = None
    prefix: str = 'v'
    prerelease_id: str = 'pre'
    force_prerelease: bool = False
    branch_name: str = 'main'
    debug: bool = False
    misc_policy: MiscPolicy = MiscPolicy.BUILD

    def describe(self) -> dict[str, Any]:
        """Return the parameters as plain values for structured logging."""
        return {
            'commit_sha': self.commit_sha,
            'bump': self.bump,
            'base_version': str(self.base_version) if self.base_version is not None else '',
            'prefix': self.prefix,
            'prerelease_id': self.prerelease_id,
            'force_prerelease': self.force_prerelease,
            'branch_name': self.branch_name,
            'repo_dir': self.repo_dir,
            'misc_policy': self.misc_policy.value,
            'debug': self.debug,
        }


def get_input(name: str, env: Mapping[str, str] | None = None) -> str:
    """Read a GitHub Actions input (``INPUT_<NAME>``) from the environment.

    >>> get_input('prerelease_id', {'INPUT_PRERELEASE_ID': ' alpha '})
    'alpha'
    """
    env = os.environ if env is None else env
    return env.get(f'INPUT_{name.replace(" ", "_").upper()}', '').strip()


def parse_bool(value: str | bool, name: str) -> bool:
    """Parse a boolean the way GitHub Actions inputs spell them.

    Raises:
        ConfigError: If *value* is not a recognized boolean spelling.
    """
    if isinstance(value, bool):
        return value
    if value in _TRUE_STRINGS:
        return True
    if value in _FALSE_STRINGS:
        return False
    raise ConfigError(f'invalid {name} argument: {value}', hint='Use true or false.')


def load_config_file(repo_dir: Path | str) -> dict[str, Any]:
    """Load settings from ``semverkit.toml`` or ``[tool.semverkit]``.

    ``semverkit.toml`` wins when both exist. A missing file yields ``{}``.

    Raises:
        ConfigError: On unparseable TOML or unknown keys.
    """
    root = Path(repo_dir)
    config_path = root / CONFIG_FILE
    pyproject_path = root / 'pyproject.toml'

    if config_path.is_file():
        data = _read_toml(config_path)
        section = CONFIG_FILE
    elif pyproject_path.is_file():
        data = _read_toml(pyproject_path).get('tool', {}).get('semverkit', {})
        section = 'tool.semverkit'
    else:
        return {}

    if not isinstance(data, dict):
        raise ConfigError(f'{section} must be a table')
    unknown = sorted(set(data) - _FILE_KEYS)
    if unknown:
        raise ConfigError(
            f'Unknown key(s) in {section}: {", ".join(unknown)}',
            hint=f'Valid keys: {", ".join(sorted(_FILE_KEYS))}',
        )
    logger.debug('config_file_loaded', section=section, keys=sorted(data))
    return data


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        return tomlkit.parse(path.read_text(encoding='utf-8')).unwrap()
    except ParseError as exc:
        raise ConfigError(f'failed to parse {path}: {exc}') from exc


def _as_str(value: Any, name: str) -> str:  # noqa: ANN401
    if not isinstance(value, str):
        raise ConfigError(f'{name} must be a string')
    return value.strip()


def load_params(
    overrides: Mapping[str, Any] | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> Params:
    """Merge and validate parameters from every source.

    Args:
        overrides: Highest-precedence values keyed by :class:`Params`
            field name. ``None`` values are ignored.
        env: Environment to read inputs from; defaults to ``os.environ``.

    Returns:
        The validated :class:`Params`.

    Raises:
        ConfigError: If any value is invalid.
    """
    env = os.environ if env is None else env
    explicit = {k: v for k, v in (overrides or {}).items() if v is not None and v != ''}

    repo_dir = explicit.get('repo_dir') or get_input('repo_dir', env) or _DEFAULTS['repo_dir']

    raw: dict[str, Any] = dict(_DEFAULTS)
    raw.update(load_config_file(repo_dir))
    for key in _FILE_KEYS:
        value = get_input(key, env)
        if value:
            raw[key] = value
    raw.update(explicit)
    raw['repo_dir'] = repo_dir

    commit_sha = _as_str(explicit.get('commit_sha') or env.get('GITHUB_SHA', ''), 'commit_sha')
    if commit_sha and not _COMMIT_SHA_RE.search(commit_sha):
        raise ConfigError(f'invalid commit-sha format: {commit_sha}')

    bump = _as_str(raw['bump'], 'bump')
    if bump not in BUMP_OVERRIDES:
        raise ConfigError(f'invalid bump value: {bump}', hint=f'Use one of: {", ".join(BUMP_OVERRIDES)}')

    prefix = _as_str(raw['prefix'], 'prefix')

    prerelease_id = _as_str(raw['prerelease_id'], 'prerelease_id')
    if not _PRERELEASE_ID_RE.match(prerelease_id):
        raise ConfigError(
            f'invalid prerelease_id: {prerelease_id!r}',
            hint='Use letters, digits and hyphens, with at least one non-digit (e.g. alpha, rc).',
        )

    branch_name = _as_str(raw['branch_name'], 'branch_name')
    if not branch_name:
        raise ConfigError('branch_name must not be empty')

    misc_policy_str = _as_str(raw['misc_policy'], 'misc_policy')
    try:
        misc_policy = MiscPolicy(misc_policy_str)
    except ValueError as exc:
        raise ConfigError(f'invalid misc_policy value: {misc_policy_str}', hint='Use build or skip.') from exc

    base_version: SemVer | None = None
    base_version_str = _as_str(raw['base_version'], 'base_version')
    if base_version_str:
        if prefix and base_version_str.startswith(prefix):
            base_version_str = base_version_str[len(prefix) :]
        try:
            base_version = SemVer.parse(base_version_str)
        except ValueError as exc:
            raise ConfigError(f'invalid base_version format: {base_version_str}') from exc

    return Params(
        commit_sha=commit_sha,
        repo_dir=str(repo_dir),
        bump=bump,
        base_version=base_version,
        prefix=prefix,
        prerelease_id=prerelease_id,
        force_prerelease=parse_bool(raw['force_prerelease'], 'force_prerelease'),
        branch_name=branch_name,
        debug=parse_bool(raw['debug'], 'debug'),
        misc_policy=misc_policy,
    )
