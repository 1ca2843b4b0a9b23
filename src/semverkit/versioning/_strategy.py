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

"""Branch naming convention classifier.

Maps the branch being merged onto a bump strategy. The rules are an
ordered table; the first rule whose pattern matches the source branch
wins, and rules only apply when the destination is the mainline branch.

Key Concepts::

    ┌─────────────────────┬────────────────────────────────────────────────┐
    │ Concept             │ ELI5 Explanation                               │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ Strategy            │ What kind of tag to cut: a prerelease "build"  │
    │                     │ or a plain major/minor/patch release.          │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ Magnitude           │ Which field a build also bumps. A feature      │
    │                     │ branch bumps minor, a bugfix bumps patch.      │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ Non-versioning      │ docs/misc branches: they cut a build but never │
    │                     │ bump a field; only the build counter moves.    │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ Label marker        │ Merge tooling may rewrite ``feature/x`` as     │
    │                     │ ``owner:feature/x``; the label is ignored.     │
    └─────────────────────┴────────────────────────────────────────────────┘

Rule table (source branch merged into mainline, ``bump=auto``)::

    bugfix/...      → (build, patch)
    feature/...     → (build, minor)
    major/...       → (build, major)
    doc/... docs/...→ (build, none)  non-versioning   [misc_policy=build]
    misc/...        → (build, none)  non-versioning   [misc_policy=build]
    doc/misc        → (none,  none)  no release       [misc_policy=skip]

Pure implementation. No I/O, no logging.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from semverkit.errors import ConfigError, UnrecognizedBumpStrategyError

__all__ = [
    'BRANCH_RULES',
    'BUMP_OVERRIDES',
    'BranchRule',
    'Classification',
    'Magnitude',
    'MiscPolicy',
    'Strategy',
    'classify',
]

# Accepted values for the ``bump`` parameter.
BUMP_OVERRIDES: tuple[str, ...] = ('auto', 'major', 'minor', 'patch')


class Strategy(Enum):
    """How the next tag is produced."""

    BUILD = 'build'
    MAJOR = 'major'
    MINOR = 'minor'
    PATCH = 'patch'
    NONE = ''


class Magnitude(Enum):
    """Which version field a build also increments."""

    MAJOR = 'major'
    MINOR = 'minor'
    PATCH = 'patch'
    NONE = ''


class MiscPolicy(Enum):
    """What a docs/misc merge into mainline produces."""

    BUILD = 'build'
    SKIP = 'skip'


@dataclass(frozen=True)
class Classification:
    """Outcome of :func:`classify`.

    Attributes:
        strategy: The bump strategy.
        magnitude: The field a ``build`` strategy also bumps.
        non_versioning: ``True`` for docs/misc merges, which are
            reconciled against the ancestor tag before a new build
            is minted.
    """

    strategy: Strategy
    magnitude: Magnitude = Magnitude.NONE
    non_versioning: bool = False

    @property
    def is_noop(self) -> bool:
        """``True`` when no tag should be produced at all."""
        return self.strategy is Strategy.NONE and self.magnitude is Magnitude.NONE


@dataclass(frozen=True)
class BranchRule:
    """A single branch naming convention.

    Attributes:
        name: Short name used in debug logs.
        pattern: Compiled, case-insensitive source branch pattern.
        magnitude: Field bumped by a match.
        non_versioning: Whether a match is a docs/misc merge.
    """

    name: str
    pattern: re.Pattern[str]
    magnitude: Magnitude
    non_versioning: bool = False

    def matches(self, branch: str) -> bool:
        """Return ``True`` if *branch* follows this convention."""
        return self.pattern.match(branch) is not None


def _branch_pattern(kind: str) -> re.Pattern[str]:
    # Optional "<label>:" lead-in, then "<kind>/<anything>".
    return re.compile(rf'^(.+:)?({kind}/.+)', re.IGNORECASE)


BRANCH_RULES: tuple[BranchRule, ...] = (
    BranchRule('bugfix', _branch_pattern('bugfix'), Magnitude.PATCH),
    BranchRule('feature', _branch_pattern('feature'), Magnitude.MINOR),
    BranchRule('major', _branch_pattern('major'), Magnitude.MAJOR),
    BranchRule('docs', _branch_pattern('docs?'), Magnitude.NONE, non_versioning=True),
    BranchRule('misc', _branch_pattern('misc'), Magnitude.NONE, non_versioning=True),
)


def classify(
    bump: str,
    source_branch: str,
    dest_branch: str,
    mainline_branch: str,
    *,
    misc_policy: MiscPolicy = MiscPolicy.BUILD,
) -> Classification:
    """Determine the bump strategy for merging *source_branch* into *dest_branch*.

    An explicit *bump* other than ``"auto"`` always wins and the branch
    names are not consulted.

    Args:
        bump: ``auto``, ``major``, ``minor`` or ``patch``.
        source_branch: The branch being merged.
        dest_branch: The branch being merged into.
        mainline_branch: The configured mainline branch name.
        misc_policy: Outcome for docs/misc merges.

    Returns:
        The :class:`Classification` for the merge.

    Raises:
        ConfigError: If *bump* is not one of :data:`BUMP_OVERRIDES`.
        UnrecognizedBumpStrategyError: If ``bump == "auto"`` and no rule
            applies, including any merge into a non-mainline branch.
    """
    if bump not in BUMP_OVERRIDES:
        raise ConfigError(
            f'invalid bump value: {bump!r}',
            hint=f'Use one of: {", ".join(BUMP_OVERRIDES)}.',
        )
    if bump != 'auto':
        return Classification(Strategy(bump))

    if dest_branch == mainline_branch:
        for rule in BRANCH_RULES:
            if not rule.matches(source_branch):
                continue
            if rule.non_versioning and misc_policy is MiscPolicy.SKIP:
                return Classification(Strategy.NONE)
            return Classification(Strategy.BUILD, rule.magnitude, non_versioning=rule.non_versioning)

    raise UnrecognizedBumpStrategyError(source_branch, dest_branch, mainline_branch)
