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

"""Ancestor tag patterns and reconciliation.

An *ancestor tag* is the most recent tag reachable from the destination
branch that matches a ``git describe --match/--exclude`` glob pair. Two
pairs are used::

    prerelease line   include  <prefix>[0-9]*-<id>*
    final releases    include  <prefix>[0-9]*
                      exclude  <prefix>[0-9]*-<id>*

For docs/misc merges the ancestors also decide the tag itself. If the
most recent final release already is the just-computed build's release,
that final tag is reused verbatim instead of minting another build.
Otherwise a new build must land above the most recent prerelease-line
ancestor, so the build counter never repeats or goes backwards.

Pure implementation. No I/O, no logging.
"""

from __future__ import annotations

from dataclasses import dataclass

from semverkit.errors import MalformedTagError, VersionFieldOverflowError
from semverkit.versioning._semver import MAX_FIELD, SemVer

__all__ = [
    'TagPattern',
    'advance_past',
    'final_pattern',
    'parse_ancestor',
    'prerelease_pattern',
    'reconcile',
]


@dataclass(frozen=True)
class TagPattern:
    """A ``git describe`` include/exclude glob pair.

    Attributes:
        include: Glob passed as ``--match``.
        exclude: Glob passed as ``--exclude``; empty for none.
    """

    include: str
    exclude: str = ''


def prerelease_pattern(prefix: str, prerelease_id: str) -> TagPattern:
    """Pattern selecting prerelease tags of the *prerelease_id* line.

    >>> prerelease_pattern('v', 'alpha')
    TagPattern(include='v[0-9]*-alpha*', exclude='')
    """
    return TagPattern(include=f'{prefix}[0-9]*-{prerelease_id}*')


def final_pattern(prefix: str, prerelease_id: str) -> TagPattern:
    """Pattern selecting final release tags only.

    >>> final_pattern('v', 'alpha')
    TagPattern(include='v[0-9]*', exclude='v[0-9]*-alpha*')
    """
    return TagPattern(
        include=f'{prefix}[0-9]*',
        exclude=f'{prefix}[0-9]*-{prerelease_id}*',
    )


def parse_ancestor(tag: str, prefix: str) -> SemVer | None:
    """Parse an ancestor tag name.

    Returns:
        ``None`` when *tag* is empty (no ancestor found).

    Raises:
        MalformedTagError: If a non-empty *tag* is not a semantic version.
    """
    if not tag:
        return None
    try:
        return SemVer.parse_tolerant(tag, prefix)
    except ValueError as exc:
        raise MalformedTagError(tag, str(exc)) from exc


def reconcile(candidate: SemVer, ancestor: SemVer | None) -> SemVer | None:
    """Return *ancestor* if it is the already-finalized release of *candidate*.

    Only a final ancestor is reused. A prerelease ancestor would repeat
    or rewind the build counter.

    Returns:
        The ancestor to reuse, or ``None`` when a new build should be cut.
    """
    if ancestor is None or ancestor.is_prerelease:
        return None
    if ancestor.finalize() == candidate.finalize():
        return ancestor
    return None


def advance_past(candidate: SemVer, ancestor: SemVer | None, prerelease_id: str) -> SemVer:
    """Move *candidate*'s build counter above a prerelease-line *ancestor*.

    *candidate* is returned unchanged unless *ancestor* is a build of the
    same release and identifier whose counter is not below the
    candidate's.

    >>> advance_past(SemVer(1, 0, 0, ('alpha', 2)), SemVer(1, 0, 0, ('alpha', 4)), 'alpha')
    SemVer(major=1, minor=0, patch=0, prerelease=('alpha', 5), build=())

    Raises:
        VersionFieldOverflowError: If the ancestor's counter is at its maximum.
    """
    if ancestor is None or ancestor.finalize() != candidate.finalize():
        return candidate
    if len(ancestor.prerelease) < 2 or ancestor.prerelease[0] != prerelease_id:
        return candidate
    counter = ancestor.prerelease[1]
    current = candidate.prerelease[1] if len(candidate.prerelease) > 1 else 0
    if not isinstance(counter, int) or not isinstance(current, int) or counter < current:
        return candidate
    if counter >= MAX_FIELD:
        raise VersionFieldOverflowError(f'failed to create new build version: counter {counter} overflows')
    return candidate.with_prerelease(prerelease_id, counter + 1)
