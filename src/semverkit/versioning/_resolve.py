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

"""Tag resolution: from classification and repository facts to a tag.

Resolution runs in a fixed order::

    latest tag ──parse──▶ starting value ──(base_version override)
                                 │
                          bump the field named by the magnitude
                                 │
              ┌──────────────────┴──────────────────┐
          strategy=build                     strategy=major/minor/patch
      <id>.<prior counter + 1>                  value as bumped
              │                                      │
              └───────── force_prerelease off? ──────┘
                          finalize, final pattern
                                 │
                        ancestor tag lookup

Docs/misc (non-versioning) merges leave that path after the build step.
They reuse the final release tag when :func:`semverkit.versioning.reconcile`
finds one for the same release. Otherwise they cut a build placed above
the prerelease-line ancestor by :func:`semverkit.versioning.advance_past`,
or produce no release when prereleases are off.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from semverkit._types import Result
from semverkit.errors import MalformedTagError, VersionFieldOverflowError
from semverkit.logging import get_logger
from semverkit.versioning._ancestor import (
    TagPattern,
    advance_past,
    final_pattern,
    parse_ancestor,
    prerelease_pattern,
    reconcile,
)
from semverkit.versioning._semver import MAX_FIELD, SemVer
from semverkit.versioning._strategy import Classification, Magnitude, Strategy

if TYPE_CHECKING:
    from semverkit.vcs import VersionControl

__all__ = [
    'prior_build_number',
    'resolve_tag',
]

logger = get_logger(__name__)

_EXPLICIT_STRATEGIES: frozenset[Strategy] = frozenset({Strategy.MAJOR, Strategy.MINOR, Strategy.PATCH})


def prior_build_number(version: SemVer, magnitude: Magnitude) -> int:
    """Return the build counter a new build continues from.

    The counter continues only when *version* already carries an
    ``<id>.<counter>`` pair and no field is being bumped. Any field bump
    starts a new prerelease line at zero. A non-numeric second field
    counts as zero.

    >>> prior_build_number(SemVer(0, 2, 1, ('alpha', 1)), Magnitude.NONE)
    1
    >>> prior_build_number(SemVer(0, 2, 1, ('alpha', 1)), Magnitude.MINOR)
    0
    """
    if len(version.prerelease) > 1 and magnitude is Magnitude.NONE:
        counter = version.prerelease[1]
        return counter if isinstance(counter, int) else 0
    return 0


def _bump(version: SemVer, magnitude: Magnitude) -> SemVer:
    try:
        if magnitude is Magnitude.MAJOR:
            return version.increment_major()
        if magnitude is Magnitude.MINOR:
            return version.increment_minor()
        if magnitude is Magnitude.PATCH:
            return version.increment_patch()
    except OverflowError as exc:
        raise VersionFieldOverflowError(f'failed to increment {magnitude.value} version: {exc}') from exc
    return version


def _parse_latest(latest_tag: str, prefix: str) -> SemVer:
    if not latest_tag:
        return SemVer()
    try:
        return SemVer.parse_tolerant(latest_tag, prefix)
    except ValueError as exc:
        raise MalformedTagError(latest_tag, str(exc)) from exc


def resolve_tag(
    classification: Classification,
    latest_tag: str,
    *,
    vcs: VersionControl,
    dest_branch: str,
    prefix: str,
    prerelease_id: str,
    force_prerelease: bool,
    base_version: SemVer | None = None,
) -> Result:
    """Compute the next tag for a classified merge.

    Args:
        classification: Output of :func:`semverkit.versioning.classify`.
        latest_tag: Most recent tag in the repository, or ``""``.
        vcs: Provider used for the ancestor tag lookup.
        dest_branch: Branch the ancestor tag must be reachable from.
        prefix: Tag prefix, e.g. ``"v"``.
        prerelease_id: First prerelease identifier, e.g. ``"alpha"``.
        force_prerelease: Keep prerelease fields on the result. When
            ``False`` the bumped value is finalized.
        base_version: Starting value to use instead of the latest tag.

    Returns:
        The computed :class:`~semverkit._types.Result`; all-empty when
        the merge produces no release.

    Raises:
        MalformedTagError: If the latest or ancestor tag is unparseable.
        VersionFieldOverflowError: If a field or counter overflows.
    """
    if classification.is_noop:
        logger.debug('no_release', reason='classification has no strategy')
        return Result()

    strategy = classification.strategy
    magnitude = classification.magnitude

    latest = _parse_latest(latest_tag, prefix)
    previous_tag = latest.format(prefix)
    version = base_version if base_version is not None else latest
    logger.debug('starting_version', previous_tag=previous_tag, start=str(version))

    if strategy in _EXPLICIT_STRATEGIES:
        version = _bump(version, Magnitude(strategy.value))
    elif strategy is Strategy.BUILD:
        version = _bump(version, magnitude)

    pattern: TagPattern
    if strategy is Strategy.BUILD:
        counter = prior_build_number(version, magnitude)
        if counter >= MAX_FIELD:
            raise VersionFieldOverflowError(f'failed to create new build version: counter {counter} overflows')
        version = version.with_prerelease(prerelease_id, counter + 1)
        pattern = prerelease_pattern(prefix, prerelease_id)
    elif version.is_prerelease:
        pattern = prerelease_pattern(prefix, prerelease_id)
    else:
        pattern = final_pattern(prefix, prerelease_id)

    if classification.non_versioning:
        return _resolve_non_versioning(
            version,
            vcs=vcs,
            dest_branch=dest_branch,
            prefix=prefix,
            prerelease_id=prerelease_id,
            force_prerelease=force_prerelease,
            previous_tag=previous_tag,
        )

    if not force_prerelease:
        version = version.finalize()
        pattern = final_pattern(prefix, prerelease_id)

    ancestor_tag = vcs.ancestor_tag(pattern.include, pattern.exclude, dest_branch)
    logger.debug('ancestor_tag', include=pattern.include, exclude=pattern.exclude, tag=ancestor_tag)

    return Result(
        previous_tag=previous_tag,
        ancestor_tag=ancestor_tag,
        semver_tag=version.format(prefix),
        is_prerelease=version.is_prerelease,
    )


def _resolve_non_versioning(
    candidate: SemVer,
    *,
    vcs: VersionControl,
    dest_branch: str,
    prefix: str,
    prerelease_id: str,
    force_prerelease: bool,
    previous_tag: str,
) -> Result:
    final = final_pattern(prefix, prerelease_id)
    final_tag = vcs.ancestor_tag(final.include, final.exclude, dest_branch)
    logger.debug('ancestor_tag', include=final.include, exclude=final.exclude, tag=final_tag)

    reused = reconcile(candidate, parse_ancestor(final_tag, prefix))
    if reused is not None:
        logger.debug('reusing_ancestor', candidate=str(candidate), ancestor=final_tag)
        return Result(
            previous_tag=previous_tag,
            ancestor_tag=final_tag,
            semver_tag=reused.format(prefix),
            is_prerelease=False,
        )

    if not force_prerelease:
        logger.debug('no_release', reason='non-versioning merge without prerelease')
        return Result()

    pattern = prerelease_pattern(prefix, prerelease_id)
    ancestor_tag = vcs.ancestor_tag(pattern.include, pattern.exclude, dest_branch)
    logger.debug('ancestor_tag', include=pattern.include, exclude=pattern.exclude, tag=ancestor_tag)

    version = advance_past(candidate, parse_ancestor(ancestor_tag, prefix), prerelease_id)
    return Result(
        previous_tag=previous_tag,
        ancestor_tag=ancestor_tag,
        semver_tag=version.format(prefix),
        is_prerelease=True,
    )
