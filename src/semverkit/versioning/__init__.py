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

"""Version resolution core.

This subpackage turns a merge (source branch into destination branch)
plus the repository's latest tag into the next semantic version tag.

- :class:`SemVer`: immutable semantic version value.
- :func:`classify`: branch naming convention → :class:`Classification`.
- :func:`resolve_tag`: classification + tags → :class:`~semverkit._types.Result`.
- :func:`reconcile`: reuse a finalized ancestor for docs/misc merges.

Usage::

    from semverkit.versioning import classify, resolve_tag

    cls = classify('auto', 'feature/login', 'main', 'main')
    assert (cls.strategy, cls.magnitude) == (Strategy.BUILD, Magnitude.MINOR)

    result = resolve_tag(
        cls,
        'v0.2.1',
        vcs=git,
        dest_branch='main',
        prefix='v',
        prerelease_id='alpha',
        force_prerelease=True,
    )
    assert result.semver_tag == 'v0.3.0-alpha.1'
"""

from semverkit.versioning._ancestor import (
    TagPattern,
    advance_past,
    final_pattern,
    parse_ancestor,
    prerelease_pattern,
    reconcile,
)
from semverkit.versioning._resolve import prior_build_number, resolve_tag
from semverkit.versioning._semver import MAX_FIELD, PrereleaseField, SemVer
from semverkit.versioning._strategy import (
    BRANCH_RULES,
    BUMP_OVERRIDES,
    BranchRule,
    Classification,
    Magnitude,
    MiscPolicy,
    Strategy,
    classify,
)

__all__ = [
    'BRANCH_RULES',
    'BUMP_OVERRIDES',
    'MAX_FIELD',
    'BranchRule',
    'Classification',
    'Magnitude',
    'MiscPolicy',
    'PrereleaseField',
    'SemVer',
    'Strategy',
    'TagPattern',
    'advance_past',
    'classify',
    'final_pattern',
    'parse_ancestor',
    'prerelease_pattern',
    'prior_build_number',
    'reconcile',
    'resolve_tag',
]
