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

"""Compute the semantic version tag for the merge being built.

:func:`tag` is the entry point tests drive with a fake
:class:`~semverkit.vcs.VersionControl`; :func:`run` wires it to the
real parameters and git.
"""

from __future__ import annotations

from semverkit._types import Result
from semverkit.config import Params, load_params
from semverkit.errors import (
    BranchResolutionError,
    GitCommandError,
    NotARepositoryError,
    RepositorySafetyError,
)
from semverkit.logging import enable_debug, get_logger
from semverkit.vcs import Git, VersionControl
from semverkit.versioning import classify, resolve_tag

__all__ = [
    'run',
    'tag',
]

logger = get_logger(__name__)


def run(params: Params | None = None) -> Result:
    """Load parameters, open the repository and compute the tag.

    A ``debug`` parameter lowers the log level without replacing the
    output already set up by :func:`~semverkit.logging.configure_logging`.

    Args:
        params: Pre-loaded parameters; loaded via
            :func:`~semverkit.config.load_params` when ``None``.
    """
    if params is None:
        params = load_params()

    if params.debug:
        enable_debug()
        logger.debug('debug logs enabled')

    logger.debug('params', **params.describe())

    return tag(params, Git(params.repo_dir))


def tag(params: Params, vcs: VersionControl) -> Result:
    """Return the calculated semantic version for *params* against *vcs*.

    Raises:
        RepositorySafetyError: If the repository cannot be marked safe.
        NotARepositoryError: If the repo dir is not a git work tree.
        BranchResolutionError: If either branch cannot be determined.
        UnrecognizedBumpStrategyError: If the merge matches no convention.
        MalformedTagError: If a tag is not a semantic version.
        VersionFieldOverflowError: If a field cannot be incremented.
    """
    try:
        vcs.make_safe()
    except GitCommandError as exc:
        raise RepositorySafetyError(f'failed to make safe: {exc}') from exc

    if not vcs.is_repo():
        raise NotARepositoryError(
            'current folder is not a git repository',
            hint='Run from a checkout or pass --repo-dir.',
        )

    try:
        dest = vcs.current_branch()
    except GitCommandError as exc:
        raise BranchResolutionError(f'failed to extract dest branch from commit: {exc}') from exc
    logger.debug('dest_branch', branch=dest)

    try:
        source = vcs.source_branch(params.commit_sha)
    except GitCommandError as exc:
        raise BranchResolutionError(f'failed to extract source branch from commit: {exc}') from exc
    logger.debug('source_branch', branch=source)

    classification = classify(
        params.bump,
        source,
        dest,
        params.branch_name,
        misc_policy=params.misc_policy,
    )
    logger.debug(
        'bump_strategy',
        strategy=classification.strategy.value,
        magnitude=classification.magnitude.value,
        non_versioning=classification.non_versioning,
    )

    if classification.is_noop:
        return Result()

    return resolve_tag(
        classification,
        vcs.latest_tag(),
        vcs=vcs,
        dest_branch=dest,
        prefix=params.prefix,
        prerelease_id=params.prerelease_id,
        force_prerelease=params.force_prerelease,
        base_version=params.base_version,
    )
