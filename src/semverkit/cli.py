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

"""Command-line interface for semverkit.

Usage::

    semverkit --prerelease-id alpha --force-prerelease
    semverkit --bump minor --base-version v4.2.0
    python -m semverkit --repo-dir ../service --json-log

Flags override ``INPUT_*`` action inputs, which override
``semverkit.toml``. Exit status is 0 on success (including "no
release"), 1 on any semverkit error and 2 on usage errors.
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from typing import Any

from semverkit import __version__
from semverkit.config import load_params
from semverkit.errors import SemverKitError
from semverkit.generate import run
from semverkit.logging import configure_logging, get_logger
from semverkit.outputs import print_error, render_summary, write_outputs
from semverkit.versioning import BUMP_OVERRIDES, MiscPolicy

__all__ = [
    'build_parser',
    'main',
]

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog='semverkit',
        description='Compute the next semantic version tag from the branch being merged.',
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--repo-dir', help='Repository directory (default: .).')
    parser.add_argument('--commit-sha', help='Merge commit to inspect (default: $GITHUB_SHA, else HEAD).')
    parser.add_argument('--bump', choices=BUMP_OVERRIDES, help='Bump strategy (default: auto).')
    parser.add_argument('--base-version', help='Start from this version instead of the latest tag.')
    parser.add_argument('--prefix', help='Tag prefix (default: v).')
    parser.add_argument('--prerelease-id', help='Prerelease identifier (default: pre).')
    parser.add_argument(
        '--force-prerelease',
        action=argparse.BooleanOptionalAction,
        default=None,
        help='Keep prerelease fields on the computed tag.',
    )
    parser.add_argument('--branch-name', help='Mainline branch name (default: main).')
    parser.add_argument(
        '--misc-policy',
        choices=[p.value for p in MiscPolicy],
        help='What docs/misc merges produce (default: build).',
    )
    parser.add_argument('--debug', action='store_true', default=None, help='Enable debug logging.')
    parser.add_argument('--quiet', action='store_true', help='Only log warnings and errors.')
    parser.add_argument('--json-log', action='store_true', help='Emit logs as JSON lines.')
    parser.add_argument('--no-summary', action='store_true', help='Do not print the summary table.')
    return parser


def _overrides(args: argparse.Namespace) -> dict[str, Any]:
    return {
        'repo_dir': args.repo_dir,
        'commit_sha': args.commit_sha,
        'bump': args.bump,
        'base_version': args.base_version,
        'prefix': args.prefix,
        'prerelease_id': args.prerelease_id,
        'force_prerelease': args.force_prerelease,
        'branch_name': args.branch_name,
        'misc_policy': args.misc_policy,
        'debug': args.debug,
    }


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return the process exit status."""
    args = build_parser().parse_args(argv)
    configure_logging(verbose=bool(args.debug), quiet=args.quiet, json_log=args.json_log)

    try:
        params = load_params(_overrides(args))
        result = run(params)
    except SemverKitError as exc:
        logger.error('semverkit_failed', code=exc.code.value, error=exc.message, hint=exc.hint)
        if not args.json_log:
            print_error(exc)
        return 1

    write_outputs(result)
    logger.info('tag_computed', tag=result.semver_tag, prerelease=result.is_prerelease)
    if not args.no_summary:
        render_summary(result)
    return 0
