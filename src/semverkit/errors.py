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

"""Error types for semverkit.

Every failure the tool can surface derives from :class:`SemverKitError`
and carries a stable :class:`ErrorCode` plus an optional hint that the
CLI prints alongside the message.

Nothing in the resolution core catches these: each one is terminal for
the current invocation and propagates to :func:`semverkit.cli.main`,
which logs it and exits with status 1.
"""

from __future__ import annotations

from enum import Enum

__all__ = [
    'BranchResolutionError',
    'ConfigError',
    'ErrorCode',
    'GitCommandError',
    'MalformedTagError',
    'NotARepositoryError',
    'RepositorySafetyError',
    'SemverKitError',
    'UnrecognizedBumpStrategyError',
    'VersionFieldOverflowError',
]


class ErrorCode(str, Enum):
    """Stable identifiers for every error kind."""

    CONFIG = 'SK001'
    GIT_COMMAND = 'SK002'
    REPOSITORY_SAFETY = 'SK100'
    NOT_A_REPOSITORY = 'SK101'
    BRANCH_RESOLUTION = 'SK102'
    UNRECOGNIZED_BUMP_STRATEGY = 'SK200'
    MALFORMED_TAG = 'SK201'
    VERSION_FIELD_OVERFLOW = 'SK202'


class SemverKitError(Exception):
    """Base class for all semverkit errors.

    Attributes:
        code: The :class:`ErrorCode` identifying the failure.
        message: Human-readable description.
        hint: Optional remediation advice.
    """

    code: ErrorCode = ErrorCode.CONFIG

    def __init__(self, message: str, *, hint: str = '', code: ErrorCode | None = None) -> None:
        """Initialize the error with a message and optional hint."""
        super().__init__(message)
        self.message = message
        self.hint = hint
        if code is not None:
            self.code = code

    def __str__(self) -> str:
        """Return the bare message, without code or hint."""
        return self.message


class ConfigError(SemverKitError):
    """Invalid parameter or configuration value."""

    code = ErrorCode.CONFIG


class GitCommandError(SemverKitError):
    """A git subprocess exited non-zero or could not be started.

    Attributes:
        command: The argv that was executed.
        stderr: Captured standard error, stripped.
    """

    code = ErrorCode.GIT_COMMAND

    def __init__(self, command: list[str], stderr: str = '', *, hint: str = '') -> None:
        """Initialize from the failed command and its stderr."""
        self.command = list(command)
        self.stderr = stderr.strip()
        detail = f': {self.stderr}' if self.stderr else ''
        super().__init__(f'{" ".join(self.command)} failed{detail}', hint=hint)


class RepositorySafetyError(SemverKitError):
    """The repository could not be marked as a safe directory."""

    code = ErrorCode.REPOSITORY_SAFETY


class NotARepositoryError(SemverKitError):
    """The working directory is not inside a git repository."""

    code = ErrorCode.NOT_A_REPOSITORY


class BranchResolutionError(SemverKitError):
    """The current or source branch could not be determined."""

    code = ErrorCode.BRANCH_RESOLUTION


class UnrecognizedBumpStrategyError(SemverKitError):
    """No branch naming convention matched and no bump override was given.

    Attributes:
        source_branch: The branch being merged.
        dest_branch: The branch being merged into.
        mainline_branch: The configured mainline branch.
    """

    code = ErrorCode.UNRECOGNIZED_BUMP_STRATEGY

    def __init__(self, source_branch: str, dest_branch: str, mainline_branch: str) -> None:
        """Initialize from the branch names that failed to classify."""
        self.source_branch = source_branch
        self.dest_branch = dest_branch
        self.mainline_branch = mainline_branch
        super().__init__(
            f'invalid bump strategy: source={source_branch!r} dest={dest_branch!r} mainline={mainline_branch!r}',
            hint=(
                'Name the source branch bugfix/, feature/, major/, doc/, docs/ or misc/ and merge it '
                'into the mainline branch, or pass an explicit bump (major, minor, patch).'
            ),
        )


class MalformedTagError(SemverKitError):
    """A tag could not be parsed as a semantic version.

    Attributes:
        tag: The offending tag string.
    """

    code = ErrorCode.MALFORMED_TAG

    def __init__(self, tag: str, reason: str = '') -> None:
        """Initialize from the offending tag and the parser's reason."""
        self.tag = tag
        detail = f': {reason}' if reason else ''
        super().__init__(f'failed to parse tag {tag!r} or not valid semantic version{detail}')


class VersionFieldOverflowError(SemverKitError):
    """A version field or build counter cannot be incremented further."""

    code = ErrorCode.VERSION_FIELD_OVERFLOW
