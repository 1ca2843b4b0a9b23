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

"""Semantic version value used by tag resolution.

:class:`SemVer` is an immutable value: every operation returns a new
instance. Parsing and validation are delegated to the `semver
<https://python-semver.readthedocs.io/>`_ package; this module only adds
the pieces tag resolution depends on:

- Prerelease identifiers are kept as an ordered tuple of fields, where
  numeric identifiers are ``int`` so the build counter can be read back
  without re-parsing (``1.2.3-alpha.4`` has ``prerelease == ('alpha', 4)``).
- ``increment_*`` follow the field-reset rules of semver but leave the
  prerelease and build metadata untouched. Callers that want a plain
  release call :meth:`SemVer.finalize` explicitly.
- :meth:`SemVer.parse_tolerant` accepts the loose forms found in real
  tag lists: a tag prefix, a leading ``v``, missing minor or patch
  fields, and leading zeros in the core fields.

Pure implementation. No I/O, no logging.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace

import semver

__all__ = [
    'MAX_FIELD',
    'PrereleaseField',
    'SemVer',
]

# Largest value any numeric field may hold (unsigned 64-bit).
MAX_FIELD = 2**64 - 1

PrereleaseField = str | int

_TOLERANT_RE: re.Pattern[str] = re.compile(
    r'^(?P<core>\d+(?:\.\d+){0,2})'  # 1, 1.2 or 1.2.3
    r'(?P<rest>[-+].*)?$',  # optional prerelease / build
)
_LEADING_JUNK_RE: re.Pattern[str] = re.compile(r'^[^0-9]+')


def _split_prerelease(text: str | None) -> tuple[PrereleaseField, ...]:
    if not text:
        return ()
    return tuple(int(part) if part.isdigit() else part for part in text.split('.'))


@dataclass(frozen=True)
class SemVer:
    """An immutable semantic version.

    Attributes:
        major: Major version field.
        minor: Minor version field.
        patch: Patch version field.
        prerelease: Ordered prerelease identifiers; numeric ones are ints.
        build: Build metadata identifiers (ignored by :meth:`finalize`).
    """

    major: int = 0
    minor: int = 0
    patch: int = 0
    prerelease: tuple[PrereleaseField, ...] = ()
    build: tuple[str, ...] = ()

    @classmethod
    def parse(cls, text: str) -> SemVer:
        """Parse a strict ``MAJOR.MINOR.PATCH[-pre][+build]`` string.

        Raises:
            ValueError: If *text* is not a valid semantic version.
        """
        return cls.from_semver(semver.Version.parse(text))

    @classmethod
    def parse_tolerant(cls, text: str, prefix: str = '') -> SemVer:
        """Parse a tag name that may carry a prefix or be loosely formatted.

        ``v1.2``, ``release-01.2.3-alpha.1`` and ``1.2.3`` are all accepted.
        Missing minor/patch fields default to zero.

        Args:
            text: The tag or version string.
            prefix: Tag prefix to strip first, if present.

        Raises:
            ValueError: If what remains is not a semantic version.
        """
        candidate = text.strip()
        if prefix and candidate.startswith(prefix):
            candidate = candidate[len(prefix) :]
        candidate = _LEADING_JUNK_RE.sub('', candidate)

        match = _TOLERANT_RE.match(candidate)
        if not match:
            raise ValueError(f'{text!r} is not valid SemVer string')

        fields = [int(part) for part in match.group('core').split('.')]
        fields += [0] * (3 - len(fields))
        core = '.'.join(str(f) for f in fields)
        return cls.parse(core + (match.group('rest') or ''))

    @classmethod
    def from_semver(cls, version: semver.Version) -> SemVer:
        """Convert a :class:`semver.Version`."""
        return cls(
            major=version.major,
            minor=version.minor,
            patch=version.patch,
            prerelease=_split_prerelease(version.prerelease),
            build=tuple(version.build.split('.')) if version.build else (),
        )

    def to_semver(self) -> semver.Version:
        """Convert to a :class:`semver.Version`."""
        return semver.Version(
            self.major,
            self.minor,
            self.patch,
            prerelease='.'.join(str(f) for f in self.prerelease) or None,
            build='.'.join(self.build) or None,
        )

    def __str__(self) -> str:
        """Return the canonical string form, without any prefix."""
        text = f'{self.major}.{self.minor}.{self.patch}'
        if self.prerelease:
            text += '-' + '.'.join(str(f) for f in self.prerelease)
        if self.build:
            text += '+' + '.'.join(self.build)
        return text

    def format(self, prefix: str = '') -> str:
        """Return the tag name for this version under *prefix*."""
        return f'{prefix}{self}'

    @property
    def is_prerelease(self) -> bool:
        """``True`` if any prerelease identifiers are present."""
        return bool(self.prerelease)

    def increment_major(self) -> SemVer:
        """Bump major and reset minor and patch to zero.

        Raises:
            OverflowError: If major is already at :data:`MAX_FIELD`.
        """
        if self.major >= MAX_FIELD:
            raise OverflowError(f'major version {self.major} cannot be incremented')
        return replace(self, major=self.major + 1, minor=0, patch=0)

    def increment_minor(self) -> SemVer:
        """Bump minor and reset patch to zero.

        Raises:
            OverflowError: If minor is already at :data:`MAX_FIELD`.
        """
        if self.minor >= MAX_FIELD:
            raise OverflowError(f'minor version {self.minor} cannot be incremented')
        return replace(self, minor=self.minor + 1, patch=0)

    def increment_patch(self) -> SemVer:
        """Bump patch.

        Raises:
            OverflowError: If patch is already at :data:`MAX_FIELD`.
        """
        if self.patch >= MAX_FIELD:
            raise OverflowError(f'patch version {self.patch} cannot be incremented')
        return replace(self, patch=self.patch + 1)

    def finalize(self) -> SemVer:
        """Drop prerelease and build metadata."""
        return SemVer(self.major, self.minor, self.patch)

    def with_prerelease(self, *fields: PrereleaseField) -> SemVer:
        """Return a copy whose prerelease identifiers are exactly *fields*."""
        return replace(self, prerelease=tuple(fields))
