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

"""Shared leaf-level types used across semverkit.

This module must have **zero** imports from other ``semverkit``
modules to avoid circular-import chains. It is safe to import from
any module in the project.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    'Result',
]


@dataclass(frozen=True)
class Result:
    """The computed tag and its metadata.

    An all-empty ``Result`` (the default) means "no release": the merge
    does not warrant a tag.

    Attributes:
        previous_tag: Prefix-qualified latest tag the computation started
            from (``<prefix>0.0.0`` when the repository has no tags).
        ancestor_tag: Tag reported by the version control provider for the
            include/exclude pattern the computation settled on.
        semver_tag: The prefix-qualified tag to create, or ``""``.
        is_prerelease: Whether :attr:`semver_tag` carries prerelease fields.
    """

    previous_tag: str = ''
    ancestor_tag: str = ''
    semver_tag: str = ''
    is_prerelease: bool = False

    @property
    def released(self) -> bool:
        """``True`` if a tag was computed."""
        return bool(self.semver_tag)
