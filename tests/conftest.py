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

"""Shared fixtures for semverkit tests."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest


@dataclass
class FakeVcs:
    """In-memory :class:`~semverkit.vcs.VersionControl`.

    Errors set on the ``*_error`` attributes are raised by the matching
    call. Every call is recorded in :attr:`calls`. :attr:`ancestors` maps an
    include glob to the tag ``git describe`` would return for it; other
    globs fall back to :attr:`ancestor`.
    """

    latest: str = ''
    ancestor: str = ''
    ancestors: dict[str, str] = field(default_factory=dict)
    current: str = 'main'
    source: str = ''
    repo: bool = True
    safe_error: Exception | None = None
    current_error: Exception | None = None
    source_error: Exception | None = None
    calls: list[str] = field(default_factory=list)
    ancestor_queries: list[tuple[str, str, str]] = field(default_factory=list)
    source_shas: list[str] = field(default_factory=list)

    def make_safe(self) -> None:
        self.calls.append('make_safe')
        if self.safe_error is not None:
            raise self.safe_error

    def is_repo(self) -> bool:
        self.calls.append('is_repo')
        return self.repo

    def current_branch(self) -> str:
        self.calls.append('current_branch')
        if self.current_error is not None:
            raise self.current_error
        return self.current

    def source_branch(self, commit_sha: str) -> str:
        self.calls.append('source_branch')
        self.source_shas.append(commit_sha)
        if self.source_error is not None:
            raise self.source_error
        return self.source

    def latest_tag(self) -> str:
        self.calls.append('latest_tag')
        return self.latest

    def ancestor_tag(self, include: str, exclude: str, branch: str) -> str:
        self.calls.append('ancestor_tag')
        self.ancestor_queries.append((include, exclude, branch))
        return self.ancestors.get(include, self.ancestor)


@pytest.fixture
def fake_vcs() -> type[FakeVcs]:
    """Return the :class:`FakeVcs` class for building fakes inline."""
    return FakeVcs
