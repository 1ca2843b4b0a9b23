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

"""semverkit: next semantic version tag from branch naming conventions.

At merge time, the branch being merged decides the bump: ``feature/``
bumps minor, ``bugfix/`` bumps patch, ``major/`` bumps major and
``docs/``/``misc/`` only advance the prerelease build counter. The
result is a prerelease tag (``v1.3.0-alpha.2``) or, when prereleases
are not forced, a final release tag (``v1.3.0``).

Usage::

    from semverkit import Params, tag
    from semverkit.vcs import Git

    result = tag(Params(prerelease_id='alpha', force_prerelease=True), Git('.'))
    print(result.semver_tag)
"""

from semverkit._types import Result
from semverkit.config import Params, load_params
from semverkit.errors import SemverKitError
from semverkit.generate import run, tag

__version__ = '0.1.0'

__all__ = [
    'Params',
    'Result',
    'SemverKitError',
    '__version__',
    'load_params',
    'run',
    'tag',
]
