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

"""Emit the computed tag to the caller.

Two channels:

- **Action outputs**: ``semver_tag``, ``is_prerelease``,
  ``previous_tag`` and ``ancestor_tag`` as ``name=value`` lines,
  appended to the file named by ``GITHUB_OUTPUT`` when it is set and
  printed to stdout otherwise.
- **Summary**: a Rich table on stderr for humans reading the job log.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import TextIO

from rich.console import Console
from rich.table import Table
from rich.text import Text

from semverkit._types import Result
from semverkit.errors import SemverKitError
from semverkit.logging import redact

__all__ = [
    'output_pairs',
    'print_error',
    'render_summary',
    'write_outputs',
]


def output_pairs(result: Result) -> list[tuple[str, str]]:
    """Return the action outputs for *result* in a stable order."""
    return [
        ('semver_tag', result.semver_tag),
        ('is_prerelease', 'true' if result.is_prerelease else 'false'),
        ('previous_tag', result.previous_tag),
        ('ancestor_tag', result.ancestor_tag),
    ]


def write_outputs(
    result: Result,
    *,
    env: Mapping[str, str] | None = None,
    stream: TextIO | None = None,
) -> None:
    """Publish *result* as action outputs.

    Args:
        result: The computed result.
        env: Environment holding ``GITHUB_OUTPUT``; defaults to ``os.environ``.
        stream: Fallback stream when ``GITHUB_OUTPUT`` is unset; defaults
            to stdout.
    """
    env = os.environ if env is None else env
    lines = ''.join(f'{name}={value}\n' for name, value in output_pairs(result))

    output_file = env.get('GITHUB_OUTPUT', '')
    if output_file:
        with Path(output_file).open('a', encoding='utf-8') as fh:
            fh.write(lines)
        return

    (stream or sys.stdout).write(lines)


def render_summary(result: Result, console: Console | None = None) -> None:
    """Print a summary table of *result*.

    Args:
        result: The computed result.
        console: Rich :class:`Console` to print to. When ``None``, a
            stderr console is created.
    """
    if console is None:
        console = Console(stderr=True)

    if not result.released:
        console.print('[dim]No release: this merge does not produce a tag.[/]')
        return

    table = Table(show_header=True, header_style='bold', show_edge=False, pad_edge=False)
    table.add_column('Output', style='bold')
    table.add_column('Value')

    for name, value in output_pairs(result):
        style = 'green' if name == 'semver_tag' else ''
        table.add_row(name, Text(value or '-', style=style))

    console.print(table)


def print_error(error: SemverKitError, console: Console | None = None) -> None:
    """Print *error* as a diagnostic block with its code and hint.

    The message is passed through :func:`~semverkit.logging.redact` since
    it can carry git output.
    """
    if console is None:
        console = Console(stderr=True)
    console.print(Text.assemble(('error', 'bold red'), (f'[{error.code.value}]', 'red'), ': ', redact(error.message)))
    if error.hint:
        console.print(Text.assemble(('  = hint', 'bold cyan'), ': ', error.hint))
