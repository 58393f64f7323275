#!/usr/bin/env python3
# SPDX-License-Identifier: GPL-3.0-only
#
# Combomatic
#
# An open-source utility for narrowing down the combination of a multi-dial
# lock from one remembered (or measured) combination and a tolerance.
#
# Copyright (C) 2026 knowthebird
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, version 3 only.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
#
# USE POLICY:
# This software is intended ONLY for:
#   - Educational use
#   - Locksport
#   - Locksmith training
#   - Locks that you own or have explicit permission to work on
#
# Misuse of this software may violate local, state, or federal law.
# The authors and contributors accept no liability for misuse.
#
# Module: combomatic_render.py
# Purpose: Text renderers for a guess list (CSV and grouped).
#
# Renderers build strings only. Adapters decide where the text goes.

"""
Combomatic Renderers

Two output modes for the sorted guess list returned by combomatic_core.guesses():

- CSV: a header row (tried, number 1..k, errors) then one row per guess, with the
  "tried" column left blank so the sheet can be ticked off by hand.
- Grouped: a "<n> errors:" header whenever the score changes, then one guess per
  line with every number zero-padded to the width of the dial's max.
"""


from __future__ import annotations

import csv
import io
from typing import List, Sequence

from combomatic_core import Candidate, ComboConfig, group_by_errors


def csv_lines(candidates: Sequence[Candidate]) -> List[str]:
    if not candidates:
        return []

    numbers = len(candidates[0].digits)
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(["tried"] + [f"number {i}" for i in range(1, numbers + 1)] + ["errors"])
    for c in candidates:
        writer.writerow([""] + list(c.digits) + [c.errors])
    return buf.getvalue().splitlines()


def grouped_lines(candidates: Sequence[Candidate], dial_max: int, separator: str = "-") -> List[str]:
    width = len(str(dial_max))
    lines: List[str] = []
    for errors, group in group_by_errors(candidates):
        lines.append(f"{errors} errors:")
        for c in group:
            lines.append(separator.join(f"{n:0{width}d}" for n in c.digits))
    return lines


def render(candidates: Sequence[Candidate], config: ComboConfig, separator: str = "-", reverse: bool = False) -> str:
    """Render in the mode chosen by ``config.csv``; ``reverse`` puts the least likely guesses first."""
    ordered = list(reversed(candidates)) if reverse else list(candidates)
    if config.csv:
        lines = csv_lines(ordered)
    else:
        lines = grouped_lines(ordered, config.dial_max, separator)
    return "".join(line + "\n" for line in lines)
