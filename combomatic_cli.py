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
# Module: combomatic_cli.py
# Purpose: CLI adapter (argument parsing, printing, output files, plots).
#
# This adapter owns ALL terminal and filesystem behavior.
# The core engine should never write files or print to the terminal.

"""
Combomatic CLI Adapter

Responsibilities:
- Parse arguments into a validated combomatic_core.ComboConfig
- Run the core and print the rendered guess list (grouped or CSV)
- Optionally write the output to a file and save an error-score plot

Navigation guide (search for these headers / functions):
  - Plotting (_plot_error_histogram_png)
  - Argument parsing (_parse_cli)
  - Main entry point (main)
"""


from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

import combomatic_core as core
from combomatic_render import render

log = logging.getLogger("combomatic")


def _plot_error_histogram_png(candidates: Sequence[core.Candidate], config: core.ComboConfig, out_path: Path) -> None:
    # Lazy import so CLI still works in minimal environments.
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    import numpy as np

    if not candidates:
        return

    scores = np.array([c.errors for c in candidates], dtype=int)
    counts = np.bincount(scores)
    xs = np.arange(len(counts))

    fig = plt.figure()
    plt.bar(xs, counts)
    combo = "-".join(str(n) for n in config.combination)
    plt.title(f"Candidates per error score ({combo}, range {config.range})")
    plt.xlabel("Errors")
    plt.ylabel("Candidates")
    plt.xticks(xs)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, dpi=150, bbox_inches="tight")
    plt.close(fig)


def _setup_logging(level_name: str) -> None:
    level = getattr(logging, level_name)
    pkg_logger = logging.getLogger("combomatic")
    for old in list(pkg_logger.handlers):
        pkg_logger.removeHandler(old)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(logging.BASIC_FORMAT))
    handler.setLevel(level)
    pkg_logger.addHandler(handler)
    pkg_logger.propagate = False
    pkg_logger.setLevel(level)


def _parse_cli(argv: Optional[List[str]] = None) -> argparse.Namespace:
    defaults = core.default_config()
    ap = argparse.ArgumentParser(
        prog="combomatic",
        description="List every combination within RANGE of a known combination, closest first.",
    )
    ap.add_argument("--min", type=int, default=defaults["min"], help="Lowest number on the dial (default: %(default)s)")
    ap.add_argument("--max", type=int, default=defaults["max"], help="Highest number on the dial (default: %(default)s)")
    ap.add_argument(
        "--range", type=int, default=defaults["range"],
        help="How far each number may be off, in either direction (default: %(default)s)",
    )
    ap.add_argument(
        "--combination", nargs="+", required=True, metavar="N",
        help="Known combination, e.g. --combination 10 20 30 or --combination 10,20,30",
    )
    ap.add_argument("--csv", action="store_true", help="Print a CSV sheet instead of grouped output")
    ap.add_argument("--separator", default="-", help="Separator between numbers in grouped output (default: %(default)s)")
    ap.add_argument("--reverse", action="store_true", help="List the least likely combinations first")
    ap.add_argument(
        "--max-candidates", type=int, default=core.DEFAULT_MAX_CANDIDATES,
        help="Refuse to enumerate more than this many combinations (default: %(default)s)",
    )
    ap.add_argument("--out", help="Write output to this file instead of stdout")
    ap.add_argument("--plot", help="Save a PNG chart of candidates per error score")
    ap.add_argument(
        "--log-level",
        choices=["WARNING", "INFO", "DEBUG"],
        default="WARNING",
        help="Logging level for combomatic",
    )
    return ap.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_cli(argv)
    _setup_logging(args.log_level)

    try:
        config = core.config_from_dict(
            {
                "min": args.min,
                "max": args.max,
                "range": args.range,
                "combination": " ".join(args.combination),
                "csv": args.csv,
            },
            max_candidates=args.max_candidates,
        )
        candidates = core.guesses(config, max_candidates=args.max_candidates)
    except core.ConfigError as e:
        print(f"[Error] {e}", file=sys.stderr)
        return 2

    log.info("%d candidates for %s", len(candidates), list(config.combination))

    text = render(candidates, config, separator=args.separator, reverse=args.reverse)
    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text, encoding="utf-8")
        print(f"[Saved] {out_path.name}")
    else:
        sys.stdout.write(text)

    if args.plot:
        plot_path = Path(args.plot)
        _plot_error_histogram_png(candidates, config, plot_path)
        log.info("plot written to %s", plot_path)

    return 0


if __name__ == "__main__":
    sys.exit(main())
