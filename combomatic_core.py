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
# Module: combomatic_core.py
# Purpose: Core engine (portable, UI-agnostic candidate enumeration).
#
# This file contains the "business logic" of Combomatic and MUST remain portable.
# Any CLI/web specific behavior (printing, file paths, plots, web requests) belongs in an adapter.

"""
Combomatic Core Engine

Given a base combination and a range, enumerate every combination reachable by
moving each dial up to ``range`` numbers in either direction (wrapping around the
dial), score each one by its total distance from the base, and return them sorted
so the closest guesses come first.

Design goals:
- No direct I/O: no terminal printing and no filesystem writes.
- Deterministic: identical inputs always give the identical ordering.
- Adapter-friendly: a CLI adapter or a web adapter drives the same engine by calling:
    - config_from_dict(raw)  → validated ComboConfig
    - guesses(config)        → sorted list of Candidate

Navigation guide (search for these headers / functions):
  - Errors (ConfigError and subclasses)
  - Config helpers (default_config, config_from_dict, validate_config)
  - Dial math helpers (ring_modulus, modular_distance, wrap_digit)
  - Enumeration (offset_tuples, guesses)
  - Result helpers (group_by_errors, error_histogram)
"""


from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import groupby, product
from typing import Any, Dict, Iterator, List, Sequence, Tuple

COMBOMATIC_CORE_VERSION = "0.1.0"

# Upper bound on (2*range+1)**positions; the whole list is held in memory.
DEFAULT_MAX_CANDIDATES = 1_000_000

log = logging.getLogger("combomatic.core")

# -----------------------
# Errors
# -----------------------

class ConfigError(ValueError):
    """Base class for every invalid-input condition. Never retried."""


class InvalidRingBounds(ConfigError):
    pass


class InvalidRange(ConfigError):
    pass


class EmptyCombination(ConfigError):
    pass


class DigitOutOfRange(ConfigError):
    pass


class SearchSpaceOverflow(ConfigError):
    pass


# -----------------------
# Config helpers
# -----------------------

@dataclass(frozen=True)
class ComboConfig:
    combination: Tuple[int, ...]
    dial_min: int = 0
    dial_max: int = 99
    range: int = 2
    csv: bool = False

    @property
    def modulus(self) -> int:
        return ring_modulus(self.dial_min, self.dial_max)


def default_config() -> Dict[str, Any]:
    return {
        "min": 0,
        "max": 99,
        "range": 2,
        "combination": [],
        "csv": False,
    }


def _coerce_int(name: str, raw: Any) -> int:
    if isinstance(raw, bool):
        raise ConfigError(f"{name} must be an integer, got {raw!r}")
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


def _coerce_bool(name: str, raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    r = str(raw).strip().lower()
    if r in ("y", "yes", "1", "true", "t"):
        return True
    if r in ("n", "no", "0", "false", "f", ""):
        return False
    raise ConfigError(f"{name} must be yes/no or true/false, got {raw!r}")


def _coerce_combination(raw: Any) -> Tuple[int, ...]:
    if raw is None:
        return ()
    if isinstance(raw, str):
        parts = [p for p in raw.replace(",", " ").split() if p != ""]
    else:
        try:
            parts = list(raw)
        except TypeError:
            raise ConfigError(f"combination must be a list or string, got {raw!r}") from None
    return tuple(_coerce_int(f"combination number {i}", p) for i, p in enumerate(parts, start=1))


def config_from_dict(raw: Dict[str, Any], max_candidates: int = DEFAULT_MAX_CANDIDATES) -> ComboConfig:
    """
    Build a validated ComboConfig from loosely typed input (CLI namespace dict,
    JSON body, ...). Missing keys fall back to default_config().
    """
    cfg = dict(default_config())
    cfg.update({k: v for k, v in raw.items() if v is not None})

    config = ComboConfig(
        combination=_coerce_combination(cfg["combination"]),
        dial_min=_coerce_int("min", cfg["min"]),
        dial_max=_coerce_int("max", cfg["max"]),
        range=_coerce_int("range", cfg["range"]),
        csv=_coerce_bool("csv", cfg["csv"]),
    )
    validate_config(config, max_candidates)
    return config


def validate_config(config: ComboConfig, max_candidates: int = DEFAULT_MAX_CANDIDATES) -> None:
    if config.dial_min > config.dial_max:
        raise InvalidRingBounds(
            f"invalid ring bounds: min ({config.dial_min}) is greater than max ({config.dial_max})"
        )
    if config.range < 0:
        raise InvalidRange(f"range must be non-negative, got {config.range}")
    if not config.combination:
        raise EmptyCombination("no combination supplied")
    for pos, digit in enumerate(config.combination, start=1):
        if not config.dial_min <= digit <= config.dial_max:
            raise DigitOutOfRange(
                f"number {pos} of the combination ({digit}) is outside "
                f"[{config.dial_min}, {config.dial_max}]"
            )
    if max_candidates < 1:
        raise ConfigError(f"max candidates must be at least 1, got {max_candidates}")
    total = guess_count(len(config.combination), config.range)
    if total > max_candidates:
        raise SearchSpaceOverflow(
            f"search space too large: {total} candidates exceeds the limit of {max_candidates}"
        )


# -----------------------
# Dial math helpers
# -----------------------

def ring_modulus(dial_min: int, dial_max: int) -> int:
    return dial_max - dial_min + 1


def modular_distance(a: int, b: int, modulus: int) -> int:
    """Fewest single steps between a and b on a ring of ``modulus`` positions."""
    return min((a - b) % modulus, (b - a) % modulus)


def wrap_digit(digit: int, offset: int, dial_min: int, dial_max: int, radius: int) -> int:
    """
    Apply an encoded offset (0 .. 2*radius, meaning -radius .. +radius) to a dial
    number and wrap the result back onto [dial_min, dial_max].
    """
    modulus = ring_modulus(dial_min, dial_max)
    return (digit - dial_min + modulus + offset - radius) % modulus + dial_min


# -----------------------
# Enumeration
# -----------------------

@dataclass(frozen=True)
class Candidate:
    digits: Tuple[int, ...]
    errors: int


def guess_count(positions: int, radius: int) -> int:
    return (2 * radius + 1) ** positions


def offset_tuples(positions: int, radius: int) -> Iterator[Tuple[int, ...]]:
    """
    Count through every offset tuple like an odometer whose wheels have 2*radius+1
    marks. Position 0 turns fastest.
    """
    base = 2 * radius + 1
    # product() turns the last slot fastest; flip each tuple.
    for offsets in product(range(base), repeat=positions):
        yield offsets[::-1]


def error_score(config: ComboConfig, digits: Sequence[int]) -> int:
    modulus = config.modulus
    return sum(
        modular_distance(g - config.dial_min, c - config.dial_min, modulus)
        for g, c in zip(digits, config.combination)
    )


def guesses(config: ComboConfig, max_candidates: int = DEFAULT_MAX_CANDIDATES) -> List[Candidate]:
    validate_config(config, max_candidates)

    log.debug(
        "enumerating %d candidates (modulus=%d, range=%d, positions=%d)",
        guess_count(len(config.combination), config.range),
        config.modulus,
        config.range,
        len(config.combination),
    )

    generated: List[Tuple[int, ...]] = []
    for offsets in offset_tuples(len(config.combination), config.range):
        generated.append(tuple(
            wrap_digit(n, dn, config.dial_min, config.dial_max, config.range)
            for n, dn in zip(config.combination, offsets)
        ))

    scored = [Candidate(digits=g, errors=error_score(config, g)) for g in generated]
    # sorted() is stable: ties keep generation order.
    return sorted(scored, key=lambda c: c.errors)


# -----------------------
# Result helpers
# -----------------------

def group_by_errors(candidates: Sequence[Candidate]) -> List[Tuple[int, List[Candidate]]]:
    return [(errors, list(group)) for errors, group in groupby(candidates, key=lambda c: c.errors)]


def error_histogram(candidates: Sequence[Candidate]) -> List[int]:
    if not candidates:
        return []
    counts = [0] * (max(c.errors for c in candidates) + 1)
    for c in candidates:
        counts[c.errors] += 1
    return counts
