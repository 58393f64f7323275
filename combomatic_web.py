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
# Module: combomatic_web.py
# Purpose: Web adapter (FastAPI endpoints around the same core engine).
#
# Core logic MUST remain in combomatic_core.py.

"""
Combomatic Web Adapter

A minimal HTTP interface around the Combomatic core engine. Stateless: every
request carries the full configuration.

Navigation guide (search for these headers / sections):
  - Request/response models
  - Endpoints: health, guesses (JSON), guesses/render (text)
"""


from __future__ import annotations

from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

import combomatic_core as core
from combomatic_render import render

app = FastAPI(title="Combomatic Web Adapter")


class GuessRequest(BaseModel):
    min: int = 0
    max: int = 99
    range: int = 2
    combination: List[int] = Field(default_factory=list)


class RenderRequest(GuessRequest):
    csv: bool = False
    separator: str = "-"
    reverse: bool = False


class GuessGroup(BaseModel):
    errors: int
    guesses: List[List[int]]


class GuessResponse(BaseModel):
    count: int
    histogram: List[int]
    groups: List[GuessGroup]


def _run(req: GuessRequest, csv: bool = False) -> tuple[core.ComboConfig, List[core.Candidate]]:
    raw: Dict[str, Any] = {
        "min": req.min,
        "max": req.max,
        "range": req.range,
        "combination": req.combination,
        "csv": csv,
    }
    try:
        config = core.config_from_dict(raw)
        return config, core.guesses(config)
    except core.ConfigError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/health", response_model=Dict[str, str])
def health() -> Dict[str, str]:
    return {"status": "ok", "version": core.COMBOMATIC_CORE_VERSION}


@app.post("/guesses", response_model=GuessResponse)
def list_guesses(req: GuessRequest) -> GuessResponse:
    _, candidates = _run(req)
    groups = [
        GuessGroup(errors=errors, guesses=[list(c.digits) for c in group])
        for errors, group in core.group_by_errors(candidates)
    ]
    return GuessResponse(count=len(candidates), histogram=core.error_histogram(candidates), groups=groups)


@app.post("/guesses/render", response_class=PlainTextResponse)
def render_guesses(req: RenderRequest) -> str:
    config, candidates = _run(req, csv=req.csv)
    return render(candidates, config, separator=req.separator, reverse=req.reverse)
