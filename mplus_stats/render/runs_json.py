# -*- coding: utf-8 -*-
"""Render RunsById as a JSON-ready dict."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from mplus_stats.schemas.runs import RunsById, summarize_runs


def _stringify_keys(runs: RunsById) -> Dict[str, Any]:
    # JSON object keys are strings; sort numerically so output is stable
    return {
        str(map_id): {
            str(level): {
                state: {str(run_id): run for run_id, run in sorted(by_id.items())}
                for state, by_id in sorted(states.items())
            }
            for level, states in sorted(levels.items())
        }
        for map_id, levels in sorted(runs.items())
    }


def render_runs_json(runs: RunsById, meta: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    out = {
        "runsById": _stringify_keys(runs),
        "summary": summarize_runs(runs),
    }
    if meta is not None:
        out["meta"] = meta
    return out


def dumps_runs(runs: RunsById, meta: Optional[Dict[str, Any]] = None, indent: int = 2) -> str:
    return json.dumps(render_runs_json(runs, meta), indent=indent, ensure_ascii=False)
