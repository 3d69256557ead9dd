# -*- coding: utf-8 -*-
"""Projected run statistics.

    RunsById = {mapId: {keyLevel: {state: {runId: Run}}}}

A ``Run`` maps field names to scalars, except ``encounters`` which holds a
list of ``EncounterRecord`` (flat field -> scalar dicts).
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

__all__ = [
    "RUNS_SCHEMA_VERSION",
    "ENCOUNTERS_FIELD",
    "ScalarValue",
    "EncounterRecord",
    "Run",
    "RunsById",
    "iter_runs",
    "count_runs",
    "get_run",
    "filter_runs",
    "summarize_runs",
]

# bumped when the RunsById layout or its JSON form changes
RUNS_SCHEMA_VERSION = "1"

ENCOUNTERS_FIELD = "encounters"

ScalarValue = Union[bool, int, float, str]
EncounterRecord = Dict[str, ScalarValue]
Run = Dict[str, Union[ScalarValue, List[EncounterRecord]]]
RunsById = Dict[int, Dict[int, Dict[str, Dict[int, Run]]]]


def iter_runs(runs: RunsById) -> Iterator[Tuple[int, int, str, int, Run]]:
    """Yield (map_id, key_level, state, run_id, run) for every run."""
    for map_id, levels in runs.items():
        for key_level, states in levels.items():
            for state, by_id in states.items():
                for run_id, run in by_id.items():
                    yield map_id, key_level, state, run_id, run


def count_runs(runs: RunsById) -> int:
    return sum(1 for _ in iter_runs(runs))


def get_run(runs: RunsById, map_id: int, key_level: int, state: str, run_id: int) -> Optional[Run]:
    return runs.get(map_id, {}).get(key_level, {}).get(state, {}).get(run_id)


def filter_runs(
    runs: RunsById,
    *,
    map_id: Optional[int] = None,
    key_level: Optional[int] = None,
    state: Optional[str] = None,
) -> RunsById:
    """New RunsById restricted to the given coordinates; empty buckets are dropped."""
    out: RunsById = {}
    for mid, levels in runs.items():
        if map_id is not None and mid != map_id:
            continue
        for lvl, states in levels.items():
            if key_level is not None and lvl != key_level:
                continue
            for st, by_id in states.items():
                if state is not None and st != state:
                    continue
                out.setdefault(mid, {}).setdefault(lvl, {})[st] = dict(by_id)
    return out


def summarize_runs(runs: RunsById) -> Dict[str, Any]:
    states: Dict[str, int] = {}
    encounters = 0
    for _, _, state, _, run in iter_runs(runs):
        states[state] = states.get(state, 0) + 1
        enc = run.get(ENCOUNTERS_FIELD)
        if isinstance(enc, list):
            encounters += len(enc)
    return {
        "maps": len(runs),
        "runs": sum(states.values()),
        "states": states,
        "encounters": encounters,
    }
