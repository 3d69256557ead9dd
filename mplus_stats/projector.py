# -*- coding: utf-8 -*-
"""Schema projector: generic value tree -> RunsById.

The walk has a fixed depth and each depth has one expectation:

    root            table holding the outer key (``runsById``)
    level 1         integer key mapId     -> table
    level 2         integer key keyLevel  -> table
    level 3         string key state      -> table of positional run entries
    run entry       table; its run id is read from the ``runId`` field
    run field       scalar, or for ``encounters`` a list of tables
    encounter field scalar

Any deviation raises ShapeError with the path of the offending table.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Set, Tuple

from mplus_stats.errors import ShapeError, format_key_path
from mplus_stats.lua.values import (
    Boolean,
    Key,
    Nil,
    Number,
    PositionalIndex,
    String,
    StringKey,
    Table,
    Value,
    describe,
    key_text,
)
from mplus_stats.schemas.runs import (
    ENCOUNTERS_FIELD,
    EncounterRecord,
    Run,
    RunsById,
    ScalarValue,
)

__all__ = ["SchemaProjector", "project_runs", "DEFAULT_OUTER_KEY", "DEFAULT_RUN_ID_FIELD"]

logger = logging.getLogger(__name__)

DEFAULT_OUTER_KEY = "runsById"
DEFAULT_RUN_ID_FIELD = "runId"

_INT_RE = re.compile(r"^[+-]?\d+$")

KeyPath = Tuple[str, ...]


def _describe_key(key: Key) -> str:
    if isinstance(key, StringKey):
        return f"string key {key.name!r}"
    return f"index key [{key.index}]"


class SchemaProjector:
    def __init__(
        self,
        *,
        outer_key: str = DEFAULT_OUTER_KEY,
        run_id_field: str = DEFAULT_RUN_ID_FIELD,
        strict: bool = False,
    ):
        self.outer_key = outer_key
        self.run_id_field = run_id_field
        self.strict = strict

    # -- helpers -----------------------------------------------------------

    def _claim(self, seen: Set, key, path: KeyPath) -> None:
        """Register a key within one table; duplicates fail in strict mode."""
        if key in seen:
            if self.strict:
                raise ShapeError(path, "unique key", "duplicate key")
            logger.warning("%s: duplicate key, keeping the later value", format_key_path(path))
        seen.add(key)

    @staticmethod
    def _table(value: Value, path: KeyPath, expected: str = "table") -> Table:
        if not isinstance(value, Table):
            raise ShapeError(path, expected, describe(value))
        return value

    @staticmethod
    def _int_key(key: Key, parent: KeyPath, label: str) -> int:
        if isinstance(key, PositionalIndex):
            return key.index
        if _INT_RE.match(key.name.strip()):
            return int(key.name)
        raise ShapeError(parent + (f"{label}={key.name!r}",), f"integer {label}", _describe_key(key))

    @staticmethod
    def _scalar(value: Value, path: KeyPath) -> ScalarValue:
        if isinstance(value, Boolean):
            return value.value
        if isinstance(value, Number):
            return value.to_python()
        if isinstance(value, String):
            return value.value
        raise ShapeError(path, "scalar", describe(value))

    # -- levels ------------------------------------------------------------

    def _outer(self, root: Table) -> Table:
        matches = [f for f in root if isinstance(f.key, StringKey) and f.key.name == self.outer_key]
        if not matches:
            if root.has_string_keys():
                raise ShapeError((), f"outer key {self.outer_key!r}", "no such field")
            # bare {mapId = ...} root
            return root
        if len(matches) > 1:
            self._claim({self.outer_key}, self.outer_key, (self.outer_key,))
        return self._table(matches[-1].value, (self.outer_key,))

    def project(self, root: Value) -> RunsById:
        tbl = self._table(root, (), "root table")
        out: RunsById = {}
        seen: Set[int] = set()
        for f in self._outer(tbl):
            map_id = self._int_key(f.key, (), "mapId")
            path = (f"mapId={map_id}",)
            self._claim(seen, map_id, path)
            out[map_id] = self._project_levels(self._table(f.value, path), path)
        return out

    def _project_levels(self, tbl: Table, parent: KeyPath) -> Dict[int, Dict[str, Dict[int, Run]]]:
        out: Dict[int, Dict[str, Dict[int, Run]]] = {}
        seen: Set[int] = set()
        for f in tbl:
            level = self._int_key(f.key, parent, "keyLevel")
            path = parent + (f"keyLevel={level}",)
            self._claim(seen, level, path)
            out[level] = self._project_states(self._table(f.value, path), path)
        return out

    def _project_states(self, tbl: Table, parent: KeyPath) -> Dict[str, Dict[int, Run]]:
        out: Dict[str, Dict[int, Run]] = {}
        seen: Set[str] = set()
        for f in tbl:
            if not isinstance(f.key, StringKey):
                raise ShapeError(parent + (f"state=[{f.key.index}]",), "string state key", _describe_key(f.key))
            state = f.key.name
            path = parent + (f'state="{state}"',)
            self._claim(seen, state, path)
            out[state] = self._project_run_list(self._table(f.value, path, "list of run tables"), path)
        return out

    def _slots(self, tbl: Table, parent: KeyPath, label: str) -> List[Tuple[KeyPath, Value]]:
        """Positional entries of a list table, one per slot, in slot order.

        A slot written twice keeps the later value (strict mode rejects it).
        """
        slots: Dict[int, Tuple[KeyPath, Value]] = {}
        seen: Set[int] = set()
        for f in tbl:
            if not isinstance(f.key, PositionalIndex):
                raise ShapeError(parent + (f"{label}[{f.key.name!r}]",), f"positional {label} entry", _describe_key(f.key))
            path = parent + (f"{label}#{f.key.index}",)
            self._claim(seen, f.key.index, path)
            slots[f.key.index] = (path, f.value)
        return [slots[i] for i in sorted(slots)]

    def _project_run_list(self, tbl: Table, parent: KeyPath) -> Dict[int, Run]:
        out: Dict[int, Run] = {}
        seen: Set[int] = set()
        for path, value in self._slots(tbl, parent, "run"):
            run_id, run = self._project_run(self._table(value, path, "run table"), path)
            self._claim(seen, run_id, path + (f"runId={run_id}",))
            out[run_id] = run
        return out

    def _project_run(self, entry: Table, parent: KeyPath) -> Tuple[int, Run]:
        run: Run = {}
        seen: Set[str] = set()
        run_id: Optional[Value] = None
        for f in entry:
            name = key_text(f.key)
            path = parent + (f'field="{name}"',)
            self._claim(seen, name, path)
            if name == self.run_id_field:
                run_id = f.value
                continue
            if isinstance(f.value, Nil):
                run.pop(name, None)
                continue
            if name == ENCOUNTERS_FIELD:
                run[name] = self._project_encounters(f.value, path)
            else:
                run[name] = self._scalar(f.value, path)

        return self._run_id(run_id, parent), run

    def _run_id(self, value: Optional[Value], parent: KeyPath) -> int:
        path = parent + (f'field="{self.run_id_field}"',)
        if value is None or isinstance(value, Nil):
            raise ShapeError(path, "integer run id", "missing field")
        if isinstance(value, Number) and value.is_integral:
            return int(value.value)
        if isinstance(value, String) and _INT_RE.match(value.value.strip()):
            return int(value.value)
        raise ShapeError(path, "integer run id", describe(value))

    def _project_encounters(self, value: Value, parent: KeyPath) -> List[EncounterRecord]:
        tbl = self._table(value, parent, "list of encounter tables")
        return [
            self._project_encounter(self._table(entry, path, "encounter table"), path)
            for path, entry in self._slots(tbl, parent, "encounter")
        ]

    def _project_encounter(self, tbl: Table, parent: KeyPath) -> EncounterRecord:
        record: EncounterRecord = {}
        seen: Set[str] = set()
        for f in tbl:
            name = key_text(f.key)
            path = parent + (f'field="{name}"',)
            self._claim(seen, name, path)
            if isinstance(f.value, Nil):
                record.pop(name, None)
                continue
            record[name] = self._scalar(f.value, path)
        return record


def project_runs(
    root: Value,
    *,
    outer_key: str = DEFAULT_OUTER_KEY,
    run_id_field: str = DEFAULT_RUN_ID_FIELD,
    strict: bool = False,
) -> RunsById:
    """Project a parsed SavedVariables table onto RunsById."""
    return SchemaProjector(outer_key=outer_key, run_id_field=run_id_field, strict=strict).project(root)
