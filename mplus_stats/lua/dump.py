# -*- coding: utf-8 -*-
"""Canonical text form of a value tree.

``parse_value(dump_value(v)) == v`` for every tree the parser can produce.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional

from mplus_stats.lua.values import (
    Boolean,
    Field,
    Nil,
    Number,
    PositionalIndex,
    String,
    StringKey,
    Table,
    Value,
)

__all__ = ["dump_value", "dump_assignment", "quote_string", "format_number"]

_ESCAPE_OUT = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def quote_string(text: str) -> str:
    out: List[str] = ['"']
    for ch in text:
        esc = _ESCAPE_OUT.get(ch)
        if esc is not None:
            out.append(esc)
        elif ord(ch) < 32 or ord(ch) == 127:
            out.append("\\%03d" % ord(ch))
        else:
            out.append(ch)
    out.append('"')
    return "".join(out)


def format_number(value: float) -> str:
    if math.isinf(value):
        return "1e999" if value > 0 else "-1e999"
    if math.isnan(value):
        raise ValueError("NaN has no literal form")
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def _dump_key(f: Field, expected_index: int) -> Optional[str]:
    """Key prefix for a field, or None when it is the next implicit slot."""
    key = f.key
    if isinstance(key, StringKey):
        return "[" + quote_string(key.name) + "] = "
    if isinstance(key, PositionalIndex) and not key.explicit and key.index == expected_index:
        return None
    return f"[{key.index}] = "


def _dump_scalar(value: Value) -> str:
    if isinstance(value, Nil):
        return "nil"
    if isinstance(value, Boolean):
        return "true" if value.value else "false"
    if isinstance(value, Number):
        return format_number(float(value.value))
    if isinstance(value, String):
        return quote_string(value.value)
    raise TypeError(f"not a value node: {value!r}")


@dataclass
class _OpenTable:
    table: Table
    pos: int = 0
    next_index: int = 1


def _open_brace(indent: Optional[int]) -> str:
    return "{ " if indent is None else "{\n"


def dump_value(value: Value, indent: Optional[int] = None) -> str:
    """Print a value; ``indent`` selects one field per line.

    Nested tables are kept on an explicit stack, so depth is unbounded.
    """
    if not isinstance(value, Table):
        return _dump_scalar(value)
    if not value.fields:
        return "{}"

    out: List[str] = [_open_brace(indent)]
    stack: List[_OpenTable] = [_OpenTable(value)]
    while stack:
        top = stack[-1]
        if top.pos == len(top.table.fields):
            stack.pop()
            if indent is None:
                out.append(" }")
            else:
                out.append(" " * (indent * len(stack)) + "}")
                if stack:
                    out.append(",\n")
            continue

        f = top.table.fields[top.pos]
        if indent is None:
            if top.pos:
                out.append(", ")
        else:
            out.append(" " * (indent * len(stack)))
        top.pos += 1

        prefix = _dump_key(f, top.next_index)
        if prefix is None:
            top.next_index += 1
        else:
            out.append(prefix)

        if isinstance(f.value, Table):
            if f.value.fields:
                out.append(_open_brace(indent))
                stack.append(_OpenTable(f.value))
                continue
            out.append("{}")
        else:
            out.append(_dump_scalar(f.value))
        if indent is not None:
            out.append(",\n")

    return "".join(out)


def dump_assignment(name: str, table: Table, indent: Optional[int] = None) -> str:
    return f"local {name} = {dump_value(table, indent)}\n"
