# -*- coding: utf-8 -*-
"""Generic value tree produced by the literal parser.

Nodes are frozen dataclasses; a tree is built once and only read afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union

__all__ = [
    "Nil",
    "NIL",
    "Boolean",
    "Number",
    "String",
    "Table",
    "Field",
    "StringKey",
    "PositionalIndex",
    "Key",
    "Value",
    "Scalar",
    "is_scalar",
    "describe",
    "key_text",
]


@dataclass(frozen=True)
class Nil:
    def __repr__(self) -> str:
        return "Nil"


NIL = Nil()


@dataclass(frozen=True)
class Boolean:
    value: bool


@dataclass(frozen=True)
class Number:
    value: float

    @property
    def is_integral(self) -> bool:
        return float(self.value).is_integer()

    def to_python(self) -> Union[int, float]:
        v = float(self.value)
        return int(v) if v.is_integer() else v


@dataclass(frozen=True)
class String:
    value: str


@dataclass(frozen=True)
class StringKey:
    """``["name"] = v`` (or ``"name" = v``)."""

    name: str


@dataclass(frozen=True)
class PositionalIndex:
    """Integer slot: implicit array position, or ``[n] = v`` when ``explicit``."""

    index: int
    explicit: bool = False


Key = Union[StringKey, PositionalIndex]


@dataclass(frozen=True)
class Field:
    key: Key
    value: "Value"


@dataclass(frozen=True)
class Table:
    """Fields in source order. Duplicate keys are kept; consumers decide."""

    fields: Tuple[Field, ...] = ()

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self) -> Iterator[Field]:
        return iter(self.fields)

    def get(self, name: str) -> Optional["Value"]:
        """Value of the last ``StringKey`` field called ``name`` (Lua overwrite order)."""
        found: Optional[Value] = None
        for f in self.fields:
            if isinstance(f.key, StringKey) and f.key.name == name:
                found = f.value
        return found

    def has_string_keys(self) -> bool:
        return any(isinstance(f.key, StringKey) for f in self.fields)


Value = Union[Nil, Boolean, Number, String, Table]
Scalar = Union[Boolean, Number, String]


def is_scalar(value: Value) -> bool:
    return isinstance(value, (Boolean, Number, String))


def key_text(key: Key) -> str:
    if isinstance(key, StringKey):
        return key.name
    return str(key.index)


def describe(value: Value) -> str:
    """Short human description used in error messages."""
    if isinstance(value, Table):
        return f"table with {len(value)} field(s)"
    if isinstance(value, String):
        text = value.value if len(value.value) <= 24 else value.value[:21] + "..."
        return f"string {text!r}"
    if isinstance(value, Number):
        return f"number {value.to_python()}"
    if isinstance(value, Boolean):
        return "boolean " + ("true" if value.value else "false")
    return "nil"
