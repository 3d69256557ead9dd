# -*- coding: utf-8 -*-
"""Error hierarchy.

Two families that must never be conflated when reporting:

- ``IngestError``: the text was read but is not a valid MythicPlusStats
  literal (``ParseError``) or its tables do not have the runs shape
  (``ShapeError``).
- ``SourceError``: no text reached the parser at all (``NotSelected``,
  ``ReadFailed``) or the caller's pre-screen rejected it
  (``NotRecognizedFormat``).
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

__all__ = [
    "IngestError",
    "ParseError",
    "ShapeError",
    "SourceError",
    "NotSelected",
    "ReadFailed",
    "NotRecognizedFormat",
    "format_key_path",
]


class IngestError(RuntimeError):
    """Base class for failures inside the parse/project core."""


class ParseError(IngestError):
    def __init__(
        self,
        offset: int,
        expected: str,
        found: str,
        *,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        self.offset = offset
        self.expected = expected
        self.found = found
        self.line = line
        self.column = column
        where = f"offset {offset}"
        if line is not None and column is not None:
            where += f" (line {line}, column {column})"
        super().__init__(f"{where}: expected {expected}, found {found}")


def format_key_path(key_path: Sequence[str]) -> str:
    return ", ".join(key_path) if key_path else "<root>"


class ShapeError(IngestError):
    def __init__(self, key_path: Sequence[str], expected: str, found: str):
        self.key_path: Tuple[str, ...] = tuple(key_path)
        self.expected = expected
        self.found = found
        super().__init__(f"{format_key_path(self.key_path)}: expected {expected}, found {found}")


class SourceError(RuntimeError):
    """Base class for provider and pre-screen failures."""


class NotSelected(SourceError):
    pass


class ReadFailed(SourceError):
    pass


class NotRecognizedFormat(SourceError):
    pass
