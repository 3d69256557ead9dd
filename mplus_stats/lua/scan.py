# -*- coding: utf-8 -*-
"""Low-level scanning helpers for the SavedVariables lexer."""

from __future__ import annotations

from typing import Optional, Tuple

__all__ = [
    "_is_ident_start",
    "_is_ident_char",
    "_is_digit",
    "_long_bracket_level",
    "_skip_long_bracket",
    "_skip_comment",
    "skip_blank",
    "line_col",
]

_WHITESPACE = frozenset(" \t\r\n\f\v")


def _is_ident_start(ch: str) -> bool:
    return ch == "_" or ("A" <= ch <= "Z") or ("a" <= ch <= "z")


def _is_ident_char(ch: str) -> bool:
    return _is_ident_start(ch) or _is_digit(ch)


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _long_bracket_level(text: str, i: int) -> Optional[int]:
    """
    If text[i:] starts a Lua long-bracket opener: [=*[ , return '=' count; else None.
    Examples: [[ -> 0, [=[ -> 1, [==[ -> 2
    """
    n = len(text)
    if i >= n or text[i] != "[":
        return None
    j = i + 1
    while j < n and text[j] == "=":
        j += 1
    if j < n and text[j] == "[":
        return j - i - 1
    return None


def _skip_long_bracket(text: str, i: int, level: int) -> int:
    """Skip a long-bracket block starting at i. Return next index (len(text) if unclosed)."""
    close_pat = "]" + ("=" * level) + "]"
    end = text.find(close_pat, i + 2 + level)
    if end == -1:
        return len(text)
    return end + len(close_pat)


def _skip_comment(text: str, i: int) -> int:
    """i points at '--'. Skip a line or block comment. Return next index."""
    if not text.startswith("--", i):
        return i

    level = _long_bracket_level(text, i + 2)
    if level is not None:
        return _skip_long_bracket(text, i + 2, level)

    nl = text.find("\n", i + 2)
    return len(text) if nl == -1 else nl + 1


def skip_blank(text: str, i: int) -> int:
    """Skip whitespace and comments starting at i."""
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in _WHITESPACE:
            i += 1
            continue
        if text.startswith("--", i):
            i = _skip_comment(text, i)
            continue
        break
    return i


def line_col(text: str, offset: int) -> Tuple[int, int]:
    """1-based (line, column) of a character offset."""
    offset = max(0, min(offset, len(text)))
    line = text.count("\n", 0, offset) + 1
    last_nl = text.rfind("\n", 0, offset)
    return line, offset - last_nl
