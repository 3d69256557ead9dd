# -*- coding: utf-8 -*-
"""Tokenizer for the SavedVariables literal subset."""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Optional, Union

from mplus_stats.errors import ParseError
from mplus_stats.lua.scan import _is_digit, _is_ident_char, _is_ident_start, line_col, skip_blank

__all__ = [
    "Token",
    "Lexer",
    "LBRACE",
    "RBRACE",
    "LBRACKET",
    "RBRACKET",
    "EQUALS",
    "COMMA",
    "SEMICOLON",
    "STRING",
    "NUMBER",
    "NAME",
    "EOF",
    "_NUM_RE",
]

LBRACE = "{"
RBRACE = "}"
LBRACKET = "["
RBRACKET = "]"
EQUALS = "="
COMMA = ","
SEMICOLON = ";"
STRING = "string"
NUMBER = "number"
NAME = "name"
EOF = "eof"

_PUNCT = {
    "{": LBRACE,
    "}": RBRACE,
    "[": LBRACKET,
    "]": RBRACKET,
    "=": EQUALS,
    ",": COMMA,
    ";": SEMICOLON,
}

_NUM_RE = re.compile(r"^[+-]?(?:\d+\.\d*|\d*\.\d+|\d+)(?:[eE][+-]?\d+)?$")
_HEX_RE = re.compile(r"^([+-]?)0[xX]([0-9a-fA-F]+)$")

_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "\\": "\\",
    '"': '"',
    "'": "'",
    "\n": "\n",
}


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    offset: int
    value: Union[str, float, None] = None

    def describe(self) -> str:
        if self.kind == EOF:
            return "end of input"
        if self.kind == NAME:
            return f"identifier {self.text!r}"
        if self.kind == STRING:
            return f"string {self.text}"
        if self.kind == NUMBER:
            return f"number {self.text}"
        return repr(self.text)


class Lexer:
    """On-demand tokenizer with a single token of lookahead."""

    def __init__(self, text: str):
        self.text = text or ""
        # byte order mark written by some editors
        self.pos = 1 if self.text.startswith("\ufeff") else 0
        self._peeked: Optional[Token] = None

    def error(self, offset: int, expected: str, found: str) -> ParseError:
        line, column = line_col(self.text, offset)
        return ParseError(offset, expected, found, line=line, column=column)

    def peek(self) -> Token:
        if self._peeked is None:
            self._peeked = self._scan()
        return self._peeked

    def next(self) -> Token:
        tok = self.peek()
        self._peeked = None
        return tok

    def _scan(self) -> Token:
        text = self.text
        i = skip_blank(text, self.pos)
        n = len(text)
        if i >= n:
            self.pos = n
            return Token(EOF, "", n)

        ch = text[i]
        if ch in _PUNCT:
            self.pos = i + 1
            return Token(_PUNCT[ch], ch, i)
        if ch in ('"', "'"):
            return self._scan_string(i, ch)
        if _is_digit(ch) or ch == "." or (ch in "+-" and i + 1 < n and (_is_digit(text[i + 1]) or text[i + 1] == ".")):
            return self._scan_number(i)
        if _is_ident_start(ch):
            j = i + 1
            while j < n and _is_ident_char(text[j]):
                j += 1
            self.pos = j
            return Token(NAME, text[i:j], i)

        raise self.error(i, "a token", repr(ch))

    def _scan_string(self, start: int, quote: str) -> Token:
        text = self.text
        n = len(text)
        out = []
        i = start + 1
        while i < n:
            ch = text[i]
            if ch == quote:
                self.pos = i + 1
                return Token(STRING, text[start : i + 1], start, "".join(out))
            if ch == "\n":
                raise self.error(start, "closing quote", "newline inside string")
            if ch != "\\":
                out.append(ch)
                i += 1
                continue

            # escape sequence
            if i + 1 >= n:
                break
            esc = text[i + 1]
            if esc in _ESCAPES:
                out.append(_ESCAPES[esc])
                i += 2
                continue
            if _is_digit(esc):
                j = i + 1
                while j < n and j < i + 4 and _is_digit(text[j]):
                    j += 1
                code = int(text[i + 1 : j])
                if code > 255:
                    raise self.error(i, "decimal escape <= 255", text[i:j])
                out.append(chr(code))
                i = j
                continue
            raise self.error(i, "valid escape sequence", repr("\\" + esc))

        raise self.error(start, "closing quote", "end of input")

    def _scan_number(self, start: int) -> Token:
        text = self.text
        n = len(text)
        i = start
        if text[i] in "+-":
            i += 1

        if text.startswith(("0x", "0X"), i):
            i += 2
            while i < n and text[i] in "0123456789abcdefABCDEF":
                i += 1
        else:
            while i < n:
                ch = text[i]
                if _is_digit(ch) or ch in ".eE":
                    i += 1
                elif ch in "+-" and text[i - 1] in "eE":
                    i += 1
                else:
                    break

        # glued identifier characters belong to the bad literal
        end = i
        while end < n and (_is_ident_char(text[end]) or text[end] == "."):
            end += 1
        raw = text[start:end]

        if end == i:
            if _NUM_RE.match(raw):
                self.pos = end
                return Token(NUMBER, raw, start, float(raw))
            m = _HEX_RE.match(raw)
            if m:
                self.pos = end
                value = float(int(m.group(2), 16))
                return Token(NUMBER, raw, start, -value if m.group(1) == "-" else value)

        raise self.error(start, "number literal", f"malformed number {raw!r}")
