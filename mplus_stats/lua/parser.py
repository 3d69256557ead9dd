# -*- coding: utf-8 -*-
"""Recursive-descent parser for the SavedVariables literal subset.

Grammar (one token of lookahead, no backtracking):

    assignment := 'local' NAME '=' table EOF      ('local' may be omitted when not required)
    table      := '{' (field (sep field)* sep?)? '}'      sep := ',' | ';'
    field      := '[' NUMBER ']' '=' value
                | '[' STRING ']' '=' value
                | STRING '=' value
                | value
    value      := table | STRING | NUMBER | 'true' | 'false' | 'nil'

Positional fields are numbered 1, 2, ... per table, independently of any
named or bracketed fields in the same table.

Nested tables are tracked on an explicit stack, so nesting depth is not
limited by the interpreter's recursion limit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from mplus_stats.lua.lexer import (
    COMMA,
    EOF,
    EQUALS,
    LBRACE,
    LBRACKET,
    NAME,
    NUMBER,
    RBRACE,
    RBRACKET,
    SEMICOLON,
    STRING,
    Lexer,
    Token,
)
from mplus_stats.lua.values import (
    NIL,
    Boolean,
    Field,
    Key,
    Number,
    PositionalIndex,
    String,
    StringKey,
    Table,
    Value,
)

__all__ = ["Assignment", "LiteralParser", "parse_assignment", "parse_value"]

_KEYWORDS = {"true", "false", "nil"}


@dataclass(frozen=True)
class Assignment:
    name: str
    table: Table


@dataclass
class _OpenTable:
    fields: List[Field] = field(default_factory=list)
    next_index: int = 1
    # key of the field whose value is the nested table currently being read
    pending_key: Optional[Key] = None

    def add(self, key: Optional[Key], value: Value) -> None:
        if key is None:
            key = PositionalIndex(self.next_index)
            self.next_index += 1
        self.fields.append(Field(key, value))


class LiteralParser:
    def __init__(self, text: str):
        self.lexer = Lexer(text)

    def _error(self, tok: Token, expected: str):
        return self.lexer.error(tok.offset, expected, tok.describe())

    def _expect(self, kind: str, expected: str) -> Token:
        tok = self.lexer.next()
        if tok.kind != kind:
            raise self._error(tok, expected)
        return tok

    def _expect_end(self) -> None:
        tok = self.lexer.peek()
        if tok.kind != EOF:
            raise self._error(tok, "end of input")

    # -- entry points ------------------------------------------------------

    def parse_assignment(self, require_local: bool = True) -> Assignment:
        tok = self.lexer.peek()
        if tok.kind == NAME and tok.text == "local":
            self.lexer.next()
        elif require_local:
            raise self._error(tok, "'local'")
        name = self._expect(NAME, "variable name")
        if name.text in _KEYWORDS or name.text == "local":
            raise self._error(name, "variable name")
        self._expect(EQUALS, "'='")
        tok = self.lexer.peek()
        if tok.kind != LBRACE:
            raise self._error(tok, "table constructor '{'")
        table = self.parse_table()
        self._expect_end()
        return Assignment(name=name.text, table=table)

    def parse_single_value(self) -> Value:
        value = self.parse_value()
        self._expect_end()
        return value

    # -- productions -------------------------------------------------------

    def parse_value(self) -> Value:
        if self.lexer.peek().kind == LBRACE:
            return self.parse_table()
        return self._parse_scalar()

    def _parse_scalar(self) -> Value:
        tok = self.lexer.next()
        if tok.kind == STRING:
            return String(str(tok.value))
        if tok.kind == NUMBER:
            return Number(float(tok.value))
        if tok.kind == NAME:
            if tok.text == "true":
                return Boolean(True)
            if tok.text == "false":
                return Boolean(False)
            if tok.text == "nil":
                return NIL
        raise self._error(tok, "value")

    def parse_table(self) -> Table:
        self._expect(LBRACE, "'{'")
        stack: List[_OpenTable] = [_OpenTable()]

        while True:
            top = stack[-1]
            tok = self.lexer.peek()

            if tok.kind == RBRACE:
                self.lexer.next()
                done = Table(tuple(top.fields))
                stack.pop()
                if not stack:
                    return done
                parent = stack[-1]
                parent.add(parent.pending_key, done)
                parent.pending_key = None
                self._after_field()
                continue

            if tok.kind == EOF:
                raise self._error(tok, "'}' to close table")

            key, value = self._parse_field_head()
            if value is None:
                if self.lexer.peek().kind == LBRACE:
                    self.lexer.next()
                    top.pending_key = key
                    stack.append(_OpenTable())
                    continue
                value = self._parse_scalar()
            top.add(key, value)
            self._after_field()

    def _after_field(self) -> None:
        sep = self.lexer.peek()
        if sep.kind in (COMMA, SEMICOLON):
            self.lexer.next()
        elif sep.kind == EOF:
            raise self._error(sep, "'}' to close table")
        elif sep.kind != RBRACE:
            raise self._error(sep, "',' or '}'")

    def _parse_field_head(self) -> Tuple[Optional[Key], Optional[Value]]:
        """Consume the key part of a field (through '=').

        Returns (key, None) when the value still has to be read, or
        (None, value) for a positional string already consumed.
        """
        tok = self.lexer.peek()

        if tok.kind == LBRACKET:
            self.lexer.next()
            key_tok = self.lexer.next()
            if key_tok.kind == STRING:
                key: Key = StringKey(str(key_tok.value))
            elif key_tok.kind == NUMBER:
                num = float(key_tok.value)
                if not num.is_integer():
                    raise self._error(key_tok, "integer key")
                key = PositionalIndex(int(num), explicit=True)
            else:
                raise self._error(key_tok, "string or number key")
            self._expect(RBRACKET, "']'")
            self._expect(EQUALS, "'='")
            return key, None

        if tok.kind == STRING:
            self.lexer.next()
            if self.lexer.peek().kind == EQUALS:
                self.lexer.next()
                return StringKey(str(tok.value)), None
            return None, String(str(tok.value))

        if tok.kind == NAME and tok.text not in _KEYWORDS:
            raise self._error(tok, "quoted field key or value")

        return None, None


def parse_assignment(text: str, require_local: bool = True) -> Assignment:
    """Parse ``local NAME = { ... }``; all-or-nothing.

    The addon itself writes ``NAME = { ... }``; pass ``require_local=False`` for raw files.
    """
    return LiteralParser(text).parse_assignment(require_local)


def parse_value(text: str) -> Value:
    """Parse one standalone literal value."""
    return LiteralParser(text).parse_single_value()
