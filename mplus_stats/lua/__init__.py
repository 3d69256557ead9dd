# -*- coding: utf-8 -*-
"""Literal parser for Lua SavedVariables tables."""

from mplus_stats.lua.dump import dump_assignment, dump_value, quote_string
from mplus_stats.lua.lexer import Lexer, Token
from mplus_stats.lua.parser import Assignment, LiteralParser, parse_assignment, parse_value
from mplus_stats.lua.scan import line_col, skip_blank
from mplus_stats.lua.values import (
    NIL,
    Boolean,
    Field,
    Key,
    Nil,
    Number,
    PositionalIndex,
    Scalar,
    String,
    StringKey,
    Table,
    Value,
    describe,
    is_scalar,
    key_text,
)

__all__ = [
    "Assignment",
    "LiteralParser",
    "Lexer",
    "Token",
    "parse_assignment",
    "parse_value",
    "dump_assignment",
    "dump_value",
    "quote_string",
    "line_col",
    "skip_blank",
    "NIL",
    "Nil",
    "Boolean",
    "Number",
    "String",
    "Table",
    "Field",
    "Key",
    "StringKey",
    "PositionalIndex",
    "Scalar",
    "Value",
    "describe",
    "is_scalar",
    "key_text",
]
