"""Tests for the canonical printer."""

import random

import pytest

from mplus_stats.lua import (
    NIL,
    Boolean,
    Field,
    Number,
    PositionalIndex,
    String,
    StringKey,
    Table,
    dump_assignment,
    dump_value,
    parse_assignment,
    parse_value,
)
from mplus_stats.lua.dump import format_number, quote_string

_ALPHABET = 'abcXYZ 019_-"\\\'\n\t\r\x01\x7féü{}[]=,;'


def _random_string(rng):
    return "".join(rng.choice(_ALPHABET) for _ in range(rng.randint(0, 8)))


def _random_scalar(rng):
    kind = rng.randint(0, 4)
    if kind == 0:
        return Boolean(rng.random() < 0.5)
    if kind == 1:
        return Number(float(rng.randint(-10**6, 10**6)))
    if kind == 2:
        return Number(rng.uniform(-1e6, 1e6))
    if kind == 3:
        return String(_random_string(rng))
    return NIL


def _random_table(rng, depth):
    fields = []
    next_index = 1
    used_explicit = set()
    for _ in range(rng.randint(0, 5)):
        if depth > 0 and rng.random() < 0.4:
            value = _random_table(rng, depth - 1)
        else:
            value = _random_scalar(rng)
        kind = rng.randint(0, 2)
        if kind == 0:
            key = PositionalIndex(next_index)
            next_index += 1
        elif kind == 1:
            key = StringKey(_random_string(rng))
        else:
            idx = rng.randint(-5, 50)
            if idx in used_explicit:
                continue
            used_explicit.add(idx)
            key = PositionalIndex(idx, explicit=True)
        fields.append(Field(key, value))
    return Table(tuple(fields))


# ---------------------------------------------------------------------------
# scalars
# ---------------------------------------------------------------------------

def test_quote_string_escapes():
    assert quote_string('a"b\\c\n') == '"a\\"b\\\\c\\n"'
    assert quote_string("\x01") == '"\\001"'

def test_format_number():
    assert format_number(3.0) == "3"
    assert format_number(-0.5) == "-0.5"
    assert format_number(float("inf")) == "1e999"
    with pytest.raises(ValueError):
        format_number(float("nan"))

def test_dump_implicit_and_explicit_keys():
    t = parse_value('{ "a", [5] = 2, ["k"] = true, "b" }')
    assert dump_value(t) == '{ "a", [5] = 2, ["k"] = true, "b" }'

def test_dump_empty_table():
    assert dump_value(Table()) == "{}"

def test_dump_indented():
    t = parse_value('{ ["a"] = { 1 } }')
    assert dump_value(t, indent=2) == '{\n  ["a"] = {\n    1,\n  },\n}'


# ---------------------------------------------------------------------------
# printed form re-parses to an equal tree
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("seed", range(40))
def test_dump_parse_roundtrip(seed):
    rng = random.Random(seed)
    tree = _random_table(rng, depth=4)
    text = dump_value(tree)
    assert parse_value(text) == tree
    assert parse_value(dump_value(tree, indent=4)) == tree

@pytest.mark.parametrize("seed", range(10))
def test_normalization_is_idempotent(seed):
    rng = random.Random(1000 + seed)
    tree = _random_table(rng, depth=3)
    once = dump_assignment("DB", tree, indent=1)
    twice = dump_assignment("DB", parse_assignment(once).table, indent=1)
    assert once == twice

@pytest.mark.parametrize("indent", [None, 1])
def test_deep_nesting_roundtrip(indent):
    depth = 2000
    text = "{" + '["k"] = {' * (depth - 1) + "1" + "}" * depth
    tree = parse_value(text)
    printed = dump_value(tree, indent=indent)
    assert dump_value(parse_value(printed), indent=indent) == printed
    n = 1
    t = parse_value(printed)
    while isinstance(t.fields[0].value, Table):
        t = t.fields[0].value
        n += 1
    assert n == depth
    assert t.fields[0].value == Number(1)

def test_sample_file_roundtrip(sample_text):
    a = parse_assignment(sample_text, require_local=False)
    again = parse_assignment(dump_assignment(a.name, a.table))
    assert again == a
