#!/usr/bin/env python3
"""mplus tool registry."""

TOOLS = [
    {
        "module": "show",
        "alias": "show",
        "desc": "Read MythicPlusStats.lua and display runs (tree or JSON)",
        "usage": "mplus show [FILE] [--json] [--strict] [--map ID] [--level N] [--state NAME]",
    },
    {
        "module": "dump",
        "alias": "dump",
        "desc": "Print the canonical literal form of a SavedVariables file",
        "usage": "mplus dump FILE [--indent N]",
    },
    {
        "module": "doctor",
        "alias": "doctor",
        "desc": "Check configuration and SavedVariables file health",
        "usage": "mplus doctor",
    },
]


def get_tools():
    return TOOLS
