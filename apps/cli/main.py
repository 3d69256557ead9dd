#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Unified CLI dispatcher for mplus."""

from __future__ import annotations

import importlib
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from apps.cli.registry import get_tools


def _resolve_tool(alias: Optional[str]) -> Optional[dict]:
    if not alias:
        return None
    key = str(alias).strip()
    return next((t for t in get_tools() if t.get("alias") == key or t.get("module") == key), None)


def print_tools(console: Optional[Console] = None) -> None:
    console = console or Console()
    table = Table(title="mplus", box=None, header_style="bold cyan")
    table.add_column("Command", style="bold")
    table.add_column("Description")
    table.add_column("Usage", style="dim")
    for tool in get_tools():
        table.add_row(tool["alias"], tool["desc"], tool["usage"])
    console.print(table)


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(argv) if argv is not None else list(sys.argv[1:])
    alias = argv[0] if argv else None
    tool = _resolve_tool(alias)

    if tool is None:
        if alias and alias not in ("-h", "--help", "help"):
            Console(stderr=True).print(f"[red]unknown command: {alias}[/red]")
            print_tools()
            return 2
        print_tools()
        return 0

    module = importlib.import_module(f"apps.cli.commands.{tool['module']}")
    return int(module.main(argv[1:]) or 0)


if __name__ == "__main__":
    raise SystemExit(main())
