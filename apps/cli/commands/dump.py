#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Print the canonical literal form of a SavedVariables file."""

from __future__ import annotations

import argparse
from typing import List, Optional

from rich.console import Console

from apps.cli.cli_common import EXIT_OK, report_error
from mplus_stats.engine import FileSourceProvider
from mplus_stats.errors import IngestError, SourceError
from mplus_stats.lua import dump_assignment, parse_assignment


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="mplus dump", description="Normalize a SavedVariables literal")
    parser.add_argument("file", help="SavedVariables .lua file")
    parser.add_argument("--indent", type=int, default=2, help="spaces per level (0 = single line)")
    args = parser.parse_args(argv)

    err_console = Console(stderr=True)
    try:
        text = FileSourceProvider(args.file).read()
        assignment = parse_assignment(text, require_local=False)
    except (SourceError, IngestError) as e:
        return report_error(err_console, e)

    out = dump_assignment(assignment.name, assignment.table, indent=args.indent or None)
    Console(highlight=False, soft_wrap=True).print(out, end="", markup=False, emoji=False)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
