#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Configuration and SavedVariables health checks."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from apps.cli.cli_common import add_config_args, config_from_args, setup_logging
from mplus_stats.engine import FileSourceProvider, MythicPlusStatsEngine
from mplus_stats.errors import IngestError, SourceError
from mplus_stats.schemas.runs import count_runs


def _status(level: str) -> str:
    if level == "PASS":
        return "[green]PASS[/green]"
    if level == "WARN":
        return "[yellow]WARN[/yellow]"
    return "[red]FAIL[/red]"


def _check_path_exists(path: Path, kind: str) -> str:
    if kind == "file":
        ok = path.is_file()
    elif kind == "dir":
        ok = path.is_dir()
    else:
        ok = path.exists()
    return "PASS" if ok else "FAIL"


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="mplus doctor", description="Health checks")
    add_config_args(parser)
    args = parser.parse_args(argv)

    console = Console()
    setup_logging(args.verbose)
    console.print(Panel("[bold cyan]mplus doctor[/bold cyan]\nconfiguration and SavedVariables checks", border_style="cyan"))

    table = Table(title="Health Checks", box=None, show_header=True, header_style="bold cyan")
    table.add_column("Check", style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Details", style="dim")
    table.add_column("Fix Hint", style="green")

    fail = 0
    warn = 0

    # 1) config file (optional)
    if args.config.is_file():
        table.add_row("settings.ini", _status("PASS"), str(args.config), "")
    else:
        table.add_row("settings.ini", _status("WARN"), f"{args.config} (defaults in use)", "copy conf/settings.ini")
        warn += 1

    try:
        config = config_from_args(args)
    except ValueError as e:
        table.add_row("parse settings", _status("FAIL"), str(e), "check MPLUS_STRICT / PARSER.STRICT")
        console.print(table)
        return 1

    # 2) location
    if config.saved_variables:
        table.add_row("config: SAVED_VARIABLES", _status("PASS"), str(config.saved_variables), "")
    else:
        for k, v, hint in [
            ("WOW_ROOT", config.wow_root, "set PATHS.WOW_ROOT or --wow-root"),
            ("ACCOUNT", config.account, "set PATHS.ACCOUNT or --account"),
        ]:
            level = "PASS" if v else "FAIL"
            table.add_row(f"config: {k}", _status(level), str(v) if v else "(empty)", hint if not v else "")
            if not v:
                fail += 1
        if config.wow_root:
            level = _check_path_exists(config.wow_root / config.flavor, "dir")
            table.add_row("game folder", _status(level), str(config.wow_root / config.flavor), "check FLAVOR" if level != "PASS" else "")
            if level != "PASS":
                fail += 1

    # 3) file + ingest
    path = config.saved_variables_path
    if path is not None:
        level = _check_path_exists(path, "file")
        table.add_row("SavedVariables file", _status(level), str(path), "log in once with the addon enabled" if level != "PASS" else "")
        if level != "PASS":
            fail += 1
        else:
            engine = MythicPlusStatsEngine(config, silent=True)
            try:
                runs = engine.ingest(FileSourceProvider(path))
                table.add_row("ingest", _status("PASS"), f"{len(runs)} map(s), {count_runs(runs)} run(s)", "")
            except SourceError as e:
                table.add_row("ingest", _status("FAIL"), f"{type(e).__name__}: {e}", "is this MythicPlusStats.lua?")
                fail += 1
            except IngestError as e:
                table.add_row("ingest", _status("FAIL"), f"{type(e).__name__}: {e}", "run mplus show -v for details")
                fail += 1

    table.add_row("duplicate keys", _status("PASS"), "strict (reject)" if config.strict else "last write wins", "")

    console.print(table)
    console.print(f"[dim]Summary: FAIL={fail}, WARN={warn}[/dim]")
    return 0 if fail == 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
