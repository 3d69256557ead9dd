#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""apps/cli/commands/show.py

Thin presentation layer: read the SavedVariables file, print the runs.
"""

from __future__ import annotations

import argparse
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from apps.cli.cli_common import EXIT_CONFIG, EXIT_OK, add_config_args, config_from_args, report_error, setup_logging
from mplus_stats.engine import MythicPlusStatsEngine
from mplus_stats.errors import IngestError, SourceError
from mplus_stats.render.runs_json import dumps_runs
from mplus_stats.schemas.meta import build_meta
from mplus_stats.schemas.runs import ENCOUNTERS_FIELD, RunsById, filter_runs, summarize_runs


def _fmt_scalar(v) -> str:
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, str):
        return escape(repr(v))
    return str(v)


def build_tree(runs: RunsById, title: str = "runsById") -> Tree:
    root = Tree(f"[bold]{title}[/bold]")
    for map_id, levels in sorted(runs.items()):
        map_node = root.add(f"[cyan]map {map_id}[/cyan]")
        for level, states in sorted(levels.items()):
            level_node = map_node.add(f"[magenta]+{level}[/magenta]")
            for state, by_id in sorted(states.items()):
                state_style = "green" if state == "success" else "yellow"
                state_node = level_node.add(f"[{state_style}]{escape(state)}[/{state_style}] ({len(by_id)})")
                for run_id, run in sorted(by_id.items()):
                    run_node = state_node.add(f"[bold]run {run_id}[/bold]")
                    for name, val in run.items():
                        if name == ENCOUNTERS_FIELD and isinstance(val, list):
                            enc_node = run_node.add(f"{name} [dim]({len(val)})[/dim]")
                            for i, rec in enumerate(val, 1):
                                fields = ", ".join(f"{escape(k)}={_fmt_scalar(x)}" for k, x in rec.items())
                                enc_node.add(f"[dim]#{i}[/dim] {fields}")
                        else:
                            run_node.add(f"{escape(name)} = {_fmt_scalar(val)}")
    return root


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="mplus show", description="Display MythicPlusStats runs")
    parser.add_argument("file", nargs="?", default=None, help="MythicPlusStats.lua (default: from config)")
    parser.add_argument("--json", action="store_true", help="print JSON instead of a tree")
    parser.add_argument("--map", type=int, default=None, help="only this map id")
    parser.add_argument("--level", type=int, default=None, help="only this key level")
    parser.add_argument("--state", default=None, help="only this run state")
    add_config_args(parser)
    args = parser.parse_args(argv)

    console = Console()
    setup_logging(args.verbose)

    try:
        config = config_from_args(args, saved_variables=args.file)
    except ValueError as e:
        Console(stderr=True).print(f"[red]Bad settings:[/red] {escape(str(e))}")
        return EXIT_CONFIG

    engine = MythicPlusStatsEngine(config, silent=args.json)
    try:
        runs = engine.ingest()
    except (SourceError, IngestError) as e:
        return report_error(Console(stderr=True), e)

    runs = filter_runs(runs, map_id=args.map, key_level=args.level, state=args.state)

    if args.json:
        meta = build_meta(tool="mplus show", source=str(config.saved_variables_path or ""))
        console.print_json(dumps_runs(runs, meta))
        return EXIT_OK

    console.print(build_tree(runs))
    summary = summarize_runs(runs)
    states = ", ".join(f"{k}={v}" for k, v in sorted(summary["states"].items())) or "-"
    console.print(
        f"[dim]maps={summary['maps']} runs={summary['runs']} encounters={summary['encounters']} ({states})[/dim]"
    )
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
