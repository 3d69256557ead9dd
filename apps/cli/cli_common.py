#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Shared helpers for CLI tools."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from mplus_stats.config import DEFAULT_CONFIG_PATH, StatsConfig, resolve_config
from mplus_stats.errors import IngestError, ParseError, ShapeError, SourceError

PROJECT_ROOT = Path(__file__).resolve().parents[2]

EXIT_OK = 0
EXIT_SOURCE = 2
EXIT_INGEST = 3
EXIT_CONFIG = 4


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console or Console(stderr=True), show_path=False)],
    )


def add_config_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="settings.ini path")
    parser.add_argument("--wow-root", default=None, help="World of Warcraft install folder")
    parser.add_argument("--account", default=None, help="account folder under WTF/Account")
    parser.add_argument("--strict", action="store_true", default=None, help="reject duplicate keys")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")


def config_from_args(args: argparse.Namespace, saved_variables: Optional[str] = None) -> StatsConfig:
    return resolve_config(
        config_path=args.config,
        wow_root=args.wow_root,
        account=args.account,
        saved_variables=saved_variables,
        strict=args.strict,
    )


def report_error(console: Console, err: Exception) -> int:
    """Print a source/ingest failure; return the exit code for it."""
    if isinstance(err, SourceError):
        console.print(f"[yellow]No result ({type(err).__name__}):[/yellow] {err}")
        return EXIT_SOURCE
    if isinstance(err, ParseError):
        console.print(f"[red]Parse error[/red] at {err}")
        return EXIT_INGEST
    if isinstance(err, ShapeError):
        console.print(f"[red]Unexpected structure[/red] at {err}")
        return EXIT_INGEST
    if isinstance(err, IngestError):
        console.print(f"[red]Ingest failed:[/red] {err}")
        return EXIT_INGEST
    raise err
