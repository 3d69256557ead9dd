# -*- coding: utf-8 -*-
"""Metadata block attached to JSON exports."""

from __future__ import annotations

from datetime import datetime
from importlib.metadata import PackageNotFoundError, version
from typing import Any, Dict, Optional

from mplus_stats.schemas.runs import RUNS_SCHEMA_VERSION

DIST_NAME = "mplus-stats"


def now_iso() -> str:
    return datetime.now().astimezone().isoformat(timespec="seconds")


def project_version() -> str:
    """Installed distribution version; "unknown" when running from a bare checkout."""
    try:
        return version(DIST_NAME)
    except PackageNotFoundError:
        return "unknown"


def build_meta(
    *,
    tool: str,
    source: Optional[str] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    meta: Dict[str, Any] = {
        "generated": now_iso(),
        "tool": str(tool),
        "project_version": project_version(),
        "schema_version": RUNS_SCHEMA_VERSION,
    }
    if source:
        meta["source"] = source
    if extra:
        meta.update(extra)
    return meta
