#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""MythicPlusStatsEngine

This module is intentionally UI-agnostic.

Responsibilities
- Acquire the SavedVariables text through a source provider (file or memory).
- Pre-screen the text for the top-level variable name.
- Run the two core stages: literal parse -> schema projection.

Design notes
- Provider failures (SourceError) and core failures (IngestError) are raised
  as-is and never wrapped into each other.
- Use `silent=True` to suppress INFO logs.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional, Protocol, Union

from mplus_stats.config import StatsConfig, resolve_config
from mplus_stats.errors import NotRecognizedFormat, NotSelected, ReadFailed
from mplus_stats.lua.parser import Assignment, parse_assignment
from mplus_stats.projector import SchemaProjector
from mplus_stats.schemas.runs import RunsById, count_runs

__all__ = [
    "SourceProvider",
    "FileSourceProvider",
    "TextSourceProvider",
    "MythicPlusStatsEngine",
]

logger = logging.getLogger(__name__)


class SourceProvider(Protocol):
    def read(self) -> str:
        """Return the whole file text, or raise NotSelected / ReadFailed."""
        ...


class FileSourceProvider:
    def __init__(self, path: Optional[Union[str, Path]]):
        self.path = Path(path).expanduser() if path else None

    def describe(self) -> str:
        return str(self.path) if self.path else "<no file>"

    def read(self) -> str:
        if self.path is None:
            raise NotSelected("no SavedVariables file selected")
        if not self.path.is_file():
            raise ReadFailed(f"file not found: {self.path}")
        try:
            return self.path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise ReadFailed(f"cannot read {self.path}: {e}") from e


class TextSourceProvider:
    def __init__(self, text: Optional[str], label: str = "<memory>"):
        self.text = text
        self.label = label

    def describe(self) -> str:
        return self.label

    def read(self) -> str:
        if self.text is None:
            raise NotSelected("no text provided")
        return self.text


class MythicPlusStatsEngine:
    def __init__(self, config: Optional[StatsConfig] = None, *, silent: bool = False):
        self.config = config or resolve_config()
        self.silent = silent
        self.projector = SchemaProjector(
            outer_key=self.config.outer_key,
            run_id_field=self.config.run_id_field,
            strict=self.config.strict,
        )

    def _log(self, msg: str, *args) -> None:
        if not self.silent:
            logger.info(msg, *args)

    def default_provider(self) -> FileSourceProvider:
        return FileSourceProvider(self.config.saved_variables_path)

    def recognize(self, text: str) -> None:
        """Caller-level pre-screen; the parser itself assumes in-format text."""
        if not text or not text.strip():
            raise NotRecognizedFormat("file is empty")
        if self.config.variable not in text:
            raise NotRecognizedFormat(f"{self.config.variable} not found; not a MythicPlusStats SavedVariables file")

    def parse(self, text: str) -> Assignment:
        t0 = time.perf_counter()
        assignment = parse_assignment(text, require_local=False)
        logger.debug("parsed %d chars in %.1f ms", len(text), (time.perf_counter() - t0) * 1000)
        return assignment

    def ingest_text(self, text: str) -> RunsById:
        self.recognize(text)
        assignment = self.parse(text)
        if assignment.name != self.config.variable:
            raise NotRecognizedFormat(f"assignment to {assignment.name!r}, expected {self.config.variable!r}")

        t0 = time.perf_counter()
        runs = self.projector.project(assignment.table)
        logger.debug("projected in %.1f ms", (time.perf_counter() - t0) * 1000)
        self._log("Ingested %d map(s), %d run(s)", len(runs), count_runs(runs))
        return runs

    def ingest(self, provider: Optional[SourceProvider] = None) -> RunsById:
        provider = provider or self.default_provider()
        text = provider.read()
        describe = getattr(provider, "describe", None)
        self._log("Read %d chars from %s", len(text), describe() if describe else "source")
        return self.ingest_text(text)
