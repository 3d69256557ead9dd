# -*- coding: utf-8 -*-
"""Reader for the MythicPlusStats addon's SavedVariables file."""

from mplus_stats.engine import (
    FileSourceProvider,
    MythicPlusStatsEngine,
    SourceProvider,
    TextSourceProvider,
)
from mplus_stats.errors import (
    IngestError,
    NotRecognizedFormat,
    NotSelected,
    ParseError,
    ReadFailed,
    ShapeError,
    SourceError,
)
from mplus_stats.lua import Table, Value, parse_assignment, parse_value
from mplus_stats.projector import SchemaProjector, project_runs
from mplus_stats.schemas.runs import EncounterRecord, Run, RunsById, iter_runs

__all__ = [
    "MythicPlusStatsEngine",
    "SourceProvider",
    "FileSourceProvider",
    "TextSourceProvider",
    "IngestError",
    "ParseError",
    "ShapeError",
    "SourceError",
    "NotSelected",
    "ReadFailed",
    "NotRecognizedFormat",
    "Table",
    "Value",
    "parse_assignment",
    "parse_value",
    "SchemaProjector",
    "project_runs",
    "RunsById",
    "Run",
    "EncounterRecord",
    "iter_runs",
]
