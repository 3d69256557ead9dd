"""Tests for source providers and the ingest pipeline."""

import logging

import pytest

from mplus_stats.config import StatsConfig
from mplus_stats.engine import FileSourceProvider, MythicPlusStatsEngine, TextSourceProvider
from mplus_stats.errors import (
    IngestError,
    NotRecognizedFormat,
    NotSelected,
    ParseError,
    ReadFailed,
    ShapeError,
    SourceError,
)
from mplus_stats.schemas.runs import count_runs, get_run


@pytest.fixture
def engine():
    return MythicPlusStatsEngine(StatsConfig(), silent=True)


# ---------------------------------------------------------------------------
# providers
# ---------------------------------------------------------------------------

def test_file_provider_not_selected():
    with pytest.raises(NotSelected):
        FileSourceProvider(None).read()

def test_file_provider_missing_file(tmp_path):
    with pytest.raises(ReadFailed):
        FileSourceProvider(tmp_path / "nope.lua").read()

def test_file_provider_bad_encoding(tmp_path):
    p = tmp_path / "bad.lua"
    p.write_bytes(b"MythicPlusStatsDB = { \xff\xfe }")
    with pytest.raises(ReadFailed):
        FileSourceProvider(p).read()

def test_file_provider_strips_bom(tmp_path):
    p = tmp_path / "bom.lua"
    p.write_bytes("\ufeffMythicPlusStatsDB = {}".encode("utf-8"))
    assert FileSourceProvider(p).read() == "MythicPlusStatsDB = {}"

def test_text_provider():
    assert TextSourceProvider("x").read() == "x"
    with pytest.raises(NotSelected):
        TextSourceProvider(None).read()

def test_error_families_are_distinct():
    assert issubclass(NotRecognizedFormat, SourceError)
    assert not issubclass(NotRecognizedFormat, IngestError)
    assert not issubclass(ParseError, SourceError)
    assert not issubclass(ShapeError, SourceError)


# ---------------------------------------------------------------------------
# pipeline
# ---------------------------------------------------------------------------

def test_ingest_sample_file(engine, sample_path):
    runs = engine.ingest(FileSourceProvider(sample_path))
    assert sorted(runs) == [2, 375]
    assert count_runs(runs) == 4
    assert runs[375][12] == {}

    run = get_run(runs, 375, 10, "success", 1001)
    assert run["score"] == 320.5
    assert run["inTime"] is True
    assert run["note"] == 'said "gg" \\o/'
    assert run["encounters"] == [
        {"name": "Ingra Maloch", "kills": 1, "duration": 95.25},
        {"name": "Mistcaller", "kills": 1, "duration": 61},
    ]
    assert get_run(runs, 375, 10, "success", 1002)["encounters"] == []
    assert get_run(runs, 375, 10, "failed", 1003)["deaths"] == 14
    assert get_run(runs, 2, 7, "abandoned", 990) == {"score": -15}

def test_ingest_accepts_local_prefix(engine):
    runs = engine.ingest_text('local MythicPlusStatsDB = { [2] = { [10] = { ["success"] = { { ["runId"] = 1 } } } } }')
    assert runs == {2: {10: {"success": {1: {}}}}}

def test_ingest_uses_default_provider(sample_path):
    engine = MythicPlusStatsEngine(StatsConfig(saved_variables=sample_path), silent=True)
    assert count_runs(engine.ingest()) == 4

def test_default_provider_without_location():
    engine = MythicPlusStatsEngine(StatsConfig(), silent=True)
    with pytest.raises(NotSelected):
        engine.ingest()

def test_empty_text_not_recognized(engine):
    with pytest.raises(NotRecognizedFormat):
        engine.ingest_text("   \n")

def test_prescreen_rejects_other_files(engine):
    with pytest.raises(NotRecognizedFormat):
        engine.ingest_text("SomeOtherAddonDB = {}")

def test_wrong_variable_name(engine):
    with pytest.raises(NotRecognizedFormat):
        engine.ingest_text('OtherDB = { ["from"] = "MythicPlusStatsDB" }')

def test_parse_error_propagates(engine):
    with pytest.raises(ParseError) as exc:
        engine.ingest_text('MythicPlusStatsDB = { ["runsById"] = { [2] = { }')
    assert exc.value.found == "end of input"

def test_parse_error_offsets_refer_to_file_text(engine):
    text = 'MythicPlusStatsDB = { bad = 1 }'
    with pytest.raises(ParseError) as exc:
        engine.ingest_text(text)
    assert text[exc.value.offset:].startswith("bad")

def test_shape_error_propagates(engine):
    with pytest.raises(ShapeError):
        engine.ingest_text('MythicPlusStatsDB = { ["runsById"] = { [2] = 5 } }')

def test_strict_config(sample_text):
    text = sample_text.replace('["runId"] = 1002,', '["runId"] = 1002,\n["runId"] = 1002,')
    lenient = MythicPlusStatsEngine(StatsConfig(), silent=True)
    assert count_runs(lenient.ingest_text(text)) == 4
    strict = MythicPlusStatsEngine(StatsConfig(strict=True), silent=True)
    with pytest.raises(ShapeError):
        strict.ingest_text(text)

def test_ingest_logs_summary(sample_path, caplog):
    engine = MythicPlusStatsEngine(StatsConfig())
    with caplog.at_level(logging.INFO, logger="mplus_stats.engine"):
        engine.ingest(FileSourceProvider(sample_path))
    assert "2 map(s), 4 run(s)" in caplog.text

def test_silent_engine_logs_nothing(sample_path, caplog):
    engine = MythicPlusStatsEngine(StatsConfig(), silent=True)
    with caplog.at_level(logging.INFO, logger="mplus_stats.engine"):
        engine.ingest(FileSourceProvider(sample_path))
    assert caplog.text == ""
