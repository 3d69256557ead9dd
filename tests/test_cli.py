"""Tests for the mplus command line front-end."""

import json

import pytest

from apps.cli import main as cli_main
from apps.cli.cli_common import EXIT_CONFIG, EXIT_INGEST, EXIT_OK, EXIT_SOURCE
from mplus_stats.lua import parse_assignment


@pytest.fixture(autouse=True)
def _wide_console(monkeypatch):
    monkeypatch.setenv("COLUMNS", "300")


@pytest.fixture
def empty_ini(tmp_path):
    p = tmp_path / "settings.ini"
    p.write_text("[PATHS]\n", encoding="utf-8")
    return p


def test_no_command_lists_tools(capsys):
    assert cli_main.main([]) == 0
    out = capsys.readouterr().out
    assert "show" in out and "doctor" in out

def test_unknown_command(capsys):
    assert cli_main.main(["frobnicate"]) == 2

def test_show_json(sample_path, empty_ini, capsys):
    code = cli_main.main(["show", str(sample_path), "--json", "--config", str(empty_ini)])
    assert code == EXIT_OK
    doc = json.loads(capsys.readouterr().out)
    assert doc["summary"]["runs"] == 4
    assert doc["runsById"]["375"]["10"]["success"]["1001"]["score"] == 320.5
    assert doc["meta"]["tool"] == "mplus show"

def test_show_json_filtered(sample_path, empty_ini, capsys):
    code = cli_main.main(["show", str(sample_path), "--json", "--map", "2", "--config", str(empty_ini)])
    assert code == EXIT_OK
    doc = json.loads(capsys.readouterr().out)
    assert list(doc["runsById"]) == ["2"]

def test_show_tree(sample_path, empty_ini, capsys):
    code = cli_main.main(["show", str(sample_path), "--config", str(empty_ini)])
    assert code == EXIT_OK
    out = capsys.readouterr().out
    assert "map 375" in out
    assert "run 1001" in out
    assert "Mistcaller" in out

def test_show_missing_file(tmp_path, empty_ini, capsys):
    code = cli_main.main(["show", str(tmp_path / "none.lua"), "--config", str(empty_ini)])
    assert code == EXIT_SOURCE
    assert "ReadFailed" in capsys.readouterr().err

def test_show_unrecognized_file(tmp_path, empty_ini, capsys):
    p = tmp_path / "Other.lua"
    p.write_text("OtherDB = {}", encoding="utf-8")
    assert cli_main.main(["show", str(p), "--config", str(empty_ini)]) == EXIT_SOURCE
    assert "NotRecognizedFormat" in capsys.readouterr().err

def test_show_parse_error(tmp_path, empty_ini, capsys):
    p = tmp_path / "MythicPlusStats.lua"
    p.write_text('MythicPlusStatsDB = { ["runsById"] = {', encoding="utf-8")
    assert cli_main.main(["show", str(p), "--config", str(empty_ini)]) == EXIT_INGEST
    assert "Parse error" in capsys.readouterr().err

def test_show_strict_flag(tmp_path, empty_ini, capsys):
    p = tmp_path / "MythicPlusStats.lua"
    p.write_text('MythicPlusStatsDB = { [1] = { [2] = { ["x"] = {} } }, [1] = {} }', encoding="utf-8")
    assert cli_main.main(["show", str(p), "--config", str(empty_ini), "--json"]) == EXIT_OK
    capsys.readouterr()
    assert cli_main.main(["show", str(p), "--config", str(empty_ini), "--strict"]) == EXIT_INGEST
    assert "Unexpected structure" in capsys.readouterr().err

def test_show_bad_strict_setting(sample_path, empty_ini, monkeypatch, capsys):
    monkeypatch.setenv("MPLUS_STRICT", "maybe")
    assert cli_main.main(["show", str(sample_path), "--config", str(empty_ini)]) == EXIT_CONFIG
    err = capsys.readouterr().err
    assert "Bad settings" in err
    assert "Traceback" not in err

def test_dump_deeply_nested_file(tmp_path, capsys):
    depth = 1500
    p = tmp_path / "Deep.lua"
    p.write_text("MythicPlusStatsDB = " + "{" * depth + "}" * depth, encoding="utf-8")
    assert cli_main.main(["dump", str(p), "--indent", "0"]) == EXIT_OK
    out = capsys.readouterr().out
    assert parse_assignment(out).name == "MythicPlusStatsDB"

def test_dump_is_canonical(sample_path, sample_text, capsys):
    assert cli_main.main(["dump", str(sample_path), "--indent", "0"]) == EXIT_OK
    out = capsys.readouterr().out
    assert out.startswith("local MythicPlusStatsDB = {")
    assert parse_assignment(out) == parse_assignment(sample_text, require_local=False)

def test_doctor_with_explicit_file(sample_path, tmp_path, capsys):
    ini = tmp_path / "settings.ini"
    ini.write_text(f"[PATHS]\nSAVED_VARIABLES = {sample_path}\n", encoding="utf-8")
    assert cli_main.main(["doctor", "--config", str(ini)]) == 0
    assert "4 run(s)" in capsys.readouterr().out

def test_doctor_without_location(empty_ini, capsys):
    assert cli_main.main(["doctor", "--config", str(empty_ini)]) == 1
    assert "WOW_ROOT" in capsys.readouterr().out
