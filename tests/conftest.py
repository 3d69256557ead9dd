"""Shared fixtures."""

import os
from pathlib import Path

import pytest

DATA_DIR = Path(__file__).resolve().parent / "data"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in list(os.environ):
        if name.startswith("MPLUS_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_path() -> Path:
    return DATA_DIR / "MythicPlusStats.lua"


@pytest.fixture
def sample_text(sample_path) -> str:
    return sample_path.read_text(encoding="utf-8")
