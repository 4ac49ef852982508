"""Shared test fixtures for gti tests."""

from datetime import datetime

import pytest

from core.models import SessionRecord
from utils.config import AppSettings, Config, HistorySettings


@pytest.fixture(autouse=True)
def isolated_xdg_dirs(tmp_path, monkeypatch):
    """Point all XDG base directories into the test's temp directory."""
    for var, name in (
        ("XDG_CONFIG_HOME", "config"),
        ("XDG_DATA_HOME", "data"),
        ("XDG_CACHE_HOME", "cache"),
        ("XDG_STATE_HOME", "state"),
    ):
        monkeypatch.setenv(var, str(tmp_path / name))


@pytest.fixture
def history_file(tmp_path):
    return tmp_path / "history" / "history.jsonl"


@pytest.fixture
def settings(history_file):
    """Settings with history enabled and written to a temp file."""
    return AppSettings(history=HistorySettings(enabled=True, file=str(history_file)))


@pytest.fixture
def config(tmp_path):
    """Config instance using a temp config file."""
    return Config(tmp_path / "config" / "gti" / "config.json")


@pytest.fixture
def make_record():
    """Factory for session records at a given local time."""

    def _make(timestamp: datetime, **fields) -> SessionRecord:
        values = {"mode": "word", "text_length": 20, "duration_ms": 10000, "wpm": 40.0}
        values.update(fields)
        return SessionRecord(timestamp=timestamp, **values)

    return _make


@pytest.fixture
def base_time():
    """A fixed local noon to build timestamps from."""
    return datetime(2025, 1, 15, 12, 0).astimezone()
