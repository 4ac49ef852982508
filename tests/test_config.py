"""Tests for utils.config module."""

import json
from pathlib import Path

import pytest

from utils.config import AppSettings, Config, HistorySettings
from utils.paths import data_dir, expand_path


class TestConfigInit:
    """Tests for Config initialization."""

    def test_missing_file_is_generated_with_defaults(self, tmp_path):
        """A fresh install writes a default config file."""
        config_file = tmp_path / "gti" / "config.json"
        config = Config(config_file)

        assert config_file.exists()
        assert json.loads(config_file.read_text()) == AppSettings().model_dump()
        assert config.config_dir == config_file.parent

    def test_generate_creates_data_and_cache_dirs(self, tmp_path):
        """XDG data and cache directories are created alongside the config."""
        Config(tmp_path / "gti" / "config.json")
        assert (tmp_path / "data" / "gti").is_dir()
        assert (tmp_path / "cache" / "gti").is_dir()

    def test_default_path_uses_xdg_config_home(self, tmp_path):
        """Without an explicit path the XDG config directory is used."""
        config = Config()
        assert config.config_file == tmp_path / "config" / "gti" / "config.json"

    def test_default_history_file_in_data_dir(self):
        """The history log lives in the XDG data directory by default."""
        assert AppSettings().history.path == data_dir() / "history.jsonl"

    def test_existing_file_is_loaded(self, tmp_path):
        """Values from disk override defaults; missing sections default."""
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"history": {"enabled": False}, "timed": {"default_seconds": 60}}))

        config = Config(config_file)

        assert config.settings.history.enabled is False
        assert config.settings.timed.default_seconds == 60
        assert config.settings.network.timeout_ms == 5000

    @pytest.mark.parametrize(
        "content",
        ["{not json", '{"network": {"timeout_ms": -5}}', '{"display": {"fps": "fast"}}'],
    )
    def test_invalid_file_falls_back_to_defaults(self, tmp_path, content):
        """An unparsable or invalid file is not fatal."""
        config_file = tmp_path / "config.json"
        config_file.write_text(content)

        config = Config(config_file)

        assert config.settings == AppSettings()

    def test_unknown_keys_ignored(self, tmp_path):
        """Keys from newer versions do not break loading."""
        config_file = tmp_path / "config.json"
        config_file.write_text('{"history": {"enabled": true, "color": "red"}, "extra": 1}')

        config = Config(config_file)

        assert config.settings.history.enabled is True


class TestConfigGetSet:
    """Tests for dotted-key access."""

    def test_get_nested_value(self, config):
        assert config.get("network.timeout_ms") == 5000
        assert config.get("language.default") == "english"

    def test_get_missing_key_returns_default(self, config):
        assert config.get("network.retries") is None
        assert config.get("nope.nothing", default="x") == "x"

    def test_typed_getters(self, config):
        assert config.get_int("timed.default_seconds") == 30
        assert config.get_bool("history.enabled") is True
        assert config.get_int("theme.active", default=7) == 7

    def test_set_validates_and_persists_after_save(self, config):
        """set() validates, save() writes, a new Config reads it back."""
        config.set("history.enabled", False)
        config.set("timed.default_seconds", 45)
        config.save()

        reloaded = Config(config.config_file)
        assert reloaded.settings.history.enabled is False
        assert reloaded.get_int("timed.default_seconds") == 45

    def test_set_invalid_value_raises(self, config):
        """Constraint violations raise ValueError and keep the old value."""
        with pytest.raises(ValueError, match="Invalid value"):
            config.set("network.timeout_ms", 0)
        assert config.get("network.timeout_ms") == 5000

    @pytest.mark.parametrize("key", ["history", "history.color", "colors.correct"])
    def test_set_unknown_key_raises(self, config, key):
        with pytest.raises(ValueError, match="Unknown setting"):
            config.set(key, 1)

    def test_reset_restores_defaults(self, config):
        """reset() rewrites the file with defaults."""
        config.set("theme.active", "nord")
        config.save()

        config.reset()

        assert Config(config.config_file).settings.theme.active == "gruvbox"

    def test_describe_is_json(self, config):
        assert json.loads(config.describe())["history"]["enabled"] is True


class TestPaths:
    """Tests for path helpers."""

    def test_expand_path_home(self):
        assert expand_path("~/history.jsonl") == Path.home() / "history.jsonl"

    def test_expand_path_absolute_unchanged(self, tmp_path):
        assert expand_path(tmp_path / "a") == tmp_path / "a"

    def test_history_settings_path_expanded(self):
        settings = HistorySettings(file="~/gti/history.jsonl")
        assert settings.path == Path.home() / "gti" / "history.jsonl"
