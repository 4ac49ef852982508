"""Configuration management for gti."""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from utils.paths import cache_dir, config_dir, data_dir, expand_path

log = logging.getLogger("gti.config")

CONFIG_FILE_NAME = "config.json"


def _default_history_file() -> str:
    return str(data_dir() / "history.jsonl")


class DisplaySettings(BaseModel):
    """Layout options read by the terminal UI."""

    max_width: int = Field(default=80, gt=0, description="Maximum text width in columns")
    center_text: bool = Field(default=True, description="Center text horizontally")
    show_progress_bar: bool = Field(default=True, description="Show progress bar")
    fps: int = Field(
        default=60, ge=1, le=240, description="Live display refresh rate (frames/sec)"
    )

    model_config = ConfigDict(extra="ignore")


class ThemeSettings(BaseModel):
    """Theme selection and text styles."""

    active: str = Field(default="gruvbox", description="Active theme name")
    underline_current: bool = Field(default=True, description="Underline cursor char")
    dim_pending: bool = Field(default=True, description="Dim untyped text")
    bold_results: bool = Field(default=True, description="Bold results screen")

    model_config = ConfigDict(extra="ignore")


class TimedSettings(BaseModel):
    default_seconds: int = Field(
        default=30, gt=0, description="Default duration of a timed session (sec)"
    )

    model_config = ConfigDict(extra="ignore")


class LanguageSettings(BaseModel):
    default: str = Field(default="english", description="Default word list language")
    words_dir: Optional[str] = Field(
        default=None, description="Directory with one word list file per language"
    )

    model_config = ConfigDict(extra="ignore")


class NetworkSettings(BaseModel):
    timeout_ms: int = Field(
        default=5000, gt=0, description="Quote fetch timeout in milliseconds"
    )

    model_config = ConfigDict(extra="ignore")


class HistorySettings(BaseModel):
    """Session history log settings."""

    enabled: bool = Field(default=True, description="Record completed sessions")
    file: str = Field(
        default_factory=_default_history_file,
        description="Path of the line-delimited JSON history log",
    )

    model_config = ConfigDict(extra="ignore")

    @property
    def path(self) -> Path:
        return expand_path(self.file)


class AppSettings(BaseModel):
    """Application settings with validation."""

    display: DisplaySettings = Field(default_factory=DisplaySettings)
    theme: ThemeSettings = Field(default_factory=ThemeSettings)
    timed: TimedSettings = Field(default_factory=TimedSettings)
    language: LanguageSettings = Field(default_factory=LanguageSettings)
    network: NetworkSettings = Field(default_factory=NetworkSettings)
    history: HistorySettings = Field(default_factory=HistorySettings)

    model_config = ConfigDict(extra="ignore")


class Config:
    """Configuration manager backed by a JSON file with Pydantic validation."""

    def __init__(self, config_file: Optional[Path] = None):
        """Load configuration, generating the file with defaults if missing.

        Args:
            config_file: Path to config.json (default: XDG config dir)
        """
        if config_file is None:
            config_file = config_dir() / CONFIG_FILE_NAME
        self.config_file = expand_path(config_file)
        self.settings = AppSettings()

        if not self.config_file.exists():
            self.generate()
        else:
            self.load()

    @property
    def config_dir(self) -> Path:
        """Directory of the config file; also holds per-user progress."""
        return self.config_file.parent

    def generate(self) -> None:
        """Create config, data and cache directories and write defaults."""
        for directory in (self.config_dir, data_dir(), cache_dir()):
            directory.mkdir(parents=True, exist_ok=True)
        self.settings = AppSettings()
        self.save()

    def load(self) -> None:
        """Read the config file; fall back to defaults if it is invalid."""
        try:
            self.settings = AppSettings.model_validate_json(
                self.config_file.read_text(encoding="utf-8")
            )
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            log.warning(
                f"Failed to load config file {self.config_file}: {e}. "
                "Using default configuration."
            )
            self.settings = AppSettings()

    def save(self) -> None:
        """Write current settings to the config file."""
        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        self.config_file.write_text(
            self.settings.model_dump_json(indent=2) + "\n", encoding="utf-8"
        )

    def reset(self) -> None:
        """Reset configuration to default settings."""
        self.generate()

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        """Get configuration value by dotted key.

        Args:
            key: Setting key, e.g. ``history.enabled``
            default: Value returned when the key does not exist

        Returns:
            Setting value
        """
        value: Any = self.settings.model_dump()
        for part in key.split("."):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]
        return value

    def get_int(self, key: str, default: int = 0) -> int:
        """Get integer configuration value."""
        value = self.get(key, default)
        try:
            return int(value)
        except (ValueError, TypeError):
            return default

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Get boolean configuration value."""
        value = self.get(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes", "on")
        return bool(value) if value else False

    def set(self, key: str, value: Any) -> None:
        """Set configuration value with pydantic validation.

        The change is kept in memory; call save() to persist it.

        Args:
            key: Dotted setting key
            value: Setting value

        Raises:
            ValueError: If the key is unknown or the value fails validation
        """
        section, _, field_name = key.partition(".")
        if section not in AppSettings.model_fields or not field_name:
            raise ValueError(f"Unknown setting: {key}")

        data = self.settings.model_dump()
        if field_name not in data[section]:
            raise ValueError(f"Unknown setting: {key}")
        data[section][field_name] = value

        try:
            self.settings = AppSettings.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Invalid value for {key}: {e}") from e

    def get_all(self) -> dict[str, Any]:
        """Get all settings as a nested dictionary."""
        return self.settings.model_dump()

    def describe(self) -> str:
        """Human-readable dump used by ``gti config --show``."""
        return json.dumps(self.get_all(), indent=2)
