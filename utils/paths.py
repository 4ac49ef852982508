"""XDG base directories and path helpers for gti."""

import os
from pathlib import Path

APP_NAME = "gti"


def _xdg_dir(env_var: str, fallback: Path) -> Path:
    value = os.environ.get(env_var)
    if value:
        return Path(value)
    return fallback


def config_dir() -> Path:
    """Directory holding config.json and challenge_progress.json."""
    return _xdg_dir("XDG_CONFIG_HOME", Path.home() / ".config") / APP_NAME


def data_dir() -> Path:
    """Directory holding the session history log."""
    return _xdg_dir("XDG_DATA_HOME", Path.home() / ".local" / "share") / APP_NAME


def cache_dir() -> Path:
    return _xdg_dir("XDG_CACHE_HOME", Path.home() / ".cache") / APP_NAME


def state_dir() -> Path:
    """Directory for log files."""
    return _xdg_dir("XDG_STATE_HOME", Path.home() / ".local" / "state") / APP_NAME


def expand_path(path: str | Path) -> Path:
    """Expand a leading ``~`` to the user's home directory.

    Args:
        path: Path as written in the configuration file

    Returns:
        Expanded path
    """
    return Path(os.path.expanduser(str(path)))
