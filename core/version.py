"""Version information for gti."""

from __future__ import annotations

import subprocess
from datetime import datetime, timezone
from importlib import metadata
from pathlib import Path
from typing import Optional

DISTRIBUTION_NAME = "gti"
DEFAULT_VERSION = "unknown"

# Cached version (computed once)
_cached_version: Optional[str] = None


def _git_commit_date() -> Optional[str]:
    try:
        result = subprocess.run(
            ["git", "log", "-1", "--format=%ct"],
            capture_output=True,
            text=True,
            timeout=1,  # Don't hang on git errors
            check=True,
            cwd=Path(__file__).parent.parent,
        )
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired, OSError):
        return None

    timestamp_str = result.stdout.strip()
    if not timestamp_str:
        return None
    try:
        dt = datetime.fromtimestamp(int(timestamp_str), tz=timezone.utc)
    except ValueError:
        return None
    return f"dev ({dt.strftime('%B %d, %Y at %H:%M')})"


def get_version() -> str:
    """Get version string.

    Priority:
    1. Installed distribution metadata
    2. Last git commit timestamp (development checkout)
    3. "unknown"
    """
    global _cached_version

    if _cached_version is not None:
        return _cached_version

    try:
        _cached_version = metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        _cached_version = _git_commit_date() or DEFAULT_VERSION
    return _cached_version
