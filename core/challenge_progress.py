"""Challenge mode level progression persisted per config directory."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from core.models import GameProgress, ProgressLoadResult

log = logging.getLogger("gti.challenge")

PROGRESS_FILE_NAME = "challenge_progress.json"


class ProgressWriteError(RuntimeError):
    """Saving challenge progress failed."""


class ChallengeProgression:
    """Monotonic record of the highest challenge level passed.

    Whether an attempt passed is decided by the challenge content; this class
    is only told about verified passes through complete().
    """

    def __init__(self, config_dir: Path):
        """Initialize progression.

        Args:
            config_dir: Per-user config directory holding the progress file
        """
        self.progress_file = Path(config_dir) / PROGRESS_FILE_NAME

    def load(self) -> ProgressLoadResult:
        """Read stored progress.

        A missing file means no progress yet. An unreadable or corrupt file is
        also treated as level 0; the result is flagged as recovered and carries
        the reason.
        """
        if not self.progress_file.exists():
            return ProgressLoadResult()

        try:
            raw = self.progress_file.read_text(encoding="utf-8")
            progress = GameProgress.model_validate_json(raw)
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            diagnostic = f"Discarding challenge progress in {self.progress_file}: {e}"
            log.warning(diagnostic)
            return ProgressLoadResult(recovered=True, diagnostic=diagnostic)

        return ProgressLoadResult(progress=progress)

    @property
    def highest_level_completed(self) -> int:
        return self.load().progress.highest_level_completed

    def starting_level(self) -> int:
        """Level the next challenge session starts at. Has no side effects."""
        return self.highest_level_completed + 1

    def complete(self, level: int) -> bool:
        """Record a verified pass of a level.

        Replaying an already-cleared level leaves the state unchanged.

        Args:
            level: Level number that was passed

        Returns:
            True if the highest completed level advanced

        Raises:
            ProgressWriteError: If the new state cannot be saved
        """
        current = self.highest_level_completed
        if level <= current:
            log.debug(f"Level {level} already cleared (highest: {current})")
            return False

        self.save(GameProgress(highest_level_completed=level))
        log.info(f"Challenge progress advanced from level {current} to {level}")
        return True

    def save(self, progress: GameProgress) -> None:
        """Write progress to disk, replacing the previous state."""
        try:
            self.progress_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.progress_file, "w", encoding="utf-8") as f:
                json.dump(progress.model_dump(), f)
                f.write("\n")
        except OSError as e:
            raise ProgressWriteError(
                f"Cannot save challenge progress to {self.progress_file}: {e}"
            ) from e
