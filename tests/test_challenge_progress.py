"""Tests for ChallengeProgression."""

import json

import pytest

from core.challenge_progress import (
    PROGRESS_FILE_NAME,
    ChallengeProgression,
    ProgressWriteError,
)
from core.models import GameProgress


@pytest.fixture
def progression(tmp_path):
    return ChallengeProgression(tmp_path / "gti")


class TestStartingLevel:
    """Test the starting level query."""

    def test_fresh_profile_starts_at_level_one(self, progression):
        """Missing progress file means level 0 completed."""
        assert progression.starting_level() == 1
        assert not progression.progress_file.exists()

    def test_starting_level_has_no_side_effect(self, progression):
        """Querying twice gives the same answer and writes nothing."""
        assert progression.starting_level() == progression.starting_level()
        assert not progression.progress_file.exists()

    @pytest.mark.parametrize("level", [1, 2, 5, 42])
    def test_starting_level_after_complete(self, progression, level):
        """After complete(N) the next session starts at N + 1."""
        progression.complete(level)
        assert progression.starting_level() == level + 1


class TestComplete:
    """Test the monotonic completion transition."""

    def test_complete_advances_and_persists(self, progression):
        """A new highest level is written to disk."""
        assert progression.complete(3) is True

        assert progression.progress_file.name == PROGRESS_FILE_NAME
        data = json.loads(progression.progress_file.read_text())
        assert data == {"highest_level_completed": 3}

    def test_progress_never_regresses(self, progression):
        """complete(3) then complete(2) leaves level 3."""
        progression.complete(3)
        assert progression.complete(2) is False
        assert progression.highest_level_completed == 3

    def test_replaying_same_level_is_noop(self, progression):
        """Completing the current highest level again changes nothing."""
        progression.complete(2)
        mtime = progression.progress_file.stat().st_mtime_ns

        assert progression.complete(2) is False
        assert progression.progress_file.stat().st_mtime_ns == mtime

    def test_progress_shared_between_instances(self, tmp_path):
        """State is read from disk, not cached in the instance."""
        ChallengeProgression(tmp_path).complete(4)
        assert ChallengeProgression(tmp_path).starting_level() == 5

    def test_save_failure_is_raised(self, tmp_path):
        """An unwritable progress location raises ProgressWriteError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        with pytest.raises(ProgressWriteError):
            ChallengeProgression(blocker).complete(1)


class TestLoadRecovery:
    """Test fallback to level 0 on unusable stored state."""

    @pytest.mark.parametrize(
        "content",
        [
            "not json at all",
            '{"highest_level_completed": "three"}',
            '{"highest_level_completed": -4}',
            "[1, 2, 3]",
            "",
        ],
    )
    def test_corrupt_file_falls_back_to_zero(self, progression, content):
        """Corrupt progress is reported as recovered, not raised."""
        progression.progress_file.parent.mkdir(parents=True)
        progression.progress_file.write_text(content)

        result = progression.load()

        assert result.recovered
        assert result.diagnostic is not None
        assert result.progress.highest_level_completed == 0
        assert progression.starting_level() == 1

    def test_missing_file_is_not_recovery(self, progression):
        """A fresh profile is a normal state, not a fallback."""
        result = progression.load()
        assert not result.recovered
        assert result.diagnostic is None

    def test_complete_after_corruption_overwrites(self, progression):
        """Completing a level after a reset repairs the file."""
        progression.progress_file.parent.mkdir(parents=True)
        progression.progress_file.write_text("{broken")

        assert progression.complete(1) is True
        assert progression.load().progress == GameProgress(highest_level_completed=1)
