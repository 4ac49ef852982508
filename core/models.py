"""Pydantic models for gti data structures."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SessionMode(str, Enum):
    """What kind of text the session was typed against."""

    QUOTE = "quote"
    WORD = "word"
    TIMED = "timed"
    CHALLENGE = "challenge"


class KeystrokeEvent(BaseModel):
    """Single entry in a typing attempt's keystroke log."""

    position: int = Field(..., ge=0, description="Target index the event applies to")
    character: str = Field(..., description="Typed character, empty for backspace")
    expected_character: str = Field(..., description="Target character at position")
    timestamp_offset_ms: int = Field(
        default=0, description="Milliseconds since the attempt started"
    )
    was_correction: bool = Field(
        default=False, description="True for backspace events"
    )
    superseded: bool = Field(
        default=False, description="Character was later removed by a backspace"
    )

    model_config = ConfigDict(extra="ignore")

    @property
    def is_correct(self) -> bool:
        return not self.was_correction and self.character == self.expected_character


class SessionMetrics(BaseModel):
    """Derived performance metrics for one (possibly in-progress) session."""

    duration_ms: int = Field(..., ge=0, description="Measured elapsed time")
    characters_typed: int = Field(default=0, ge=0, description="Character keystrokes")
    raw_wpm: float = Field(default=0.0, ge=0, description="Gross words per minute")
    net_wpm: float = Field(default=0.0, ge=0, description="WPM minus uncorrected errors")
    adjusted_wpm: float = Field(
        default=0.0, ge=0, description="Net WPM penalized for corrected errors"
    )
    cpm: float = Field(default=0.0, ge=0, description="Characters per minute")
    accuracy: float = Field(
        default=100.0, ge=0, le=100, description="First-pass accuracy percentage"
    )
    first_pass_keystrokes: int = Field(default=0, ge=0)
    correct_first_pass: int = Field(default=0, ge=0)
    corrected_errors: int = Field(default=0, ge=0)
    uncorrected_errors: int = Field(default=0, ge=0)
    mistakes: int = Field(default=0, ge=0, description="All incorrect keystrokes")
    backspace_count: int = Field(default=0, ge=0)
    avg_word_length: float = Field(default=0.0, ge=0)

    model_config = ConfigDict(extra="ignore")


class SessionRecord(BaseModel):
    """One completed session as stored in the history log.

    Records are written once and never modified. Every field apart from the
    timestamp has a default so older or hand-edited lines still load.
    """

    timestamp: datetime = Field(..., description="Session completion instant")
    mode: str = Field(default=SessionMode.QUOTE.value, description="Mode tag")
    text_length: int = Field(default=0, ge=0, description="Target text length")
    duration_ms: int = Field(default=0, ge=0, description="Duration in milliseconds")
    wpm: float = Field(default=0.0, ge=0, description="Raw WPM")
    net_wpm: float = Field(default=0.0, ge=0)
    adjusted_wpm: float = Field(default=0.0, ge=0)
    cpm: float = Field(default=0.0, ge=0)
    accuracy: float = Field(default=0.0, ge=0, le=100)
    mistakes: int = Field(default=0, ge=0)
    corrected_errors: int = Field(default=0, ge=0)
    uncorrected_errors: int = Field(default=0, ge=0)
    backspace_count: int = Field(default=0, ge=0)
    avg_word_length: float = Field(default=0.0, ge=0)
    tier: Optional[str] = Field(default=None, description="Challenge tier name")
    quote_author: Optional[str] = Field(default=None, description="Quote author")

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("timestamp")
    @classmethod
    def assume_local_time(cls, v: datetime) -> datetime:
        """Naive timestamps are interpreted as local time."""
        if v.tzinfo is None:
            return v.astimezone()
        return v

    @classmethod
    def from_metrics(
        cls,
        metrics: SessionMetrics,
        mode: "str | SessionMode",
        text_length: int,
        timestamp: datetime,
        tier: Optional[str] = None,
        quote_author: Optional[str] = None,
    ) -> "SessionRecord":
        """Build a record from the final metric set of a session."""
        if isinstance(mode, SessionMode):
            mode = mode.value
        return cls(
            timestamp=timestamp,
            mode=mode,
            text_length=text_length,
            duration_ms=metrics.duration_ms,
            wpm=metrics.raw_wpm,
            net_wpm=metrics.net_wpm,
            adjusted_wpm=metrics.adjusted_wpm,
            cpm=metrics.cpm,
            accuracy=metrics.accuracy,
            mistakes=metrics.mistakes,
            corrected_errors=metrics.corrected_errors,
            uncorrected_errors=metrics.uncorrected_errors,
            backspace_count=metrics.backspace_count,
            avg_word_length=metrics.avg_word_length,
            tier=tier,
            quote_author=quote_author,
        )


class GameProgress(BaseModel):
    """Persisted challenge progress, one per config directory."""

    highest_level_completed: int = Field(
        default=0, ge=0, description="Highest challenge level passed"
    )

    model_config = ConfigDict(extra="ignore")


class ProgressLoadResult(BaseModel):
    """Outcome of reading challenge progress from disk."""

    progress: GameProgress = Field(default_factory=GameProgress)
    recovered: bool = Field(
        default=False, description="True if stored state was unusable and reset"
    )
    diagnostic: Optional[str] = Field(
        default=None, description="Why the stored state was discarded"
    )


class StreakResult(BaseModel):
    """Daily practice streaks derived from the history log."""

    current: int = Field(default=0, ge=0, description="Current streak in days")
    longest: int = Field(default=0, ge=0, description="Longest streak in days")


class HistorySummary(BaseModel):
    """Aggregate figures shown by ``gti stats``."""

    session_count: int = Field(default=0, ge=0)
    best_wpm: float = Field(default=0.0, ge=0)
    avg_wpm: float = Field(default=0.0, ge=0)
    avg_accuracy: float = Field(default=0.0, ge=0)
    streaks: StreakResult = Field(default_factory=StreakResult)


class Quote(BaseModel):
    """Practice quote with its author."""

    text: str = Field(..., description="Quote text")
    author: str = Field(default="Unknown", description="Quote author")

    model_config = ConfigDict(extra="ignore")
