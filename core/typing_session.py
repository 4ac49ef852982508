"""A single typing attempt: evaluation, timing, metrics and recording."""

import logging
import time
from datetime import datetime
from typing import Callable, Optional

from core.keystroke_evaluator import KeystrokeEvaluator
from core.models import SessionMetrics, SessionMode, SessionRecord
from core.session_recorder import SessionRecorder
from core.validation import validate_duration_ms
from core.wpm_calculator import calculate_metrics

log = logging.getLogger("gti.session")


def monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class TypingSession:
    """Ties a KeystrokeEvaluator to a clock and the session recorder.

    The clock starts with the first keystroke. A session is written to
    history only by complete(); abort() drops everything.
    """

    def __init__(
        self,
        target_text: str,
        mode: SessionMode = SessionMode.QUOTE,
        recorder: Optional[SessionRecorder] = None,
        clock: Callable[[], int] = monotonic_ms,
        time_limit_ms: Optional[int] = None,
        quote_author: Optional[str] = None,
        tier: Optional[str] = None,
    ):
        """Initialize session.

        Args:
            target_text: Text to type
            mode: Mode tag stored with the record
            recorder: Where completed sessions are written (None: not recorded)
            clock: Millisecond clock
            time_limit_ms: Session length for timed mode
            quote_author: Author of the quote in quote mode
            tier: Challenge tier name in challenge mode
        """
        self.evaluator = KeystrokeEvaluator(target_text)
        self.mode = mode
        self.recorder = recorder
        self.clock = clock
        self.time_limit_ms = time_limit_ms
        self.quote_author = quote_author
        self.tier = tier

        self.start_ms: Optional[int] = None
        self.end_ms: Optional[int] = None
        self.finished = False
        self.aborted = False
        self.record: Optional[SessionRecord] = None

    @property
    def target_text(self) -> str:
        return self.evaluator.target_text

    @property
    def started(self) -> bool:
        return self.start_ms is not None

    @property
    def is_complete(self) -> bool:
        return self.evaluator.is_complete

    def start(self) -> None:
        """Start the clock if it is not running yet."""
        if self.start_ms is None:
            self.start_ms = self.clock()

    def elapsed_ms(self) -> int:
        """Milliseconds since the first keystroke (0 before it)."""
        if self.start_ms is None:
            return 0
        end = self.end_ms if self.end_ms is not None else self.clock()
        return validate_duration_ms(self.start_ms, end)

    def is_expired(self) -> bool:
        """True once a timed session has run out of time."""
        if self.time_limit_ms is None:
            return False
        return self.elapsed_ms() >= self.time_limit_ms

    def _check_active(self) -> None:
        if self.finished or self.aborted:
            raise RuntimeError("Typing session is no longer active")

    def type_char(self, char: str) -> None:
        """Feed one typed character."""
        self._check_active()
        self.start()
        self.evaluator.type_char(char, self.elapsed_ms())

    def type_text(self, text: str) -> None:
        """Feed several typed characters in order."""
        for char in text:
            self.type_char(char)

    def backspace(self) -> None:
        """Feed one backspace."""
        self._check_active()
        self.start()
        self.evaluator.backspace(self.elapsed_ms())

    def live_metrics(self) -> SessionMetrics:
        """Current metrics for display; does not change session state."""
        return calculate_metrics(self.evaluator, self.elapsed_ms())

    def complete(self, timestamp: Optional[datetime] = None) -> SessionRecord:
        """Finish the session and build (and record) its SessionRecord.

        If the recorder fails, HistoryWriteError propagates; the record is
        still available as ``self.record``.

        Args:
            timestamp: Completion instant (default: now, local time)

        Returns:
            The session record
        """
        self._check_active()
        self.start()
        self.end_ms = self.clock()
        self.finished = True

        metrics = calculate_metrics(self.evaluator, self.elapsed_ms())
        self.record = SessionRecord.from_metrics(
            metrics,
            mode=self.mode,
            text_length=len(self.target_text),
            timestamp=timestamp or datetime.now().astimezone(),
            tier=self.tier,
            quote_author=self.quote_author,
        )
        log.info(
            f"Session complete: {self.record.net_wpm:.1f} net WPM, "
            f"{self.record.accuracy:.1f}% accuracy"
        )

        if self.recorder is not None:
            self.recorder.record(self.record)
        return self.record

    def abort(self) -> None:
        """Discard the attempt without writing anything."""
        if self.finished:
            raise RuntimeError("Cannot abort a completed session")
        self.aborted = True
        log.debug("Session aborted")
