"""Keystroke evaluation against a fixed target text with correction tracking."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from core.models import KeystrokeEvent

log = logging.getLogger("gti.evaluator")


@dataclass
class PositionState:
    """Typing history of a single target position.

    ``first_pass_correct`` is fixed by the first character ever typed at the
    position; ``current_correct`` reflects what is on screen now (None when
    the position is untyped or was backspaced over).
    """

    first_pass_correct: Optional[bool] = None
    current_correct: Optional[bool] = None
    backspaced: bool = False

    @property
    def typed(self) -> bool:
        return self.first_pass_correct is not None

    @property
    def is_uncorrected_error(self) -> bool:
        """Typed, but wrong or empty on screen now."""
        return self.typed and self.current_correct is not True

    @property
    def is_corrected_error(self) -> bool:
        return self.first_pass_correct is False and self.current_correct is True

    @property
    def is_clean(self) -> bool:
        return self.first_pass_correct is True and self.current_correct is True


@dataclass
class KeystrokeTally:
    """Snapshot of an evaluator's running counts."""

    characters_typed: int = 0
    correct_keystrokes: int = 0
    incorrect_keystrokes: int = 0
    first_pass_keystrokes: int = 0
    correct_first_pass: int = 0
    incorrect_first_pass: int = 0
    corrected_errors: int = 0
    uncorrected_errors: int = 0
    backspace_count: int = 0
    error_positions: List[int] = field(default_factory=list)


class KeystrokeEvaluator:
    """Classifies typed characters against a target text.

    The evaluator is time-agnostic: timestamps passed in are only stored in
    the event log. It holds no reference to configuration or persisted state.
    """

    def __init__(self, target_text: str):
        """Initialize evaluator.

        Args:
            target_text: Text the user is asked to type
        """
        self.target_text = target_text
        self.cursor = 0
        self.events: List[KeystrokeEvent] = []
        self.positions: List[PositionState] = [PositionState() for _ in target_text]
        self.backspace_count = 0
        self.correct_keystrokes = 0
        self.incorrect_keystrokes = 0

    @property
    def is_complete(self) -> bool:
        """True once every target character has been typed over."""
        return self.cursor >= len(self.target_text)

    def type_char(self, char: str, timestamp_ms: int = 0) -> Optional[KeystrokeEvent]:
        """Record one typed character at the cursor.

        A mismatch is recorded and the cursor still advances so the user can
        keep going past a mistake.

        Args:
            char: Single typed character
            timestamp_ms: Offset from the start of the attempt

        Returns:
            The logged event, or None if the target is already fully typed
        """
        if self.is_complete:
            log.debug(f"Ignoring '{char}' typed past end of target")
            return None

        expected = self.target_text[self.cursor]
        event = KeystrokeEvent(
            position=self.cursor,
            character=char,
            expected_character=expected,
            timestamp_offset_ms=timestamp_ms,
        )
        self.events.append(event)

        state = self.positions[self.cursor]
        correct = event.is_correct
        if state.first_pass_correct is None:
            state.first_pass_correct = correct
        state.current_correct = correct

        if correct:
            self.correct_keystrokes += 1
        else:
            self.incorrect_keystrokes += 1

        self.cursor += 1
        return event

    def backspace(self, timestamp_ms: int = 0) -> Optional[KeystrokeEvent]:
        """Step the cursor back one position.

        The character previously typed at that position stays in the log
        but is marked superseded. A backspace at position zero does nothing.

        Args:
            timestamp_ms: Offset from the start of the attempt

        Returns:
            The logged correction event, or None at position zero
        """
        if self.cursor == 0:
            return None

        self.cursor -= 1
        self.backspace_count += 1

        for previous in reversed(self.events):
            if (
                previous.position == self.cursor
                and not previous.was_correction
                and not previous.superseded
            ):
                previous.superseded = True
                break

        state = self.positions[self.cursor]
        state.current_correct = None
        state.backspaced = True

        event = KeystrokeEvent(
            position=self.cursor,
            character="",
            expected_character=self.target_text[self.cursor],
            timestamp_offset_ms=timestamp_ms,
            was_correction=True,
        )
        self.events.append(event)
        return event

    def error_positions(self) -> List[int]:
        """Positions whose visible character is currently wrong."""
        return [
            index
            for index, state in enumerate(self.positions)
            if state.current_correct is False
        ]

    def typed_text(self) -> str:
        """Characters currently on screen, superseded ones excluded."""
        visible = {}
        for event in self.events:
            if not event.was_correction and not event.superseded:
                visible[event.position] = event.character
        return "".join(visible[i] for i in sorted(visible))

    def tally(self) -> KeystrokeTally:
        """Return running counts without modifying evaluator state.

        Every typed position falls into exactly one bucket, decided by its
        final state first: uncorrected error if it is wrong or empty now,
        corrected error if its first keystroke was wrong, otherwise correct.
        """
        typed = [state for state in self.positions if state.typed]
        correct_first_pass = sum(1 for state in typed if state.is_clean)
        corrected = sum(1 for state in typed if state.is_corrected_error)
        uncorrected = sum(1 for state in typed if state.is_uncorrected_error)

        return KeystrokeTally(
            characters_typed=self.correct_keystrokes + self.incorrect_keystrokes,
            correct_keystrokes=self.correct_keystrokes,
            incorrect_keystrokes=self.incorrect_keystrokes,
            first_pass_keystrokes=len(typed),
            correct_first_pass=correct_first_pass,
            incorrect_first_pass=len(typed) - correct_first_pass,
            corrected_errors=corrected,
            uncorrected_errors=uncorrected,
            backspace_count=self.backspace_count,
            error_positions=self.error_positions(),
        )

    def reset(self) -> None:
        """Clear all progress, keeping the target text."""
        self.cursor = 0
        self.events = []
        self.positions = [PositionState() for _ in self.target_text]
        self.backspace_count = 0
        self.correct_keystrokes = 0
        self.incorrect_keystrokes = 0
