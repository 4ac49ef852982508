"""WPM, accuracy and related typing metric calculations.

A "word" is five characters. All rates divide by the elapsed time clamped to
at least one millisecond, so every result is a non-negative finite number.
"""

from core.keystroke_evaluator import KeystrokeEvaluator, KeystrokeTally
from core.models import SessionMetrics
from core.validation import clamp_elapsed_ms, measured_duration_ms

CHARS_PER_WORD = 5.0
MS_PER_MINUTE = 60000.0


def elapsed_minutes(duration_ms: float) -> float:
    """Convert a duration to minutes, clamped to one millisecond minimum."""
    return clamp_elapsed_ms(duration_ms) / MS_PER_MINUTE


def calculate_wpm(key_count: int, duration_ms: float) -> float:
    """Calculate raw words per minute.

    Args:
        key_count: Characters typed, errors included
        duration_ms: Duration in milliseconds

    Returns:
        WPM (words per minute)
    """
    words = max(0, key_count) / CHARS_PER_WORD
    return words / elapsed_minutes(duration_ms)


def calculate_net_wpm(key_count: int, uncorrected_errors: int, duration_ms: float) -> float:
    """Calculate net WPM: gross words minus uncorrected errors, floored at 0."""
    words = max(0, key_count) / CHARS_PER_WORD
    return max(0.0, (words - uncorrected_errors) / elapsed_minutes(duration_ms))


def calculate_adjusted_wpm(net_wpm: float, corrected_errors: int, key_count: int) -> float:
    """Scale net WPM down by the corrected-error rate.

    penalty = 1 - corrected_errors / key_count

    Args:
        net_wpm: Net WPM
        corrected_errors: Errors fixed with backspace
        key_count: Characters typed

    Returns:
        Adjusted WPM, never negative
    """
    if key_count <= 0:
        return max(0.0, net_wpm)
    penalty = 1.0 - (corrected_errors / key_count)
    return max(0.0, net_wpm * max(0.0, penalty))


def calculate_cpm(key_count: int, duration_ms: float) -> float:
    """Characters per minute, no error adjustment."""
    return max(0, key_count) / elapsed_minutes(duration_ms)


def calculate_accuracy(correct_first_pass: int, first_pass_keystrokes: int) -> float:
    """First-pass accuracy as a percentage clamped to [0, 100].

    A session without keystrokes reports 100.
    """
    if first_pass_keystrokes <= 0:
        return 100.0
    accuracy = correct_first_pass / first_pass_keystrokes * 100.0
    return min(100.0, max(0.0, accuracy))


def calculate_avg_word_length(text: str) -> float:
    """Average word length: all characters of text / whitespace-delimited words."""
    words = text.split()
    if not words:
        return 0.0
    return len(text) / len(words)


def metrics_from_tally(tally: KeystrokeTally, target_text: str, duration_ms: float) -> SessionMetrics:
    """Build the full metric set from keystroke counts and an elapsed time."""
    chars = tally.characters_typed
    net_wpm = calculate_net_wpm(chars, tally.uncorrected_errors, duration_ms)

    return SessionMetrics(
        duration_ms=measured_duration_ms(duration_ms),
        characters_typed=chars,
        raw_wpm=calculate_wpm(chars, duration_ms),
        net_wpm=net_wpm,
        adjusted_wpm=calculate_adjusted_wpm(net_wpm, tally.corrected_errors, chars),
        cpm=calculate_cpm(chars, duration_ms),
        accuracy=calculate_accuracy(tally.correct_first_pass, tally.first_pass_keystrokes),
        first_pass_keystrokes=tally.first_pass_keystrokes,
        correct_first_pass=tally.correct_first_pass,
        corrected_errors=tally.corrected_errors,
        uncorrected_errors=tally.uncorrected_errors,
        mistakes=tally.incorrect_keystrokes,
        backspace_count=tally.backspace_count,
        avg_word_length=calculate_avg_word_length(target_text),
    )


def calculate_metrics(evaluator: KeystrokeEvaluator, duration_ms: float) -> SessionMetrics:
    """Compute metrics for an evaluator's current state.

    Safe to call at any time, e.g. from a live display refresh loop; the
    evaluator is not modified.

    Args:
        evaluator: Evaluator holding the attempt
        duration_ms: Elapsed time supplied by the caller's clock

    Returns:
        SessionMetrics
    """
    return metrics_from_tally(evaluator.tally(), evaluator.target_text, duration_ms)
