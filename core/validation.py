"""Validation helpers for gti."""

import logging
import math

log = logging.getLogger("gti.validation")

MIN_ELAPSED_MS = 1


def measured_duration_ms(elapsed_ms: float) -> int:
    """Normalize a caller-supplied elapsed time for storage.

    Negative and non-finite values become 0; the real value is kept
    otherwise, including 0 for an instant session.
    """
    if not math.isfinite(elapsed_ms):
        log.warning(f"Non-finite elapsed time: {elapsed_ms}ms")
        return 0
    if elapsed_ms < 0:
        log.warning(f"Negative elapsed time: {elapsed_ms}ms")
        return 0

    return int(elapsed_ms)


def clamp_elapsed_ms(elapsed_ms: float) -> int:
    """Clamp an elapsed time so rate calculations never divide by zero.

    Args:
        elapsed_ms: Elapsed time in milliseconds as reported by the caller

    Returns:
        Elapsed milliseconds, at least MIN_ELAPSED_MS
    """
    return max(MIN_ELAPSED_MS, measured_duration_ms(elapsed_ms))


def validate_duration_ms(start_ms: int, end_ms: int) -> int:
    """Calculate duration, ensuring non-negative result.

    Args:
        start_ms: Start timestamp in milliseconds
        end_ms: End timestamp in milliseconds

    Returns:
        Duration in milliseconds (non-negative)
    """
    duration = end_ms - start_ms
    if duration < 0:
        log.warning(f"Negative duration: {duration}ms (start={start_ms}, end={end_ms})")
        return 0

    return duration
