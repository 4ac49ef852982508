"""Daily practice streaks and summary statistics from session history."""

from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional

from core.models import HistorySummary, SessionRecord, StreakResult

ONE_DAY = timedelta(days=1)


def local_date(timestamp: datetime) -> date:
    """Calendar date of a timestamp in the local time zone."""
    if timestamp.tzinfo is None:
        return timestamp.date()
    return timestamp.astimezone().date()


def practice_dates(records: Iterable[SessionRecord]) -> List[date]:
    """Distinct local dates with at least one session, sorted ascending."""
    return sorted({local_date(record.timestamp) for record in records})


def calculate_current_streak(dates: List[date], today: date) -> int:
    """Count consecutive days ending at the most recent practice date.

    The streak is kept alive for one day of grace: if the latest practice
    date is yesterday the streak still counts.

    Args:
        dates: Sorted distinct practice dates
        today: Reference date

    Returns:
        Current streak in days
    """
    if not dates:
        return 0

    latest = dates[-1]
    if latest != today and latest != today - ONE_DAY:
        return 0

    streak = 1
    for i in range(len(dates) - 1, 0, -1):
        if dates[i] - dates[i - 1] != ONE_DAY:
            break
        streak += 1
    return streak


def calculate_longest_streak(dates: List[date]) -> int:
    """Longest run of consecutive calendar days in the sorted date list."""
    if not dates:
        return 0

    longest = 1
    current = 1
    for previous, day in zip(dates, dates[1:]):
        if day - previous == ONE_DAY:
            current += 1
        else:
            longest = max(longest, current)
            current = 1

    return max(longest, current)


def calculate_streaks(
    records: Iterable[SessionRecord], today: Optional[date] = None
) -> StreakResult:
    """Derive current and longest streaks from the full record set.

    Nothing is cached; the result is recomputed from the records each call.

    Args:
        records: Session records in any order
        today: Reference date (default: local today)

    Returns:
        StreakResult
    """
    if today is None:
        today = date.today()

    dates = practice_dates(records)
    return StreakResult(
        current=calculate_current_streak(dates, today),
        longest=calculate_longest_streak(dates),
    )


def summarize_history(
    records: List[SessionRecord], today: Optional[date] = None
) -> HistorySummary:
    """Aggregate session count, speed, accuracy and streaks."""
    if not records:
        return HistorySummary()

    count = len(records)
    return HistorySummary(
        session_count=count,
        best_wpm=max(r.net_wpm for r in records),
        avg_wpm=sum(r.net_wpm for r in records) / count,
        avg_accuracy=sum(r.accuracy for r in records) / count,
        streaks=calculate_streaks(records, today),
    )
