"""
Calendar helpers used by session-reset logic.

Single source of truth for timestamp conversion and the calendar fields
(day of week, ISO week, last day of month) that period boundaries depend on.
"""

import calendar
from datetime import date, datetime, timezone, tzinfo

# Python weekday() values for the weekend
WEEKEND_WEEKDAYS = (5, 6)


def ms_to_datetime(ts_ms: int) -> datetime:
    """Convert an epoch-milliseconds timestamp to an aware UTC datetime."""
    return datetime.fromtimestamp(ts_ms / 1000.0, tz=timezone.utc)


def localize(ts: datetime, tz: tzinfo | None) -> datetime:
    """
    Express a timestamp in the given timezone.

    Naive timestamps are taken as already local and returned unchanged.
    """
    if tz is None or ts.tzinfo is None:
        return ts
    return ts.astimezone(tz)


def day_of_week(d: date) -> int:
    """Day of week with Sunday = 0 ... Saturday = 6."""
    return (d.weekday() + 1) % 7


def iso_week_number(d: date) -> int:
    """ISO-8601 week number (1..53)."""
    return d.isocalendar()[1]


def last_date_of_month(d: date) -> date:
    """Last calendar date of the month containing d."""
    return date(d.year, d.month, calendar.monthrange(d.year, d.month)[1])


def is_weekend(d: date) -> bool:
    """True for Saturday and Sunday."""
    return d.weekday() in WEEKEND_WEEKDAYS
