"""
Calendar-day helpers.

All values are naive and interpreted in a single reference timezone (UTC); a
"day" is a ``date`` and its instant form is midnight of that date. Aware
datetimes coming in from clients are converted to UTC and stripped of their
offset before anything else sees them.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

ONE_DAY = timedelta(days=1)


def to_naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def to_day(value: date | datetime) -> date:
    """Drop the time-of-day component."""
    if isinstance(value, datetime):
        return to_naive(value).date()
    return value


def to_midnight(value: date | datetime) -> datetime:
    return datetime.combine(to_day(value), time.min)


def as_instant(value: date | datetime) -> datetime:
    """Treat a bare date as midnight; keep the time of naive datetimes."""
    if isinstance(value, datetime):
        return to_naive(value)
    return to_midnight(value)
