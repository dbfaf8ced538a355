"""Calendar helpers shared by the availability and earnings services.

Every weekday/week/month comparison in the application goes through this
module. Weeks start on Sunday (index 0) and all values are read in a single
local calendar.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Any

WEEKDAY_NAMES: tuple[str, ...] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


def calendar_day(value: date) -> date:
    """Drop the time component of ``value`` if it has one."""
    if isinstance(value, datetime):
        return value.date()
    return value


def weekday_of(value: date) -> int:
    """Return the weekday index of ``value`` with Sunday as 0."""
    return (value.weekday() + 1) % 7


def weekday_name(value: date) -> str:
    return WEEKDAY_NAMES[weekday_of(value)]


def same_calendar_day(a: date, b: date) -> bool:
    return (a.year, a.month, a.day) == (b.year, b.month, b.day)


def same_calendar_month(a: date, b: date) -> bool:
    return (a.year, a.month) == (b.year, b.month)


def week_bounds(value: date) -> tuple[datetime, datetime]:
    """Return the first and last instant of the Sunday-based week of ``value``.

    The start is Sunday 00:00:00 and the end is Saturday at the last
    representable microsecond. Timezone-aware inputs yield bounds in the
    same zone.
    """
    day = calendar_day(value)
    start_day = day - timedelta(days=weekday_of(day))
    tzinfo = value.tzinfo if isinstance(value, datetime) else None
    start = datetime.combine(start_day, time.min, tzinfo=tzinfo)
    end = datetime.combine(start_day + timedelta(days=6), time.max, tzinfo=tzinfo)
    return start, end


def align_to(value: datetime, reference: datetime) -> datetime:
    """Express ``value`` on the same clock as ``reference``.

    Naive values are taken to already be in the reference's calendar.
    """
    if reference.tzinfo is None:
        return value.replace(tzinfo=None)
    if value.tzinfo is None:
        return value.replace(tzinfo=reference.tzinfo)
    return value.astimezone(reference.tzinfo)


def in_week_of(value: datetime, reference: datetime) -> bool:
    start, end = week_bounds(reference)
    return start <= align_to(value, reference) <= end


def parse_calendar_date(value: Any) -> date | None:
    """Coerce a stored booking date to a ``date``, or ``None`` if unusable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def parse_timestamp(value: Any) -> datetime | None:
    """Coerce a stored timestamp to a ``datetime``, or ``None`` if unusable."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        return None


__all__ = [
    "WEEKDAY_NAMES",
    "align_to",
    "calendar_day",
    "in_week_of",
    "parse_calendar_date",
    "parse_timestamp",
    "same_calendar_day",
    "same_calendar_month",
    "week_bounds",
    "weekday_name",
    "weekday_of",
]
