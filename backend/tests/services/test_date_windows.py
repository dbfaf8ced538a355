"""Tests for the shared calendar helpers."""

from __future__ import annotations

from datetime import UTC, date, datetime, time, timedelta, timezone

import pytest

from app.services.date_windows import (
    align_to,
    in_week_of,
    parse_calendar_date,
    parse_timestamp,
    same_calendar_day,
    same_calendar_month,
    week_bounds,
    weekday_name,
    weekday_of,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (date(2024, 6, 9), 0),  # Sunday
        (date(2024, 6, 10), 1),
        (date(2024, 6, 12), 3),
        (date(2024, 6, 15), 6),  # Saturday
        (datetime(2024, 6, 16, 23, 59), 0),
    ],
)
def test_weekday_of_counts_from_sunday(value: date, expected: int) -> None:
    assert weekday_of(value) == expected


def test_weekday_name() -> None:
    assert weekday_name(date(2024, 6, 12)) == "Wednesday"
    assert weekday_name(date(2024, 6, 9)) == "Sunday"


def test_week_bounds_span_sunday_to_saturday() -> None:
    start, end = week_bounds(date(2024, 6, 12))
    assert start == datetime(2024, 6, 9, 0, 0)
    assert end == datetime.combine(date(2024, 6, 15), time.max)


def test_week_bounds_on_sunday_starts_same_day() -> None:
    start, end = week_bounds(datetime(2024, 6, 9, 0, 0, tzinfo=UTC))
    assert start == datetime(2024, 6, 9, tzinfo=UTC)
    assert end.date() == date(2024, 6, 15)
    assert end.tzinfo is UTC


def test_week_boundary_is_inclusive_at_start_and_exclusive_at_next_sunday() -> None:
    now = datetime(2024, 6, 12, 15, 30, tzinfo=UTC)
    assert in_week_of(datetime(2024, 6, 9, 0, 0, tzinfo=UTC), now)
    assert in_week_of(datetime(2024, 6, 15, 23, 59, 59, 999999, tzinfo=UTC), now)
    assert not in_week_of(datetime(2024, 6, 16, 0, 0, tzinfo=UTC), now)
    assert not in_week_of(
        datetime(2024, 6, 9, tzinfo=UTC) - timedelta(microseconds=1), now
    )


def test_calendar_comparisons() -> None:
    assert same_calendar_day(datetime(2024, 6, 12, 0, 1), datetime(2024, 6, 12, 23, 59))
    assert not same_calendar_day(date(2024, 6, 12), date(2023, 6, 12))
    assert same_calendar_month(date(2024, 6, 1), datetime(2024, 6, 30, 12))
    assert not same_calendar_month(date(2024, 6, 1), date(2023, 6, 1))


def test_align_to_converts_between_zones() -> None:
    karachi = timezone(timedelta(hours=5))
    reference = datetime(2024, 6, 12, 12, 0, tzinfo=karachi)
    late_utc = datetime(2024, 6, 11, 20, 0, tzinfo=UTC)
    assert align_to(late_utc, reference).day == 12
    assert align_to(datetime(2024, 6, 12, 9, 0), reference).tzinfo is karachi
    assert align_to(late_utc, reference.replace(tzinfo=None)).tzinfo is None


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2024-06-17", date(2024, 6, 17)),
        ("2024-06-17T10:00:00", date(2024, 6, 17)),
        ("2024-06-17 10:00:00+05:00", date(2024, 6, 17)),
        ("2024-06-17garbage", None),
        ("2024-06-17 next week", None),
        (datetime(2024, 6, 17, 8), date(2024, 6, 17)),
        (date(2024, 6, 17), date(2024, 6, 17)),
        ("next tuesday", None),
        ("", None),
        (None, None),
        (20240617, None),
    ],
)
def test_parse_calendar_date(raw: object, expected: date | None) -> None:
    assert parse_calendar_date(raw) == expected


def test_parse_timestamp() -> None:
    assert parse_timestamp("2024-06-12T10:15:00+00:00") == datetime(
        2024, 6, 12, 10, 15, tzinfo=UTC
    )
    assert parse_timestamp(date(2024, 6, 12)) == datetime(2024, 6, 12)
    assert parse_timestamp("yesterday") is None
    assert parse_timestamp(None) is None
