"""Resolve which weekly template slots of a venue are still bookable."""
from __future__ import annotations

import logging
import uuid
from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.booking import Booking, BookingStatus
from app.models.venue import Venue
from app.services.date_windows import calendar_day, parse_calendar_date, weekday_name
from app.services.record_fields import status_value

logger = logging.getLogger(__name__)

WeeklyTemplate = Mapping[str, Sequence[str]]
ResolvedAvailability = dict[str, list[str]]

_ACTIVE_BOOKING_STATUSES = (BookingStatus.PENDING, BookingStatus.CONFIRMED)
BLOCKING_STATUSES = frozenset(status.value for status in _ACTIVE_BOOKING_STATUSES)


class SlotUnavailableError(ValueError):
    """Raised when a slot is already held by another booking."""


@dataclass(frozen=True)
class BookingRecord:
    """Flat view of a booking as read from the record store.

    ``date`` is kept raw so that malformed values can be skipped by the
    resolver instead of failing the fetch.
    """

    venue_id: uuid.UUID | str | None
    date: Any
    time: str
    status: str
    booked_by: uuid.UUID | str | None = None
    id: uuid.UUID | str | None = None

    @classmethod
    def from_model(cls, booking: Booking) -> "BookingRecord":
        return cls(
            id=booking.id,
            venue_id=booking.venue_id,
            date=booking.booking_date,
            time=booking.time,
            status=booking.status.value,
            booked_by=booking.booked_by,
        )


def _blocking_dates(
    bookings: Iterable[BookingRecord],
    today: date,
    *,
    statuses: frozenset[str] = BLOCKING_STATUSES,
    include_today: bool = True,
) -> list[tuple[date, str]]:
    """Return ``(date, slot)`` pairs for bookings that still hold a slot."""
    pairs: list[tuple[date, str]] = []
    for booking in bookings:
        if status_value(booking.status) not in statuses:
            continue
        booked_on = parse_calendar_date(booking.date)
        if booked_on is None:
            logger.warning(
                "Skipping booking %s with unparsable date %r", booking.id, booking.date
            )
            continue
        if booked_on < today or (not include_today and booked_on == today):
            continue
        pairs.append((booked_on, booking.time))
    return pairs


def blocked_slots(
    bookings: Iterable[BookingRecord],
    today: date,
    *,
    statuses: frozenset[str] = BLOCKING_STATUSES,
    include_today: bool = True,
) -> dict[str, set[str]]:
    """Map weekday name to the slots held by current or future bookings."""
    blocked: dict[str, set[str]] = defaultdict(set)
    for booked_on, slot in _blocking_dates(
        bookings, calendar_day(today), statuses=statuses, include_today=include_today
    ):
        blocked[weekday_name(booked_on)].add(slot)
    return blocked


def resolve(
    template: WeeklyTemplate,
    bookings: Iterable[BookingRecord],
    today: date,
) -> ResolvedAvailability:
    """Return the template slots not held by any blocking booking.

    A pending or confirmed booking dated today or later blocks its slot for
    that weekday as a whole, not only on its own date. Weekdays with no free
    slot left are omitted.
    """
    if template is None:
        raise ValueError("An availability template is required")
    if bookings is None:
        raise ValueError("A booking collection is required")

    blocked = blocked_slots(bookings, today)
    resolved: ResolvedAvailability = {}
    for day, slots in template.items():
        taken = blocked.get(day, set())
        free = [slot for slot in slots or () if slot not in taken]
        if free:
            resolved[day] = free
    return resolved


def resolve_upcoming(
    template: WeeklyTemplate,
    bookings: Iterable[BookingRecord],
    today: date,
    *,
    days: int = 7,
) -> dict[date, list[str]]:
    """Return free slots for each of the next ``days`` calendar dates.

    Unlike :func:`resolve`, a booking only removes its slot from its own date.
    """
    if template is None:
        raise ValueError("An availability template is required")
    if days < 1:
        raise ValueError("days must be at least 1")

    start = calendar_day(today)
    taken: dict[date, set[str]] = defaultdict(set)
    for booked_on, slot in _blocking_dates(bookings, start):
        taken[booked_on].add(slot)

    upcoming: dict[date, list[str]] = {}
    for offset in range(days):
        current = start + timedelta(days=offset)
        slots = template.get(weekday_name(current)) or ()
        free = [slot for slot in slots if slot not in taken.get(current, set())]
        if free:
            upcoming[current] = free
    return upcoming


async def fetch_bookings(
    session: AsyncSession, *, venue_id: uuid.UUID
) -> list[BookingRecord]:
    """Load the non-terminal bookings of a venue."""
    result = await session.execute(
        select(Booking).where(
            Booking.venue_id == venue_id,
            Booking.status.in_(_ACTIVE_BOOKING_STATUSES),
        )
    )
    return [BookingRecord.from_model(row) for row in result.scalars().all()]


async def _get_venue(session: AsyncSession, venue_id: uuid.UUID) -> Venue:
    venue = await session.get(Venue, venue_id)
    if venue is None:
        raise LookupError("Venue not found")
    return venue


async def get_venue_availability(
    session: AsyncSession,
    *,
    venue_id: uuid.UUID,
    today: date,
) -> ResolvedAvailability:
    """Resolve the weekday availability of a stored venue."""
    venue = await _get_venue(session, venue_id)
    bookings = await fetch_bookings(session, venue_id=venue_id)
    return resolve(venue.availability or {}, bookings, today)


async def get_upcoming_availability(
    session: AsyncSession,
    *,
    venue_id: uuid.UUID,
    today: date,
    days: int = 7,
) -> dict[date, list[str]]:
    """Resolve the per-date availability of a stored venue."""
    venue = await _get_venue(session, venue_id)
    bookings = await fetch_bookings(session, venue_id=venue_id)
    return resolve_upcoming(venue.availability or {}, bookings, today, days=days)
