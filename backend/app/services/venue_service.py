"""Venue management and weekly slot template editing."""
from __future__ import annotations

import logging
import re
import uuid
from collections.abc import Mapping, Sequence
from datetime import date
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.booking import BookingStatus
from app.models.user import ApprovalStatus, User, UserRole
from app.models.venue import Venue
from app.services import availability_service
from app.services.date_windows import WEEKDAY_NAMES

logger = logging.getLogger(__name__)

TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9](\s?[AP]M)?$", re.IGNORECASE)

_UPDATABLE_FIELDS = (
    "name",
    "address",
    "sport_type",
    "venue_type",
    "description",
    "facilities",
    "price_per_hour",
    "availability",
)


def build_slot(start: str, end: str) -> str:
    """Join two clock times into a slot string such as ``"14:00-15:00"``."""
    start, end = start.strip(), end.strip()
    if not TIME_PATTERN.match(start) or not TIME_PATTERN.match(end):
        raise ValueError("Times must look like 9:00, 14:30 or 9:00 AM")
    return f"{start}-{end}"


def _minutes(clock: str) -> int:
    """Minutes past midnight for a clock time such as ``9:00`` or ``9:00 PM``."""
    text = clock.strip().upper()
    meridiem = text[-2:] if text.endswith(("AM", "PM")) else None
    if meridiem:
        text = text[:-2].strip()
    hours, _, minutes = text.partition(":")
    hour = int(hours)
    if meridiem == "PM" and hour < 12:
        hour += 12
    elif meridiem == "AM" and hour == 12:
        hour = 0
    return hour * 60 + int(minutes)


def slot_sort_key(slot: str) -> tuple[int, str]:
    """Order slots by start time; unreadable slots go last."""
    start = slot.partition("-")[0]
    if not TIME_PATTERN.match(start.strip()):
        return (24 * 60, slot)
    return (_minutes(start), slot)


def validate_template(template: Mapping[str, Sequence[str]]) -> dict[str, list[str]]:
    """Return a normalised copy of a weekly template or raise ``ValueError``."""
    cleaned: dict[str, list[str]] = {}
    for day, slots in template.items():
        if day not in WEEKDAY_NAMES:
            raise ValueError(f"Unknown weekday: {day}")
        normalised: list[str] = []
        for slot in slots:
            start, sep, end = slot.partition("-")
            if not sep:
                raise ValueError(f"Malformed slot: {slot}")
            value = build_slot(start, end)
            if value in normalised:
                raise ValueError(f"Duplicate slot {value} on {day}")
            normalised.append(value)
        cleaned[day] = normalised
    return cleaned


def _ensure_can_manage(venue: Venue, user: User) -> None:
    if user.role == UserRole.ADMIN:
        return
    if venue.owner_id != user.id:
        raise PermissionError("Venue does not belong to the current owner")


def _ensure_approved_owner(user: User) -> None:
    if user.role != UserRole.OWNER:
        raise PermissionError("Only venue owners can manage venues")
    if user.approval_status != ApprovalStatus.APPROVED:
        raise PermissionError("Owner account is awaiting approval")


async def list_venues(
    session: AsyncSession,
    *,
    owner_id: uuid.UUID | None = None,
    skip: int = 0,
    limit: int = 50,
) -> list[Venue]:
    stmt = select(Venue).order_by(Venue.name)
    if owner_id is not None:
        stmt = stmt.where(Venue.owner_id == owner_id)
    result = await session.execute(stmt.offset(skip).limit(limit))
    return list(result.scalars().all())


async def get_venue(session: AsyncSession, *, venue_id: uuid.UUID) -> Venue | None:
    return await session.get(Venue, venue_id)


async def create_venue(
    session: AsyncSession,
    *,
    owner: User,
    name: str,
    price_per_hour: Decimal,
    availability: Mapping[str, Sequence[str]] | None = None,
    address: str | None = None,
    sport_type: str | None = None,
    venue_type: str | None = None,
    description: str | None = None,
    facilities: list[str] | None = None,
) -> Venue:
    """Create a venue for an approved owner."""
    _ensure_approved_owner(owner)
    venue = Venue(
        owner_id=owner.id,
        name=name,
        price_per_hour=price_per_hour,
        availability=validate_template(availability or {}),
        address=address,
        sport_type=sport_type,
        venue_type=venue_type,
        description=description,
        facilities=list(facilities or []),
    )
    session.add(venue)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    await session.refresh(venue)
    logger.info("Venue %s created by owner %s", venue.id, owner.id)
    return venue


async def update_venue(
    session: AsyncSession,
    *,
    venue: Venue,
    user: User,
    **changes: object,
) -> Venue:
    """Apply partial updates to a venue the user manages."""
    _ensure_can_manage(venue, user)
    for field, value in changes.items():
        if field not in _UPDATABLE_FIELDS or value is None:
            continue
        if field == "availability":
            value = validate_template(value)  # type: ignore[arg-type]
        setattr(venue, field, value)
    await session.commit()
    await session.refresh(venue)
    return venue


async def add_slot(
    session: AsyncSession,
    *,
    venue: Venue,
    user: User,
    day: str,
    slot: str,
) -> Venue:
    """Add a slot to one weekday of the template, keeping the list sorted."""
    _ensure_can_manage(venue, user)
    if day not in WEEKDAY_NAMES:
        raise ValueError(f"Unknown weekday: {day}")
    current = list((venue.availability or {}).get(day, []))
    if slot in current:
        raise ValueError("This time slot already exists")
    # JSON columns only persist on reassignment
    venue.availability = {
        **(venue.availability or {}),
        day: sorted([*current, slot], key=slot_sort_key),
    }
    await session.commit()
    await session.refresh(venue)
    return venue


async def remove_slot(
    session: AsyncSession,
    *,
    venue: Venue,
    user: User,
    day: str,
    slot: str,
    today: date,
) -> Venue:
    """Remove a slot unless a confirmed booking after today still holds it."""
    _ensure_can_manage(venue, user)
    current = list((venue.availability or {}).get(day, []))
    if slot not in current:
        raise LookupError("Slot not found in availability")

    bookings = await availability_service.fetch_bookings(session, venue_id=venue.id)
    held = availability_service.blocked_slots(
        bookings,
        today,
        statuses=frozenset({BookingStatus.CONFIRMED.value}),
        include_today=False,
    )
    if slot in held.get(day, set()):
        raise availability_service.SlotUnavailableError(
            "This slot is already booked and cannot be removed"
        )

    venue.availability = {
        **(venue.availability or {}),
        day: [existing for existing in current if existing != slot],
    }
    await session.commit()
    await session.refresh(venue)
    return venue
