"""Booking creation and lifecycle management."""
from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.booking import Booking, BookingStatus
from app.models.user import User, UserRole
from app.models.venue import Venue
from app.services import availability_service
from app.services.availability_service import SlotUnavailableError
from app.services.date_windows import weekday_name

logger = logging.getLogger(__name__)

_ALLOWED_STATUS_TRANSITIONS: dict[BookingStatus, set[BookingStatus]] = {
    BookingStatus.PENDING: {BookingStatus.CONFIRMED, BookingStatus.CANCELLED},
    BookingStatus.CONFIRMED: {BookingStatus.CANCELLED},
    BookingStatus.CANCELLED: set(),
}


def _base_booking_query():
    return (
        select(Booking)
        .options(selectinload(Booking.venue))
        .order_by(Booking.booking_date.desc(), Booking.time)
    )


async def list_bookings(
    session: AsyncSession,
    *,
    user: User,
    status: BookingStatus | None = None,
    skip: int = 0,
    limit: int = 50,
) -> Sequence[Booking]:
    """Return the bookings visible to ``user``.

    Players see their own bookings, owners see bookings for their venues and
    administrators see everything.
    """
    stmt = _base_booking_query()
    if user.role == UserRole.PLAYER:
        stmt = stmt.where(Booking.booked_by == user.id)
    elif user.role == UserRole.OWNER:
        stmt = stmt.join(Venue, Booking.venue_id == Venue.id).where(
            Venue.owner_id == user.id
        )
    if status is not None:
        stmt = stmt.where(Booking.status == status)
    result = await session.execute(stmt.offset(skip).limit(limit))
    return result.scalars().unique().all()


async def get_booking(
    session: AsyncSession, *, booking_id: uuid.UUID
) -> Booking | None:
    stmt = _base_booking_query().where(Booking.id == booking_id)
    result = await session.execute(stmt)
    return result.scalars().unique().one_or_none()


async def create_booking(
    session: AsyncSession,
    *,
    player: User,
    venue_id: uuid.UUID,
    booking_date: date,
    time: str,
    duration_hours: int = 1,
    today: date,
) -> Booking:
    """Request a slot for a player after checking it is still free."""
    if player.role != UserRole.PLAYER:
        raise PermissionError("Only players can book venues")
    venue = await session.get(Venue, venue_id)
    if venue is None:
        raise LookupError("Venue not found")
    if booking_date < today:
        raise ValueError("Bookings cannot be made for past dates")

    template = venue.availability or {}
    day = weekday_name(booking_date)
    if time not in (template.get(day) or []):
        raise ValueError(f"{time} is not offered on {day}")

    bookings = await availability_service.fetch_bookings(session, venue_id=venue_id)
    resolved = availability_service.resolve(template, bookings, today)
    if time not in resolved.get(day, []):
        raise SlotUnavailableError("This slot is already booked")

    booking = Booking(
        venue_id=venue.id,
        booked_by=player.id,
        booking_date=booking_date,
        time=time,
        duration_hours=duration_hours,
        price_per_hour=venue.price_per_hour,
        total_amount=venue.price_per_hour * duration_hours,
        status=BookingStatus.PENDING,
    )
    session.add(booking)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise SlotUnavailableError("This slot is already booked") from exc
    await session.refresh(booking)
    logger.info(
        "Booking %s requested for venue %s on %s at %s",
        booking.id,
        venue.id,
        booking_date,
        time,
    )
    return booking


def can_view(booking: Booking, user: User) -> bool:
    if user.role == UserRole.ADMIN:
        return True
    if user.role == UserRole.OWNER:
        return booking.venue.owner_id == user.id
    return booking.booked_by == user.id


def _validate_status_transition(current: BookingStatus, target: BookingStatus) -> None:
    if target == current:
        return
    allowed = _ALLOWED_STATUS_TRANSITIONS.get(current, set())
    if target not in allowed:
        raise ValueError(f"Invalid status transition from {current.value} to {target.value}")


def _ensure_can_change(booking: Booking, user: User, target: BookingStatus) -> None:
    if user.role == UserRole.ADMIN:
        return
    if user.role == UserRole.OWNER and booking.venue.owner_id == user.id:
        return
    if (
        user.role == UserRole.PLAYER
        and booking.booked_by == user.id
        and target == BookingStatus.CANCELLED
    ):
        return
    raise PermissionError("Not allowed to change this booking")


async def update_booking_status(
    session: AsyncSession,
    *,
    booking: Booking,
    user: User,
    status: BookingStatus,
    reason: str | None = None,
) -> Booking:
    """Confirm or cancel a booking; cancelling frees its slot."""
    _ensure_can_change(booking, user, status)
    _validate_status_transition(booking.status, status)
    previous = booking.status
    booking.status = status
    if status == BookingStatus.CANCELLED and reason:
        booking.rejection_reason = reason
    await session.commit()
    await session.refresh(booking)
    logger.info(
        "Booking %s moved from %s to %s by %s",
        booking.id,
        previous.value,
        status.value,
        user.id,
    )
    return booking
