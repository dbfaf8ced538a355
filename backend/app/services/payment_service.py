"""Service layer for recording and settling booking payments."""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models import (
    Booking,
    BookingStatus,
    Payment,
    PaymentMethod,
    PaymentStatus,
    User,
    UserRole,
)
from app.services import earnings_service

logger = logging.getLogger(__name__)


def _mark_booking_paid(booking: Booking) -> None:
    booking.payment_status = PaymentStatus.PAID
    if booking.status == BookingStatus.PENDING:
        booking.status = BookingStatus.CONFIRMED


async def _get_booking(session: AsyncSession, booking_id: UUID) -> Booking:
    stmt = (
        select(Booking)
        .where(Booking.id == booking_id)
        .options(selectinload(Booking.venue), selectinload(Booking.payment))
    )
    booking = (await session.execute(stmt)).scalars().unique().one_or_none()
    if booking is None:
        raise LookupError("Booking not found")
    return booking


async def record_payment(
    session: AsyncSession,
    *,
    player: User,
    booking_id: UUID,
    payment_method: PaymentMethod,
    transaction_id: str | None = None,
    screenshot_url: str | None = None,
) -> Payment:
    """Write the payment record for a player's booking.

    Wallet and bank payments are recorded as paid straight away and confirm
    the booking; cash stays pending until the owner collects it.
    """
    booking = await _get_booking(session, booking_id)
    if booking.booked_by != player.id:
        raise PermissionError("Booking does not belong to the current player")
    if booking.status == BookingStatus.CANCELLED:
        raise ValueError("Cannot pay for a cancelled booking")
    if booking.payment is not None:
        raise ValueError("A payment has already been recorded for this booking")

    is_cash = payment_method == PaymentMethod.CASH
    payment = Payment(
        owner_id=booking.venue.owner_id,
        venue_id=booking.venue_id,
        booking_id=booking.id,
        player_id=player.id,
        amount=booking.total_amount,
        status=PaymentStatus.PENDING if is_cash else PaymentStatus.PAID,
        payment_method=payment_method,
        transaction_id=transaction_id,
        screenshot_url=screenshot_url,
        slot_date=booking.booking_date,
        slot_time=booking.time,
    )
    if not is_cash:
        _mark_booking_paid(booking)
    session.add(payment)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise ValueError("A payment has already been recorded for this booking") from exc
    await session.refresh(payment)
    logger.info(
        "Payment %s recorded for booking %s via %s",
        payment.id,
        booking.id,
        payment_method.value,
    )
    return payment


async def list_payments(
    session: AsyncSession,
    *,
    owner_id: UUID,
    kind: str = "all",
) -> list[Payment]:
    """Return an owner's payments newest first, narrowed by a dashboard filter."""
    result = await session.execute(
        select(Payment)
        .where(Payment.owner_id == owner_id)
        .order_by(Payment.created_at.desc())
    )
    return earnings_service.filter_transactions(result.scalars().all(), kind)


async def get_payment(session: AsyncSession, *, payment_id: UUID) -> Payment | None:
    stmt = (
        select(Payment)
        .where(Payment.id == payment_id)
        .options(selectinload(Payment.booking))
    )
    return (await session.execute(stmt)).scalars().unique().one_or_none()


async def receive_cash_payment(
    session: AsyncSession,
    *,
    payment: Payment,
    user: User,
) -> Payment:
    """Mark a pending cash payment as collected by the venue owner."""
    if user.role != UserRole.ADMIN and payment.owner_id != user.id:
        raise PermissionError("Payment does not belong to the current owner")
    if payment.payment_method != PaymentMethod.CASH:
        raise ValueError("Only cash payments can be received manually")
    if payment.status != PaymentStatus.PENDING:
        raise ValueError("Payment has already been received")

    payment.status = PaymentStatus.PAID
    _mark_booking_paid(payment.booking)
    await session.commit()
    await session.refresh(payment)
    logger.info("Cash payment %s received by %s", payment.id, user.id)
    return payment
