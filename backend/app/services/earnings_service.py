"""Owner earnings aggregation over payment records."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.payment import Payment, PaymentMethod, PaymentStatus
from app.services.date_windows import (
    align_to,
    in_week_of,
    parse_timestamp,
    same_calendar_day,
    same_calendar_month,
)
from app.services.record_fields import parse_amount, status_value

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")
_PAID = PaymentStatus.PAID.value
_PENDING = PaymentStatus.PENDING.value

TRANSACTION_FILTERS = ("all", "paid", "pending", "cash")

_Txn = TypeVar("_Txn")


@dataclass(frozen=True)
class PaymentRecord:
    """Flat view of a payment as read from the record store.

    ``created_at`` drives every earnings window; ``slot_date`` and
    ``slot_time`` are carried for display only.
    """

    owner_id: uuid.UUID | str | None
    venue_id: uuid.UUID | str | None
    amount: Any
    status: str
    payment_method: str | None
    created_at: Any
    slot_date: date | str | None = None
    slot_time: str | None = None
    id: uuid.UUID | str | None = None

    @classmethod
    def from_model(cls, payment: Payment) -> "PaymentRecord":
        return cls(
            id=payment.id,
            owner_id=payment.owner_id,
            venue_id=payment.venue_id,
            amount=payment.amount,
            status=payment.status.value,
            payment_method=payment.payment_method.value,
            created_at=payment.created_at,
            slot_date=payment.slot_date,
            slot_time=payment.slot_time,
        )


@dataclass(frozen=True)
class EarningsSummary:
    """Windowed revenue totals for an owner dashboard.

    The windows overlap: a payment written today counts towards ``today``,
    ``this_week`` and ``this_month`` as well as ``total``.
    """

    total: Decimal = _ZERO
    pending: Decimal = _ZERO
    today: Decimal = _ZERO
    this_week: Decimal = _ZERO
    this_month: Decimal = _ZERO


@dataclass(frozen=True)
class TransactionCounts:
    total: int = 0
    completed: int = 0
    pending: int = 0


def _amount_of(payment: PaymentRecord) -> Decimal:
    amount = parse_amount(payment.amount)
    if amount is None:
        logger.warning(
            "Payment %s has unusable amount %r; counting it as zero",
            payment.id,
            payment.amount,
        )
        return _ZERO
    return amount


def aggregate(payments: Iterable[PaymentRecord], now: datetime) -> EarningsSummary:
    """Sum payment amounts into total, pending and calendar windows.

    ``total`` and ``pending`` depend only on status. A paid record with an
    unparsable ``created_at`` still counts towards ``total`` but lands in no
    window.
    """
    if payments is None:
        raise ValueError("A payment collection is required")

    total = pending = today = this_week = this_month = _ZERO
    for payment in payments:
        status = status_value(payment.status)
        if status == _PENDING:
            pending += _amount_of(payment)
            continue
        if status != _PAID:
            continue

        amount = _amount_of(payment)
        total += amount

        created_at = parse_timestamp(payment.created_at)
        if created_at is None:
            logger.warning(
                "Payment %s has unparsable created_at %r; excluded from windows",
                payment.id,
                payment.created_at,
            )
            continue
        created_at = align_to(created_at, now)
        if same_calendar_day(created_at, now):
            today += amount
        if in_week_of(created_at, now):
            this_week += amount
        if same_calendar_month(created_at, now):
            this_month += amount

    return EarningsSummary(
        total=total,
        pending=pending,
        today=today,
        this_week=this_week,
        this_month=this_month,
    )


def count_transactions(payments: Iterable[Any]) -> TransactionCounts:
    total = completed = pending = 0
    for payment in payments:
        total += 1
        status = status_value(payment.status)
        if status == _PAID:
            completed += 1
        elif status == _PENDING:
            pending += 1
    return TransactionCounts(total=total, completed=completed, pending=pending)


def filter_transactions(payments: Iterable[_Txn], kind: str = "all") -> list[_Txn]:
    """Select the transactions shown under a dashboard filter tab.

    ``cash`` lists cash payments still awaiting collection.
    """
    if kind not in TRANSACTION_FILTERS:
        raise ValueError(f"Unknown transaction filter: {kind}")
    if kind == "all":
        return list(payments)
    if kind == "cash":
        return [
            payment
            for payment in payments
            if status_value(payment.payment_method) == PaymentMethod.CASH.value
            and status_value(payment.status) == _PENDING
        ]
    return [payment for payment in payments if status_value(payment.status) == kind]


async def fetch_payments(
    session: AsyncSession, *, owner_id: uuid.UUID
) -> list[PaymentRecord]:
    """Load an owner's payments, newest first."""
    result = await session.execute(
        select(Payment)
        .where(Payment.owner_id == owner_id)
        .order_by(Payment.created_at.desc())
    )
    return [PaymentRecord.from_model(row) for row in result.scalars().all()]


async def get_owner_earnings(
    session: AsyncSession,
    *,
    owner_id: uuid.UUID,
    now: datetime,
) -> tuple[EarningsSummary, TransactionCounts]:
    """Return the earnings summary and transaction counts for an owner."""
    payments = await fetch_payments(session, owner_id=owner_id)
    return aggregate(payments, now), count_transactions(payments)
