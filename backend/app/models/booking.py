"""Booking models."""
from __future__ import annotations

import enum
import uuid
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Date, Enum, ForeignKey, Index, Integer, Numeric, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.mixins import TimestampMixin
from app.models.payment import PaymentStatus

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from app.models.payment import Payment
    from app.models.user import User
    from app.models.venue import Venue


class BookingStatus(str, enum.Enum):
    """Lifecycle states for bookings."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class Booking(TimestampMixin, Base):
    """A player's claim on one weekly slot of a venue on a calendar date."""

    __tablename__ = "bookings"

    __table_args__ = (
        Index(
            "ux_bookings_active_slot",
            "venue_id",
            "booking_date",
            "time",
            unique=True,
            sqlite_where=text("status != 'CANCELLED'"),
            postgresql_where=text("status != 'CANCELLED'"),
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    venue_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("venues.id", ondelete="CASCADE"), nullable=False, index=True
    )
    booked_by: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    booking_date: Mapped[date] = mapped_column(Date, nullable=False)
    time: Mapped[str] = mapped_column(String(32), nullable=False)
    duration_hours: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    price_per_hour: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    status: Mapped[BookingStatus] = mapped_column(
        Enum(BookingStatus), default=BookingStatus.PENDING, nullable=False
    )
    payment_status: Mapped[PaymentStatus] = mapped_column(
        Enum(PaymentStatus), default=PaymentStatus.PENDING, nullable=False
    )
    rejection_reason: Mapped[str | None] = mapped_column(String(1024))

    venue: Mapped["Venue"] = relationship("Venue", back_populates="bookings")
    player: Mapped["User"] = relationship("User", back_populates="bookings")
    payment: Mapped["Payment | None"] = relationship(
        "Payment", back_populates="booking", uselist=False
    )
