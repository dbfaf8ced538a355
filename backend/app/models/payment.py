"""Payment records written when a player pays for a booking."""

from __future__ import annotations

import enum
import uuid
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Date, Enum, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from app.models.booking import Booking
    from app.models.user import User
    from app.models.venue import Venue


class PaymentStatus(str, enum.Enum):
    """Settlement states for a payment."""

    PENDING = "pending"
    PAID = "paid"


class PaymentMethod(str, enum.Enum):
    """Ways a player can settle a booking."""

    CASH = "cash"
    JAZZCASH = "jazzcash"
    EASYPAISA = "easypaisa"
    BANK_TRANSFER = "bank_transfer"


class Payment(TimestampMixin, Base):
    """Represents the payment written for one booking.

    ``created_at`` is the moment the record was written and drives every
    earnings window; ``slot_date``/``slot_time`` only describe the booked slot.
    """

    __tablename__ = "payments"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    venue_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("venues.id", ondelete="CASCADE"), nullable=False
    )
    booking_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    player_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    status: Mapped[PaymentStatus] = mapped_column(
        Enum(PaymentStatus), default=PaymentStatus.PENDING, nullable=False
    )
    payment_method: Mapped[PaymentMethod] = mapped_column(
        Enum(PaymentMethod), nullable=False
    )
    transaction_id: Mapped[str | None] = mapped_column(String(128))
    screenshot_url: Mapped[str | None] = mapped_column(String(1024))
    slot_date: Mapped[date] = mapped_column(Date, nullable=False)
    slot_time: Mapped[str] = mapped_column(String(32), nullable=False)

    booking: Mapped["Booking"] = relationship("Booking", back_populates="payment")
    venue: Mapped["Venue"] = relationship("Venue")
    owner: Mapped["User"] = relationship("User", foreign_keys=[owner_id])
    player: Mapped["User"] = relationship("User", foreign_keys=[player_id])
