"""Sports venue (ground) offered for booking by an owner."""

from __future__ import annotations

import uuid
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.types import JSON

from app.db.base import Base
from app.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from app.models.booking import Booking
    from app.models.user import User


class Venue(TimestampMixin, Base):
    """A bookable ground with a recurring weekly slot template."""

    __tablename__ = "venues"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str | None] = mapped_column(String(512))
    sport_type: Mapped[str | None] = mapped_column(String(64))
    venue_type: Mapped[str | None] = mapped_column(String(64))
    description: Mapped[str | None] = mapped_column(Text())
    facilities: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    price_per_hour: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), default=Decimal("0"), nullable=False
    )
    # weekday name -> ordered slot strings such as "14:00-15:00"
    availability: Mapped[dict[str, list[str]]] = mapped_column(
        JSON, default=dict, nullable=False
    )

    owner: Mapped["User"] = relationship("User", back_populates="venues")
    bookings: Mapped[list["Booking"]] = relationship(
        "Booking", back_populates="venue", cascade="all, delete-orphan"
    )
