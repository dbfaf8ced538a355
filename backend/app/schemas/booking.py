"""Pydantic schemas for bookings."""
from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from app.models.booking import BookingStatus
from app.models.payment import PaymentStatus


class BookingCreate(BaseModel):
    """Payload a player submits to request a slot."""

    venue_id: uuid.UUID
    booking_date: date
    time: str = Field(min_length=1, max_length=32)
    duration_hours: int = Field(default=1, ge=1, le=12)


class BookingStatusUpdate(BaseModel):
    """Owner or player decision on a booking."""

    status: BookingStatus
    reason: str | None = Field(default=None, max_length=1024)


class BookingRead(BaseModel):
    """Serialized booking representation."""

    id: uuid.UUID
    venue_id: uuid.UUID
    booked_by: uuid.UUID
    booking_date: date
    time: str
    duration_hours: int
    price_per_hour: Decimal
    total_amount: Decimal
    status: BookingStatus
    payment_status: PaymentStatus
    rejection_reason: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
