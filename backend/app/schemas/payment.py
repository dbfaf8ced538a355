"""Payment schemas."""
from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.models.payment import PaymentMethod, PaymentStatus


class PaymentCreate(BaseModel):
    """A player's payment submission for one booking."""

    booking_id: uuid.UUID
    payment_method: PaymentMethod
    transaction_id: str | None = Field(default=None, max_length=128)
    screenshot_url: str | None = Field(default=None, max_length=1024)

    @model_validator(mode="after")
    def _require_reference(self) -> "PaymentCreate":
        if self.payment_method != PaymentMethod.CASH and not self.transaction_id:
            raise ValueError("transaction_id is required for non-cash payments")
        return self


class PaymentRead(BaseModel):
    """Serialized payment representation."""

    id: uuid.UUID
    owner_id: uuid.UUID
    venue_id: uuid.UUID
    booking_id: uuid.UUID
    player_id: uuid.UUID
    amount: Decimal
    status: PaymentStatus
    payment_method: PaymentMethod
    transaction_id: str | None = None
    screenshot_url: str | None = None
    slot_date: date
    slot_time: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
