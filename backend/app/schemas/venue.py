"""Pydantic schemas for venues and their weekly slot templates."""
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.services.date_windows import WEEKDAY_NAMES
from app.services.venue_service import build_slot, validate_template


class VenueBase(BaseModel):
    """Shared venue fields."""

    name: str = Field(min_length=1, max_length=255)
    address: str | None = None
    sport_type: str | None = None
    venue_type: str | None = None
    description: str | None = None
    facilities: list[str] = Field(default_factory=list)
    price_per_hour: Decimal = Field(default=Decimal("0"), ge=Decimal("0"))


class VenueCreate(VenueBase):
    """Payload for creating venues."""

    availability: dict[str, list[str]] = Field(default_factory=dict)

    @field_validator("availability")
    @classmethod
    def _check_template(cls, value: dict[str, list[str]]) -> dict[str, list[str]]:
        return validate_template(value)


class VenueUpdate(BaseModel):
    """Mutable venue fields."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    address: str | None = None
    sport_type: str | None = None
    venue_type: str | None = None
    description: str | None = None
    facilities: list[str] | None = None
    price_per_hour: Decimal | None = Field(default=None, ge=Decimal("0"))
    availability: dict[str, list[str]] | None = None

    @field_validator("availability")
    @classmethod
    def _check_template(
        cls, value: dict[str, list[str]] | None
    ) -> dict[str, list[str]] | None:
        if value is None:
            return None
        return validate_template(value)


class VenueRead(VenueBase):
    """Serialized venue representation."""

    id: uuid.UUID
    owner_id: uuid.UUID
    availability: dict[str, list[str]]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SlotCreate(BaseModel):
    """A new slot for one weekday, given as start and end times."""

    day: str
    start: str
    end: str

    @field_validator("day")
    @classmethod
    def _weekday(cls, value: str) -> str:
        if value not in WEEKDAY_NAMES:
            raise ValueError(f"day must be one of {', '.join(WEEKDAY_NAMES)}")
        return value

    @model_validator(mode="after")
    def _check_times(self) -> "SlotCreate":
        build_slot(self.start, self.end)
        return self

    @property
    def slot(self) -> str:
        return build_slot(self.start, self.end)


class SlotRemove(BaseModel):
    """Identifies an existing slot of one weekday."""

    day: str
    slot: str
