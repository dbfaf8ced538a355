"""Availability response schemas."""
from __future__ import annotations

import datetime
import uuid

from pydantic import BaseModel


class AvailabilityResponse(BaseModel):
    """Bookable slots per weekday for a venue."""

    venue_id: uuid.UUID
    as_of: datetime.date
    availability: dict[str, list[str]]


class UpcomingDay(BaseModel):
    date: datetime.date
    weekday: str
    slots: list[str]


class UpcomingAvailabilityResponse(BaseModel):
    """Bookable slots for each of the next few calendar dates."""

    venue_id: uuid.UUID
    as_of: datetime.date
    days: list[UpcomingDay]
