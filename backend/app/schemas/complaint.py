"""Complaint schemas."""
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.complaint import ComplaintStatus, ComplaintType
from app.models.user import UserRole


class ComplaintCreate(BaseModel):
    """Payload a player or owner submits to raise a complaint."""

    complaint_type: ComplaintType
    description: str = Field(min_length=1, max_length=4000)
    venue_id: uuid.UUID | None = None
    against_user_id: uuid.UUID | None = None
    against_name: str | None = Field(default=None, max_length=255)

    @field_validator("description", "against_name")
    @classmethod
    def _strip(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class ComplaintStatusUpdate(BaseModel):
    """Admin review of a complaint."""

    status: ComplaintStatus
    note: str | None = Field(default=None, max_length=4000)


class ComplaintRead(BaseModel):
    """Serialized complaint."""

    id: uuid.UUID
    filed_by: uuid.UUID
    filer_role: UserRole
    venue_id: uuid.UUID | None = None
    against_user_id: uuid.UUID | None = None
    against_name: str | None = None
    complaint_type: ComplaintType
    description: str
    status: ComplaintStatus
    admin_note: str | None = None
    reviewed_by_admin: bool
    resolved_at: datetime | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
