"""User-related schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, TypeAdapter, field_validator

from app.models.user import ApprovalStatus, UserRole, UserStatus


_ALLOWED_DEV_EMAIL_DOMAINS = {"playspot.local"}
_EMAIL_ADAPTER = TypeAdapter(EmailStr)


def _validate_relaxed_email(value: str) -> str:
    """Allow placeholder domains (e.g. *.local) while keeping core validation."""

    email = value.strip()
    try:
        return _EMAIL_ADAPTER.validate_python(email)
    except Exception:
        local_part, _, domain = email.partition("@")
        if local_part and domain:
            if domain.endswith(".local") or domain in _ALLOWED_DEV_EMAIL_DOMAINS:
                return email
        raise


class UserBase(BaseModel):
    """Shared user fields."""

    email: str
    first_name: str
    last_name: str
    phone_number: str | None = None

    @field_validator("email")
    @classmethod
    def _validate_email(cls, value: str) -> str:
        return _validate_relaxed_email(value)


class UserRead(UserBase):
    """Serialized user response."""

    id: uuid.UUID
    role: UserRole
    status: UserStatus
    approval_status: ApprovalStatus
    rejection_reason: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserStatusUpdate(BaseModel):
    """Admin suspend or activate action."""

    status: UserStatus


class OwnerApprovalRequest(BaseModel):
    """Admin decision on a pending venue owner."""

    decision: ApprovalStatus
    reason: str | None = None

    @field_validator("decision")
    @classmethod
    def _decided(cls, value: ApprovalStatus) -> ApprovalStatus:
        if value == ApprovalStatus.PENDING:
            raise ValueError("decision must be approved or rejected")
        return value
