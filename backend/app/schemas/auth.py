"""Authentication schemas."""
from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from app.models.user import UserRole
from app.schemas.user import UserBase, UserRead


class Token(BaseModel):
    """Response body for access tokens."""

    access_token: str
    token_type: str = "bearer"


class RegistrationRequest(UserBase):
    """Self-service registration for players and venue owners."""

    password: str = Field(min_length=8)
    role: UserRole = UserRole.PLAYER

    @field_validator("role")
    @classmethod
    def _no_admin_signup(cls, value: UserRole) -> UserRole:
        if value == UserRole.ADMIN:
            raise ValueError("Administrators cannot self-register")
        return value


class RegistrationResponse(BaseModel):
    """Response after successful self-service registration."""

    token: Token
    user: UserRead
