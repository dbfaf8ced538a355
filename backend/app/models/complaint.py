"""Complaints filed by players and venue owners for admin review."""
from __future__ import annotations

import enum
import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.mixins import TimestampMixin, UTCDateTime
from app.models.user import UserRole

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from app.models.user import User
    from app.models.venue import Venue


class ComplaintType(str, enum.Enum):
    """Categories a complaint can be filed under."""

    PAYMENT_ISSUE = "payment_issue"
    BEHAVIOR_ISSUE = "behavior_issue"
    NO_SHOW = "no_show"
    PROPERTY_DAMAGE = "property_damage"
    RULE_VIOLATION = "rule_violation"
    OTHER = "other"


class ComplaintStatus(str, enum.Enum):
    """Review states of a complaint."""

    PENDING = "pending"
    RESOLVED = "resolved"


class Complaint(TimestampMixin, Base):
    """A complaint raised by a player or an owner."""

    __tablename__ = "complaints"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    filed_by: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    filer_role: Mapped[UserRole] = mapped_column(Enum(UserRole), nullable=False)
    venue_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("venues.id", ondelete="SET NULL")
    )
    against_user_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL")
    )
    against_name: Mapped[str | None] = mapped_column(String(255))
    complaint_type: Mapped[ComplaintType] = mapped_column(
        Enum(ComplaintType), nullable=False
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[ComplaintStatus] = mapped_column(
        Enum(ComplaintStatus), default=ComplaintStatus.PENDING, nullable=False
    )
    admin_note: Mapped[str | None] = mapped_column(Text)
    reviewed_by_admin: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    resolved_at: Mapped[datetime | None] = mapped_column(UTCDateTime())

    filer: Mapped["User"] = relationship("User", foreign_keys=[filed_by])
    venue: Mapped["Venue | None"] = relationship("Venue")
