"""Complaint intake and admin review."""
from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.complaint import Complaint, ComplaintStatus, ComplaintType
from app.models.user import User, UserRole
from app.models.venue import Venue

logger = logging.getLogger(__name__)


async def create_complaint(
    session: AsyncSession,
    *,
    user: User,
    complaint_type: ComplaintType,
    description: str,
    venue_id: uuid.UUID | None = None,
    against_user_id: uuid.UUID | None = None,
    against_name: str | None = None,
) -> Complaint:
    """File a complaint on behalf of a player or venue owner."""
    if user.role not in (UserRole.PLAYER, UserRole.OWNER):
        raise PermissionError("Only players and venue owners can file complaints")
    if venue_id is not None and await session.get(Venue, venue_id) is None:
        raise LookupError("Venue not found")
    if against_user_id is not None:
        if against_user_id == user.id:
            raise ValueError("You cannot file a complaint against yourself")
        if await session.get(User, against_user_id) is None:
            raise LookupError("User not found")

    complaint = Complaint(
        filed_by=user.id,
        filer_role=user.role,
        venue_id=venue_id,
        against_user_id=against_user_id,
        against_name=against_name,
        complaint_type=complaint_type,
        description=description,
        status=ComplaintStatus.PENDING,
        reviewed_by_admin=False,
    )
    session.add(complaint)
    await session.commit()
    await session.refresh(complaint)
    logger.info(
        "Complaint %s filed by %s (%s)",
        complaint.id,
        user.id,
        complaint_type.value,
    )
    return complaint


async def list_complaints(
    session: AsyncSession,
    *,
    user: User,
    status: ComplaintStatus | None = None,
    complaint_type: ComplaintType | None = None,
    filer_role: UserRole | None = None,
    skip: int = 0,
    limit: int = 50,
) -> Sequence[Complaint]:
    """Return complaints newest first.

    Administrators see every complaint; everyone else sees only the ones they
    filed.
    """
    stmt = select(Complaint).order_by(Complaint.created_at.desc())
    if user.role != UserRole.ADMIN:
        stmt = stmt.where(Complaint.filed_by == user.id)
    if status is not None:
        stmt = stmt.where(Complaint.status == status)
    if complaint_type is not None:
        stmt = stmt.where(Complaint.complaint_type == complaint_type)
    if filer_role is not None:
        stmt = stmt.where(Complaint.filer_role == filer_role)
    result = await session.execute(stmt.offset(skip).limit(limit))
    return result.scalars().all()


async def get_complaint(
    session: AsyncSession, *, complaint_id: uuid.UUID
) -> Complaint | None:
    return await session.get(Complaint, complaint_id)


def can_view(complaint: Complaint, user: User) -> bool:
    return user.role == UserRole.ADMIN or complaint.filed_by == user.id


async def update_complaint_status(
    session: AsyncSession,
    *,
    complaint: Complaint,
    status: ComplaintStatus,
    note: str | None,
    now: datetime,
) -> Complaint:
    """Record an admin decision; reopening a complaint clears ``resolved_at``."""
    complaint.status = status
    complaint.admin_note = note
    complaint.reviewed_by_admin = True
    complaint.resolved_at = now if status == ComplaintStatus.RESOLVED else None
    await session.commit()
    await session.refresh(complaint)
    logger.info("Complaint %s marked %s", complaint.id, status.value)
    return complaint
