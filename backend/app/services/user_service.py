"""User data access helpers."""
from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import get_password_hash
from app.models.user import ApprovalStatus, User, UserRole, UserStatus

logger = logging.getLogger(__name__)


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    """Return a user by email address."""
    result = await session.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()


async def get_user(session: AsyncSession, user_id: uuid.UUID) -> User | None:
    """Return a user by ID."""
    result = await session.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def list_users(
    session: AsyncSession,
    *,
    role: UserRole | None = None,
    approval_status: ApprovalStatus | None = None,
    status: UserStatus | None = None,
    skip: int = 0,
    limit: int = 50,
) -> list[User]:
    """Return paginated users, newest first."""
    stmt = select(User).order_by(User.created_at.desc())
    if role is not None:
        stmt = stmt.where(User.role == role)
    if approval_status is not None:
        stmt = stmt.where(User.approval_status == approval_status)
    if status is not None:
        stmt = stmt.where(User.status == status)
    result = await session.execute(stmt.offset(skip).limit(limit))
    return list(result.scalars().all())


async def create_user(
    session: AsyncSession,
    *,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    role: UserRole,
    phone_number: str | None = None,
) -> User:
    """Persist a new user with hashed password.

    Venue owners start out pending until an administrator reviews them.
    """
    approval = ApprovalStatus.PENDING if role == UserRole.OWNER else ApprovalStatus.APPROVED
    user = User(
        email=email.lower(),
        hashed_password=get_password_hash(password),
        first_name=first_name,
        last_name=last_name,
        phone_number=phone_number,
        role=role,
        status=UserStatus.ACTIVE,
        approval_status=approval,
    )
    session.add(user)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise exc
    await session.refresh(user)
    logger.info("User %s registered with role %s", user.id, role.value)
    return user


async def set_owner_approval(
    session: AsyncSession,
    *,
    user: User,
    decision: ApprovalStatus,
    reason: str | None = None,
) -> User:
    """Approve or reject a venue owner account."""
    if user.role != UserRole.OWNER:
        raise ValueError("Only venue owners go through approval")
    user.approval_status = decision
    user.rejection_reason = reason if decision == ApprovalStatus.REJECTED else None
    await session.commit()
    await session.refresh(user)
    logger.info("Owner %s marked %s", user.id, decision.value)
    return user


async def set_user_status(
    session: AsyncSession,
    *,
    user: User,
    status: UserStatus,
    acting_admin: User,
) -> User:
    """Suspend or reactivate an account.

    Suspended users cannot sign in and their existing tokens stop working.
    """
    if user.id == acting_admin.id:
        raise ValueError("Administrators cannot change their own status")
    if user.role == UserRole.ADMIN:
        raise ValueError("Administrator accounts cannot be suspended")
    user.status = status
    await session.commit()
    await session.refresh(user)
    logger.info("User %s marked %s by %s", user.id, status.value, acting_admin.id)
    return user
