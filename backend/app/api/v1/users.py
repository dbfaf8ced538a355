"""User endpoints."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.models.user import ApprovalStatus, User, UserRole, UserStatus
from app.schemas.user import OwnerApprovalRequest, UserRead, UserStatusUpdate
from app.services import user_service

router = APIRouter()


@router.get("/me", response_model=UserRead, summary="Current user profile")
async def read_current_user(
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> UserRead:
    return UserRead.model_validate(current_user)


@router.get("", response_model=list[UserRead], summary="List users")
async def list_users(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _admin: Annotated[User, Depends(deps.get_current_admin)],
    role: UserRole | None = None,
    approval_status: ApprovalStatus | None = None,
    status_filter: Annotated[UserStatus | None, Query(alias="status")] = None,
    skip: int = 0,
    limit: int = 50,
) -> list[UserRead]:
    users = await user_service.list_users(
        session,
        role=role,
        approval_status=approval_status,
        status=status_filter,
        skip=skip,
        limit=min(limit, 100),
    )
    return [UserRead.model_validate(user) for user in users]


@router.post(
    "/{user_id}/approval",
    response_model=UserRead,
    summary="Approve or reject a venue owner",
)
async def decide_owner_approval(
    user_id: uuid.UUID,
    payload: OwnerApprovalRequest,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _admin: Annotated[User, Depends(deps.get_current_admin)],
) -> UserRead:
    user = await user_service.get_user(session, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="User not found"
        )
    try:
        user = await user_service.set_owner_approval(
            session, user=user, decision=payload.decision, reason=payload.reason
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return UserRead.model_validate(user)


@router.post(
    "/{user_id}/status",
    response_model=UserRead,
    summary="Suspend or reactivate a user",
)
async def change_user_status(
    user_id: uuid.UUID,
    payload: UserStatusUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    admin: Annotated[User, Depends(deps.get_current_admin)],
) -> UserRead:
    user = await user_service.get_user(session, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="User not found"
        )
    try:
        user = await user_service.set_user_status(
            session, user=user, status=payload.status, acting_admin=admin
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return UserRead.model_validate(user)
