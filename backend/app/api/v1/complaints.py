"""Complaint API."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.models.complaint import ComplaintStatus, ComplaintType
from app.models.user import User, UserRole
from app.schemas.complaint import ComplaintCreate, ComplaintRead, ComplaintStatusUpdate
from app.services import complaint_service

router = APIRouter()


@router.post(
    "",
    response_model=ComplaintRead,
    status_code=status.HTTP_201_CREATED,
    summary="File a complaint",
)
async def create_complaint(
    payload: ComplaintCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> ComplaintRead:
    try:
        complaint = await complaint_service.create_complaint(
            session, user=current_user, **payload.model_dump()
        )
    except LookupError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    except PermissionError as exc:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)
        ) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return ComplaintRead.model_validate(complaint)


@router.get("", response_model=list[ComplaintRead], summary="List complaints")
async def list_complaints(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
    status_filter: Annotated[ComplaintStatus | None, Query(alias="status")] = None,
    complaint_type: ComplaintType | None = None,
    role: UserRole | None = None,
    skip: int = 0,
    limit: int = 50,
) -> list[ComplaintRead]:
    complaints = await complaint_service.list_complaints(
        session,
        user=current_user,
        status=status_filter,
        complaint_type=complaint_type,
        filer_role=role,
        skip=skip,
        limit=min(limit, 100),
    )
    return [ComplaintRead.model_validate(obj) for obj in complaints]


@router.get("/{complaint_id}", response_model=ComplaintRead, summary="Get complaint")
async def get_complaint(
    complaint_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> ComplaintRead:
    complaint = await complaint_service.get_complaint(session, complaint_id=complaint_id)
    if complaint is None or not complaint_service.can_view(complaint, current_user):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Complaint not found"
        )
    return ComplaintRead.model_validate(complaint)


@router.patch(
    "/{complaint_id}/status",
    response_model=ComplaintRead,
    summary="Resolve or reopen a complaint",
)
async def update_complaint_status(
    complaint_id: uuid.UUID,
    payload: ComplaintStatusUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _admin: Annotated[User, Depends(deps.get_current_admin)],
    now: Annotated[datetime, Depends(deps.get_now)],
) -> ComplaintRead:
    complaint = await complaint_service.get_complaint(session, complaint_id=complaint_id)
    if complaint is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Complaint not found"
        )
    complaint = await complaint_service.update_complaint_status(
        session,
        complaint=complaint,
        status=payload.status,
        note=payload.note,
        now=now,
    )
    return ComplaintRead.model_validate(complaint)
