"""Owner earnings dashboard API."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.core.config import get_settings
from app.models.user import User, UserRole
from app.schemas.earnings import EarningsSummaryRead, TransactionCountsRead
from app.services import earnings_service

router = APIRouter()


@router.get(
    "/summary",
    response_model=EarningsSummaryRead,
    summary="Earnings totals for the current owner",
)
async def earnings_summary(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_owner)],
    now: Annotated[datetime, Depends(deps.get_now)],
    owner_id: uuid.UUID | None = None,
) -> EarningsSummaryRead:
    if current_user.role == UserRole.ADMIN:
        if owner_id is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="owner_id is required for administrators",
            )
    else:
        owner_id = current_user.id
    summary, counts = await earnings_service.get_owner_earnings(
        session, owner_id=owner_id, now=now
    )
    return EarningsSummaryRead(
        total=summary.total,
        pending=summary.pending,
        today=summary.today,
        this_week=summary.this_week,
        this_month=summary.this_month,
        currency=get_settings().currency,
        as_of=now,
        transactions=TransactionCountsRead(
            total=counts.total, completed=counts.completed, pending=counts.pending
        ),
    )
