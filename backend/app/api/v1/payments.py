"""Payment recording and owner transaction API."""

from __future__ import annotations

import uuid
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.models.user import User, UserRole
from app.schemas.payment import PaymentCreate, PaymentRead
from app.services import payment_service

router = APIRouter()


def _owner_scope(current_user: User, owner_id: uuid.UUID | None) -> uuid.UUID:
    if current_user.role == UserRole.ADMIN:
        if owner_id is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="owner_id is required for administrators",
            )
        return owner_id
    return current_user.id


@router.post(
    "",
    response_model=PaymentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Record a booking payment",
)
async def record_payment(
    payload: PaymentCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_player)],
) -> PaymentRead:
    try:
        payment = await payment_service.record_payment(
            session, player=current_user, **payload.model_dump()
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
    return PaymentRead.model_validate(payment)


@router.get("", response_model=list[PaymentRead], summary="List owner transactions")
async def list_payments(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_owner)],
    kind: Literal["all", "paid", "pending", "cash"] = "all",
    owner_id: uuid.UUID | None = None,
) -> list[PaymentRead]:
    payments = await payment_service.list_payments(
        session, owner_id=_owner_scope(current_user, owner_id), kind=kind
    )
    return [PaymentRead.model_validate(obj) for obj in payments]


@router.post(
    "/{payment_id}/receive",
    response_model=PaymentRead,
    summary="Mark a cash payment as received",
)
async def receive_cash_payment(
    payment_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_owner)],
) -> PaymentRead:
    payment = await payment_service.get_payment(session, payment_id=payment_id)
    if payment is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Payment not found"
        )
    try:
        payment = await payment_service.receive_cash_payment(
            session, payment=payment, user=current_user
        )
    except PermissionError as exc:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)
        ) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return PaymentRead.model_validate(payment)
