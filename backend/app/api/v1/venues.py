"""Venue management and availability API."""

from __future__ import annotations

import uuid
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.core.config import get_settings
from app.models.user import User, UserRole
from app.models.venue import Venue
from app.schemas.availability import (
    AvailabilityResponse,
    UpcomingAvailabilityResponse,
    UpcomingDay,
)
from app.schemas.venue import SlotCreate, SlotRemove, VenueCreate, VenueRead, VenueUpdate
from app.services import availability_service, venue_service
from app.services.date_windows import weekday_name

router = APIRouter()

settings = get_settings()


async def _load_venue(session: AsyncSession, venue_id: uuid.UUID) -> Venue:
    venue = await venue_service.get_venue(session, venue_id=venue_id)
    if venue is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Venue not found"
        )
    return venue


def _forbidden(exc: PermissionError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))


@router.get("", response_model=list[VenueRead], summary="List venues")
async def list_venues(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
    skip: int = 0,
    limit: int = 50,
) -> list[VenueRead]:
    """Owners see their own venues; everyone else sees all of them."""
    owner_id = current_user.id if current_user.role == UserRole.OWNER else None
    venues = await venue_service.list_venues(
        session, owner_id=owner_id, skip=skip, limit=min(limit, 100)
    )
    return [VenueRead.model_validate(venue) for venue in venues]


@router.post(
    "",
    response_model=VenueRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create venue",
)
async def create_venue(
    payload: VenueCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_owner)],
) -> VenueRead:
    try:
        venue = await venue_service.create_venue(
            session, owner=current_user, **payload.model_dump()
        )
    except PermissionError as exc:
        raise _forbidden(exc) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return VenueRead.model_validate(venue)


@router.get("/{venue_id}", response_model=VenueRead, summary="Get venue")
async def get_venue(
    venue_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _user: Annotated[User, Depends(deps.get_current_active_user)],
) -> VenueRead:
    venue = await _load_venue(session, venue_id)
    return VenueRead.model_validate(venue)


@router.patch("/{venue_id}", response_model=VenueRead, summary="Update venue")
async def update_venue(
    venue_id: uuid.UUID,
    payload: VenueUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_owner)],
) -> VenueRead:
    venue = await _load_venue(session, venue_id)
    try:
        venue = await venue_service.update_venue(
            session,
            venue=venue,
            user=current_user,
            **payload.model_dump(exclude_unset=True),
        )
    except PermissionError as exc:
        raise _forbidden(exc) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return VenueRead.model_validate(venue)


@router.post(
    "/{venue_id}/availability/slots",
    response_model=VenueRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add a weekly time slot",
)
async def add_slot(
    venue_id: uuid.UUID,
    payload: SlotCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_owner)],
) -> VenueRead:
    venue = await _load_venue(session, venue_id)
    try:
        venue = await venue_service.add_slot(
            session, venue=venue, user=current_user, day=payload.day, slot=payload.slot
        )
    except PermissionError as exc:
        raise _forbidden(exc) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return VenueRead.model_validate(venue)


@router.delete(
    "/{venue_id}/availability/slots",
    response_model=VenueRead,
    summary="Remove a weekly time slot",
)
async def remove_slot(
    venue_id: uuid.UUID,
    payload: SlotRemove,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_owner)],
    today: Annotated[date, Depends(deps.get_today)],
) -> VenueRead:
    venue = await _load_venue(session, venue_id)
    try:
        venue = await venue_service.remove_slot(
            session,
            venue=venue,
            user=current_user,
            day=payload.day,
            slot=payload.slot,
            today=today,
        )
    except PermissionError as exc:
        raise _forbidden(exc) from exc
    except LookupError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    except availability_service.SlotUnavailableError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail=str(exc)
        ) from exc
    return VenueRead.model_validate(venue)


@router.get(
    "/{venue_id}/availability",
    response_model=AvailabilityResponse,
    summary="Bookable slots per weekday",
)
async def get_availability(
    venue_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _user: Annotated[User, Depends(deps.get_current_active_user)],
    today: Annotated[date, Depends(deps.get_today)],
) -> AvailabilityResponse:
    try:
        availability = await availability_service.get_venue_availability(
            session, venue_id=venue_id, today=today
        )
    except LookupError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    return AvailabilityResponse(venue_id=venue_id, as_of=today, availability=availability)


@router.get(
    "/{venue_id}/availability/upcoming",
    response_model=UpcomingAvailabilityResponse,
    summary="Bookable slots for the next few dates",
)
async def get_upcoming_availability(
    venue_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _user: Annotated[User, Depends(deps.get_current_active_user)],
    today: Annotated[date, Depends(deps.get_today)],
    days: Annotated[int | None, Query(ge=1, le=60)] = None,
) -> UpcomingAvailabilityResponse:
    try:
        upcoming = await availability_service.get_upcoming_availability(
            session,
            venue_id=venue_id,
            today=today,
            days=days or settings.booking_lookahead_days,
        )
    except LookupError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    return UpcomingAvailabilityResponse(
        venue_id=venue_id,
        as_of=today,
        days=[
            UpcomingDay(date=day, weekday=weekday_name(day), slots=slots)
            for day, slots in upcoming.items()
        ],
    )
