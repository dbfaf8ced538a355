"""Schema exports."""

from app.schemas.auth import RegistrationRequest, RegistrationResponse, Token
from app.schemas.availability import (
    AvailabilityResponse,
    UpcomingAvailabilityResponse,
    UpcomingDay,
)
from app.schemas.booking import BookingCreate, BookingRead, BookingStatusUpdate
from app.schemas.complaint import ComplaintCreate, ComplaintRead, ComplaintStatusUpdate
from app.schemas.earnings import EarningsSummaryRead, TransactionCountsRead
from app.schemas.payment import PaymentCreate, PaymentRead
from app.schemas.user import OwnerApprovalRequest, UserRead, UserStatusUpdate
from app.schemas.venue import SlotCreate, SlotRemove, VenueCreate, VenueRead, VenueUpdate

__all__ = [
    "AvailabilityResponse",
    "BookingCreate",
    "BookingRead",
    "BookingStatusUpdate",
    "ComplaintCreate",
    "ComplaintRead",
    "ComplaintStatusUpdate",
    "EarningsSummaryRead",
    "OwnerApprovalRequest",
    "PaymentCreate",
    "PaymentRead",
    "RegistrationRequest",
    "RegistrationResponse",
    "SlotCreate",
    "SlotRemove",
    "Token",
    "TransactionCountsRead",
    "UpcomingAvailabilityResponse",
    "UpcomingDay",
    "UserRead",
    "UserStatusUpdate",
    "VenueCreate",
    "VenueRead",
    "VenueUpdate",
]
