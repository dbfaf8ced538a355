"""Service layer exports."""
from app.services import (
    auth_service,
    availability_service,
    booking_service,
    complaint_service,
    earnings_service,
    payment_service,
    user_service,
    venue_service,
)

__all__ = [
    "auth_service",
    "availability_service",
    "booking_service",
    "complaint_service",
    "earnings_service",
    "payment_service",
    "user_service",
    "venue_service",
]
