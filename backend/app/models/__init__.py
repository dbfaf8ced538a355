"""ORM models package export."""

from app.models.booking import Booking, BookingStatus
from app.models.complaint import Complaint, ComplaintStatus, ComplaintType
from app.models.payment import Payment, PaymentMethod, PaymentStatus
from app.models.user import ApprovalStatus, User, UserRole, UserStatus
from app.models.venue import Venue

__all__ = [
    "ApprovalStatus",
    "Booking",
    "BookingStatus",
    "Complaint",
    "ComplaintStatus",
    "ComplaintType",
    "Payment",
    "PaymentMethod",
    "PaymentStatus",
    "User",
    "UserRole",
    "UserStatus",
    "Venue",
]
