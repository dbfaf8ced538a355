"""Versioned API router."""

from fastapi import APIRouter

from . import auth, bookings, complaints, earnings, health, payments, users, venues

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(venues.router, prefix="/venues", tags=["venues"])
router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
router.include_router(payments.router, prefix="/payments", tags=["payments"])
router.include_router(earnings.router, prefix="/earnings", tags=["earnings"])
router.include_router(complaints.router, prefix="/complaints", tags=["complaints"])

__all__ = ["router"]
