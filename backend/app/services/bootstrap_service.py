"""Bootstrap helpers for default data."""

from __future__ import annotations

import logging

from app.core.config import get_settings
from app.db.session import get_sessionmaker
from app.models import UserRole
from app.services import user_service

logger = logging.getLogger(__name__)


async def ensure_default_admin() -> None:
    """Create the configured admin user if one does not yet exist."""

    settings = get_settings()
    if not settings.bootstrap_admin_email or not settings.bootstrap_admin_password:
        return
    sessionmaker = get_sessionmaker(settings.database_url)
    async with sessionmaker() as session:
        existing = await user_service.get_user_by_email(
            session, settings.bootstrap_admin_email
        )
        if existing is not None:
            return
        await user_service.create_user(
            session,
            email=settings.bootstrap_admin_email,
            password=settings.bootstrap_admin_password,
            first_name="PlaySpot",
            last_name="Admin",
            role=UserRole.ADMIN,
        )
        logger.info("Bootstrap admin %s created", settings.bootstrap_admin_email)
