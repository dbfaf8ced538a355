"""Test fixtures for the PlaySpot backend."""
from __future__ import annotations

import os
from collections.abc import AsyncIterator
from datetime import UTC, datetime
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")

from app.api import deps
from app.core.config import get_settings
from app.core.security import get_password_hash
from app.db.base import Base
from app.db.session import dispose_engine, get_sessionmaker
from app.main import app
from app.models import ApprovalStatus, User, UserRole, UserStatus, Venue

# Wednesday; the surrounding week runs Sunday 2024-06-09 to Saturday 2024-06-15.
FIXED_NOW = datetime(2024, 6, 12, 15, 30, tzinfo=UTC)

PASSWORD = "Passw0rd!"


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest_asyncio.fixture()
async def reset_database(db_url: str) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    get_settings.cache_clear()
    get_settings()

    await dispose_engine(db_url)
    engine = create_async_engine(db_url, future=True)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    await engine.dispose()
    yield
    await dispose_engine(db_url)


def _user(email: str, role: UserRole, **extra: object) -> User:
    first, _, last = email.partition("@")[0].partition(".")
    return User(
        email=email,
        hashed_password=get_password_hash(PASSWORD),
        first_name=first.title(),
        last_name=(last or role.value).title(),
        role=role,
        status=UserStatus.ACTIVE,
        **extra,
    )


@pytest_asyncio.fixture()
async def app_context(
    reset_database: None, db_url: str
) -> AsyncIterator[dict[str, object]]:
    """Yield an async client, seeded users and one venue, with a fixed clock."""
    sessionmaker = get_sessionmaker(db_url)

    async with sessionmaker() as session:
        admin = _user("ada.admin@example.com", UserRole.ADMIN)
        owner = _user("omar.owner@example.com", UserRole.OWNER)
        pending_owner = _user(
            "nina.newowner@example.com",
            UserRole.OWNER,
            approval_status=ApprovalStatus.PENDING,
        )
        player = _user("paul.player@example.com", UserRole.PLAYER)
        other_player = _user("pia.player@example.com", UserRole.PLAYER)
        session.add_all([admin, owner, pending_owner, player, other_player])
        await session.flush()

        venue = Venue(
            owner_id=owner.id,
            name="Model Town Futsal",
            address="12 Canal Road",
            sport_type="futsal",
            venue_type="indoor",
            facilities=["parking", "lights"],
            price_per_hour=Decimal("2500.00"),
            availability={
                "Monday": ["09:00-10:00", "10:00-11:00"],
                "Wednesday": ["18:00-19:00", "19:00-20:00"],
                "Friday": ["20:00-21:00"],
            },
        )
        session.add(venue)
        await session.commit()

        context: dict[str, object] = {
            "admin_id": admin.id,
            "admin_email": admin.email,
            "owner_id": owner.id,
            "owner_email": owner.email,
            "pending_owner_id": pending_owner.id,
            "pending_owner_email": pending_owner.email,
            "player_id": player.id,
            "player_email": player.email,
            "other_player_email": other_player.email,
            "password": PASSWORD,
            "venue_id": venue.id,
            "now": FIXED_NOW,
        }

    app.dependency_overrides[deps.get_now] = lambda: FIXED_NOW
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            context["client"] = client
            yield context
    finally:
        app.dependency_overrides.pop(deps.get_now, None)

