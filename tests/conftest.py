"""
Spa Booking API - Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for store-failure paths
    ├── database: in-memory SQLite Database with the schema created
    ├── test_client: HTTPX AsyncClient bound to an app serving `database`
    └── booking_payload / testimonial_payload: valid request bodies
"""

import os

# Override settings BEFORE any spa_booking import reads them
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["PAYMENT_DELAY_SECONDS"] = "0.05"
os.environ["APP_ENV"] = "test"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from spa_booking.database import Database


@pytest.fixture
def mock_db_session():
    """
    A MagicMock that simulates AsyncSession behavior.

    Usage:
        mock_db_session.execute.side_effect = OperationalError(...)
        with pytest.raises(StoreError):
            await booking_service.list_bookings(mock_db_session)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def database():
    """
    A real store for end-to-end tests: SQLite in memory, one shared
    connection (StaticPool) so every session sees the same tables.
    """
    db = Database(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await db.create_schema()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def test_client(database):
    """
    HTTPX AsyncClient talking to a fresh app via ASGITransport.

    The Database is injected, so the app never builds its own from settings.
    """
    from spa_booking.main import create_app

    app = create_app(database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def booking_payload():
    return {
        "service": "Swedish Massage",
        "duration": "60 min",
        "price": "$45.00",
        "name": "Jane Doe",
        "phone": "+1 555 0100",
        "datetime": "2025-07-10T14:00:00",
    }


@pytest.fixture
def testimonial_payload():
    return {
        "reviewerName": "Jane Doe",
        "reviewerEmail": "jane@example.com",
        "reviewTitle": "Wonderful",
        "reviewText": "The hot stone massage was the best I have had.",
        "rating": 5,
        "genuineOpinion": True,
    }
