"""
Inkwell Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures:
    mock_gateway:     AsyncMock persistence gateway for service unit tests
    db_engine:        fresh in-memory SQLite database with the schema created
    session_factory:  sessions bound to db_engine
    test_client:      HTTPX AsyncClient talking to the app over ASGI, with
                      the request session pointed at db_engine
    seed_users:       helper creating users through the API
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime, timezone  # noqa: E402
from typing import AsyncGenerator  # noqa: E402
from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.database import Base, get_db_session  # noqa: E402
from app.main import app  # noqa: E402
from app.models.article import Article  # noqa: E402,F401
from app.models.user import User  # noqa: E402,F401


# ══════════════════════════════════════════════════════════════════════════
# Unit-test fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_gateway():
    """
    Provides a mock persistence gateway.

    Usage:
        mock_gateway.fetch_one.return_value = None
        with pytest.raises(NotFoundError):
            await UserService(mock_gateway).get_user("1")
    """
    gateway = AsyncMock()
    gateway.fetch_all = AsyncMock(return_value=[])
    gateway.fetch_one = AsyncMock(return_value=None)
    gateway.execute = AsyncMock()
    return gateway


@pytest.fixture
def user_row():
    return {
        "id": 1,
        "name": "Ada",
        "email": "ada@mail.com",
        "created_at": datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc),
    }


@pytest.fixture
def article_row():
    return {
        "id": 3,
        "title": "First post",
        "content": "Hello there",
        "user_id": 1,
        "created_at": datetime(2024, 1, 16, 9, 30, tzinfo=timezone.utc),
        "name": "Ada",
        "email": "ada@mail.com",
    }


# ══════════════════════════════════════════════════════════════════════════
# Database-backed fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    A fresh in-memory database per test.

    StaticPool keeps the single in-memory connection alive across sessions,
    otherwise every new connection would see an empty database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def test_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient wired to the FastAPI app.

    The request session is swapped for one bound to the test database;
    commit/rollback behaviour matches app.database.get_db_session.
    raise_app_exceptions=False lets 500 responses reach the test.
    """

    async def override_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_db_session
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def seed_users(test_client):
    """Create users through the API; returns their response bodies."""

    async def _seed(count: int):
        created = []
        for i in range(1, count + 1):
            response = await test_client.post(
                "/users", json={"name": f"User {i}", "email": f"user{i}@mail.com"}
            )
            assert response.status_code == 201, response.text
            created.append(response.json())
        return created

    return _seed
