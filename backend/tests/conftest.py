"""
Inkpost Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock AsyncSession (no real DB needed)
    ├── token_service: TokenService with a test secret
    ├── test_settings: Settings pointing at a per-test SQLite file
    ├── app: FastAPI app built from test_settings, tables created
    ├── test_client: HTTPX AsyncClient talking to `app` in-process
    └── register: Coroutine that registers a user and returns (token, user)
"""

import os
import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

# Environment overrides must land before any inkpost import builds settings
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-signing-secret-not-for-production"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from inkpost.config import Settings
from inkpost.database import create_all_tables, dispose_engine
from inkpost.main import create_app
from inkpost.models.blog import Blog
from inkpost.services.token_service import TokenService

TEST_SECRET = "test-signing-secret-not-for-production"


# ══════════════════════════════════════════════════════════════════════════
# Unit-test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = user
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def token_service():
    return TokenService(secret=TEST_SECRET)


@pytest.fixture
def make_blog():
    """Factory for detached Blog instances with sensible defaults."""

    def _make(**overrides) -> Blog:
        now = datetime.now(timezone.utc)
        fields = {
            "id": uuid.uuid4(),
            "title": "Hello World",
            "slug": "hello-world",
            "content": "body",
            "cover_image_url": "",
            "tags": [],
            "author_id": str(uuid.uuid4()),
            "author_name": "Alice",
            "created_at": now,
            "updated_at": now,
        }
        fields.update(overrides)
        return Blog(**fields)

    return _make


# ══════════════════════════════════════════════════════════════════════════
# API Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings(tmp_path):
    """Isolated settings: own SQLite file, fast bcrypt, fixed secret."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'inkpost_test.db'}",
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def app(test_settings):
    application = create_app(test_settings)
    await create_all_tables(application.state.engine)
    yield application
    await dispose_engine(application.state.engine)


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight into the ASGI app (no server).

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def register(test_client):
    """Registers a user through the API; returns (token, user payload)."""

    async def _register(username: str = "alice", name: str = "Alice", password: str = "pw12345"):
        response = await test_client.post(
            "/api/auth/register",
            json={
                "name": name,
                "username": username,
                "email": f"{username}@x.com",
                "password": password,
            },
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return body["token"], body["user"]

    return _register
