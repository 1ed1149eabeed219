"""
Glee Threads Backend — Test Configuration (conftest.py)
=========================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (mocked DB, API client, tokens).
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock database session (no real DB needed)
    ├── admin_token / user_token: Signed tokens for the admin gate
    ├── admin_headers: Authorization header carrying admin_token
    └── test_client: HTTPX AsyncClient wired to the app, DB dependency overridden
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Settings are read once at import, so these must be set BEFORE any app import.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret-for-the-suite-0123456789"
os.environ["STORAGE_BACKEND"] = "local"
os.environ["STORAGE_ROOT"] = tempfile.mkdtemp(prefix="gleethreads_test_")
os.environ["BLOB_READ_WRITE_TOKEN"] = ""
os.environ["RATE_LIMIT_REQUESTS"] = "100000"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests


def make_user(role: str = "admin", user_id: int = 1):
    """A stand-in for a User row with just the attributes tokens need."""
    user = MagicMock()
    user.id = user_id
    user.email = f"{role}@gleethreads.test"
    user.name = role.title()
    user.role = role
    user.password_hash = ""
    return user


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures (created fresh for each test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_verify(mock_db_session):
            mock_db_session.execute.return_value = result
            await coupon_service.verify(mock_db_session, "SAVE10")
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def user_factory():
    """Builds stand-in User rows: user_factory(role="user", user_id=2)."""
    return make_user


@pytest.fixture
def admin_token():
    from app.services.auth_service import auth_service
    return auth_service.create_token(make_user("admin"))


@pytest.fixture
def user_token():
    from app.services.auth_service import auth_service
    return auth_service.create_token(make_user("user", user_id=2))


@pytest.fixture
def admin_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest_asyncio.fixture
async def test_client(mock_db_session):
    """
    Provides an async HTTP test client for endpoint testing.

    What:    HTTPX AsyncClient routed straight into the FastAPI app.
    How:     get_db_session is overridden with mock_db_session, so a route
             test configures the session (or patches the service) it hits.
             raise_app_exceptions=False lets the 500 handler answer instead
             of re-raising into the test.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
    """
    from app.database import get_db_session
    from app.main import app

    async def override_db_session():
        yield mock_db_session

    app.dependency_overrides[get_db_session] = override_db_session
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()
