"""
Shared test fixtures.

The app is exercised through ``TestClient`` without entering its lifespan,
so no database or Redis connection is opened: ``get_db`` is overridden with
a mock session and rate limiting falls back to in-memory counters.
"""

import os

os.environ.setdefault("PYTHON_ENV", "test")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from school_admin.core.database import get_db  # noqa: E402
from school_admin.core.rate_limit import reset_memory_store  # noqa: E402
from school_admin.core.security import (  # noqa: E402
    issue_long_lived_token,
    issue_short_lived_token,
)
from school_admin.main import create_app  # noqa: E402

SUPERADMIN_ID = "a1b2c3d4e5"


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Every test starts with empty rate-limit windows."""
    reset_memory_store()
    yield
    reset_memory_store()


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    db = AsyncMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.flush = AsyncMock()
    db.refresh = AsyncMock()
    db.get = AsyncMock()
    db.execute = AsyncMock()
    db.delete = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def app(mock_db):
    """Application wired to the mock session."""
    application = create_app()

    async def override_get_db():
        yield mock_db

    application.dependency_overrides[get_db] = override_get_db
    return application


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def long_token():
    return issue_long_lived_token(SUPERADMIN_ID, "root", "superadmin")


@pytest.fixture
def short_token(long_token):
    return issue_short_lived_token(long_token, "testclient")


@pytest.fixture
def auth_headers(short_token):
    """Build request headers for a bearer token and a claimed role."""

    def _headers(role: str | None = "superadmin", token: str | None = None) -> dict[str, str]:
        headers = {"Authorization": f"Bearer {token or short_token}"}
        if role is not None:
            headers["user_role"] = role
        return headers

    return _headers
