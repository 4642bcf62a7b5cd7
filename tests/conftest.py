"""
Notes API — Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── test_settings:    Settings pointing at a fresh SQLite file + test secret
    ├── database:         Database with tables created (async tests)
    ├── app / client:     FastAPI app and TestClient (runs the lifespan)
    ├── auth_header:      Authorization header for a registered, logged-in user
    ├── login:            register-and-login helper for extra users
    ├── token_service:    TokenService sharing the app's test secret
    └── mock_db_session:  AsyncMock session for service unit tests
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-not-real"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime
from typing import Dict
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from notes_api.config import Settings
from notes_api.database import Database
from notes_api.main import create_app
from notes_api.services.token_service import TokenService

TEST_SECRET = "test-secret-key-not-real"


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings bound to a per-test SQLite file; bcrypt at its minimum cost."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}",
        jwt_secret_key=TEST_SECRET,
        bcrypt_rounds=4,
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def database(test_settings):
    """A Database with the `users` and `notes` tables created."""
    db = Database.from_settings(test_settings)
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def app(test_settings):
    return create_app(test_settings)


@pytest.fixture
def client(app):
    """
    TestClient used as a context manager so the lifespan runs: engine,
    tables and services are created on enter and disposed on exit.
    """
    with TestClient(app) as c:
        yield c


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(secret_key=TEST_SECRET)


@pytest.fixture
def token_service_at():
    """Factory: TokenService with the test secret and a clock frozen at `moment`."""
    def build(moment: datetime) -> TokenService:
        return TokenService(secret_key=TEST_SECRET, clock=lambda: moment)
    return build


def register_and_login(client: TestClient, username: str, password: str) -> str:
    """Register (tolerating an existing account) and return a bearer token."""
    r1 = client.post("/api/users/register", json={"username": username, "password": password})
    assert r1.status_code in (201, 400)

    r2 = client.post("/api/users/login", json={"username": username, "password": password})
    assert r2.status_code == 200
    return r2.json()["token"]


@pytest.fixture
def login():
    """The register_and_login helper, for tests that need several users."""
    return register_and_login


@pytest.fixture
def auth_header(client) -> Dict[str, str]:
    """Returns {'Authorization': 'Bearer <token>'} for user alice."""
    token = register_and_login(client, "alice", "secret")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = note
        result = await note_service.get_note(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session
