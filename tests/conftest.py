"""Pytest configuration and fixtures for docmanager tests."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from docmanager.config.settings import DocManagerSettings
from docmanager.features.users.services.password_hasher import PasswordHasher

from tests.fakes import (
    FakeClock,
    InMemorySessionStore,
    InMemoryStore,
    RecordingMailer,
    SequentialTokens,
    build_container,
    make_user,
)


@pytest.fixture
def settings():
    """Settings isolated from the developer's environment file."""
    return DocManagerSettings(_env_file=None, app_base_url="https://docs.example.test")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def tokens():
    return SequentialTokens()


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def session_store():
    return InMemorySessionStore()


@pytest.fixture
def hasher():
    """Cheap bcrypt cost so hashing stays fast in tests."""
    return PasswordHasher(rounds=4)


@pytest.fixture
def container(store, clock, mailer, session_store, settings, tokens):
    return build_container(
        store,
        clock=clock,
        mailer=mailer,
        session_store=session_store,
        settings=settings,
        token_factory=tokens,
    )


@pytest.fixture
def admin():
    return make_user(1, "admin@example.com", roles=["ROLE_ADMIN"], username="admin")


@pytest.fixture
def alice():
    """Plain user relying on role defaults."""
    return make_user(2, "alice@example.com", username="alice")


@pytest.fixture
def reader():
    """User restricted to an explicit read-only list."""
    return make_user(
        3,
        "reader@example.com",
        permissions=["clients.view_list", "clients.view_details", "documents.view_list"],
    )


@pytest.fixture
def mock_connection():
    """asyncpg connection double."""
    conn = AsyncMock()
    conn.fetchrow = AsyncMock()
    conn.fetch = AsyncMock()
    conn.fetchval = AsyncMock()
    conn.execute = AsyncMock()
    return conn


@pytest.fixture
def mock_database(mock_connection):
    """DatabaseManager double whose ``connection()`` yields ``mock_connection``."""
    database = MagicMock()
    database.connection.return_value.__aenter__ = AsyncMock(return_value=mock_connection)
    database.connection.return_value.__aexit__ = AsyncMock(return_value=False)
    return database
