"""
Orca Payroll - Test Configuration

Pytest fixtures and configuration.

The dashboard is exercised through an in-memory ReportingReader and a
pinned clock, so none of these fixtures need PostgreSQL or Redis.
"""

import os

os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("SETTINGS_CACHE_ENABLED", "false")

from datetime import date, datetime
from typing import AsyncGenerator
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from app.database import get_async_session
from app.dependencies import get_clock, get_current_active_user, get_reporting_reader
from app.models.user import User, UserRole
from main import app
from tests.fixtures.reporting import TODAY, FakeReportingReader, make_mock_session


# ===========================================
# CLOCK & DATA FIXTURES
# ===========================================

@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def clock():
    return lambda: TODAY


@pytest.fixture
def fake_reader() -> FakeReportingReader:
    return FakeReportingReader()


@pytest.fixture
def mock_session() -> MagicMock:
    return make_mock_session()


# ===========================================
# USER FIXTURES
# ===========================================

def _user(role: UserRole, email: str) -> User:
    return User(
        id=uuid4(),
        email=email,
        hashed_password="not-used",
        full_name=f"{role.value.title()} User",
        role=role,
        is_active=True,
        created_at=datetime(2026, 1, 1),
        updated_at=datetime(2026, 1, 1),
    )


@pytest.fixture
def admin_user() -> User:
    return _user(UserRole.ADMIN, "admin@example.com")


@pytest.fixture
def finance_user() -> User:
    return _user(UserRole.FINANCE, "finance@example.com")


@pytest.fixture
def viewer_user() -> User:
    return _user(UserRole.VIEWER, "viewer@example.com")


@pytest.fixture
def current_user(admin_user: User) -> User:
    """The user every request is authenticated as. Override per test."""
    return admin_user


# ===========================================
# API CLIENT
# ===========================================

@pytest_asyncio.fixture
async def client(
    current_user: User,
    fake_reader: FakeReportingReader,
    mock_session: MagicMock,
    clock,
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with auth, clock, reader and session overrides."""

    async def override_get_session():
        yield mock_session

    app.dependency_overrides[get_async_session] = override_get_session
    app.dependency_overrides[get_current_active_user] = lambda: current_user
    app.dependency_overrides[get_reporting_reader] = lambda: fake_reader
    app.dependency_overrides[get_clock] = lambda: clock

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
