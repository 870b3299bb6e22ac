"""
Orca Payroll - Authentication Service Tests
"""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from app.models.user import User, UserRole
from app.services.auth_service import AuthService
from app.utils.error_handling import DuplicateEntryException
from app.utils.security import (
    create_access_token,
    get_password_hash,
    verify_access_token,
    verify_password,
)
from tests.fixtures.reporting import make_mock_session


class TestPasswordHashing:

    def test_hash_and_verify(self):
        hashed = get_password_hash("Sup3rSecret!")
        assert hashed != "Sup3rSecret!"
        assert verify_password("Sup3rSecret!", hashed)
        assert not verify_password("wrong", hashed)


class TestTokens:

    def test_access_token_round_trip(self):
        token = create_access_token({"sub": "abc", "role": "viewer"})
        payload = verify_access_token(token)
        assert payload["sub"] == "abc"
        assert payload["type"] == "access"

    def test_garbage_token_rejected(self):
        assert verify_access_token("not.a.token") is None

    def test_create_tokens(self):
        user = User(id=uuid4(), email="a@example.com", hashed_password="x", role=UserRole.FINANCE)
        tokens = AuthService(make_mock_session()).create_tokens(user)
        assert tokens["token_type"] == "bearer"
        assert verify_access_token(tokens["access_token"])["role"] == "finance"


class TestRegisterUser:
    """The first user becomes admin; later users start as viewers."""

    @pytest.mark.asyncio
    async def test_first_user_is_admin(self):
        db = make_mock_session(None)
        db.scalar = AsyncMock(return_value=0)

        user = await AuthService(db).register_user("Owner@Example.com", "password123", "Owner")

        assert user.role == UserRole.ADMIN
        assert user.email == "owner@example.com"
        assert verify_password("password123", user.hashed_password)

    @pytest.mark.asyncio
    async def test_later_users_are_viewers(self):
        db = make_mock_session(None)
        db.scalar = AsyncMock(return_value=3)

        user = await AuthService(db).register_user("second@example.com", "password123")
        assert user.role == UserRole.VIEWER

    @pytest.mark.asyncio
    async def test_duplicate_email(self):
        existing = User(id=uuid4(), email="taken@example.com", hashed_password="x")
        db = make_mock_session(existing)

        with pytest.raises(DuplicateEntryException):
            await AuthService(db).register_user("taken@example.com", "password123")
        db.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_authenticate(self):
        user = User(
            id=uuid4(),
            email="a@example.com",
            hashed_password=get_password_hash("password123"),
        )
        service = AuthService(make_mock_session(user, user))

        assert await service.authenticate_user("a@example.com", "password123") is user
        assert await service.authenticate_user("a@example.com", "nope") is None
