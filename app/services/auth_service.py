"""
Orca Payroll - Authentication Service

Business logic for user authentication and registration.
"""

import logging
import uuid
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User, UserRole
from app.utils.error_handling import DuplicateEntryException
from app.utils.security import (
    get_password_hash,
    verify_password,
    create_access_token,
)
from app.config import settings

logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email address."""
        result = await self.db.execute(
            select(User).where(User.email == email.lower())
        )
        return result.scalar_one_or_none()

    async def get_user_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        """Get user by ID."""
        result = await self.db.execute(
            select(User).where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    async def authenticate_user(
        self, email: str, password: str
    ) -> Optional[User]:
        """
        Authenticate user with email and password.

        Returns:
            User if authentication successful, None otherwise
        """
        user = await self.get_user_by_email(email)

        if not user:
            return None

        if not verify_password(password, user.hashed_password):
            return None

        return user

    async def register_user(
        self,
        email: str,
        password: str,
        full_name: Optional[str] = None,
    ) -> User:
        """
        Register a dashboard user.

        The first user becomes admin; everyone after that starts as viewer
        until an admin promotes them.
        """
        if await self.get_user_by_email(email):
            raise DuplicateEntryException("User", "email", email.lower())

        user_count = await self.db.scalar(select(func.count()).select_from(User))
        role = UserRole.ADMIN if not user_count else UserRole.VIEWER

        user = User(
            email=email.lower(),
            hashed_password=get_password_hash(password),
            full_name=full_name,
            role=role,
            is_active=True,
        )
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)

        logger.info(f"Registered user {user.id} with role {role.value}")
        return user

    def create_tokens(self, user: User) -> dict:
        """
        Create an access token for user.

        Returns:
            Dictionary with access_token, token_type, expires_in
        """
        token_data = {
            "sub": str(user.id),
            "email": user.email,
            "role": user.role.value if user.role else None,
        }

        return {
            "access_token": create_access_token(token_data),
            "token_type": "bearer",
            "expires_in": settings.access_token_expire_minutes * 60,
        }
