"""
Orca Payroll - FastAPI Dependencies

Shared dependencies for authentication, database sessions, RBAC and the
dashboard collaborators.

This module provides dependency injection for:
1. Current user authentication
2. Permission-based access control
3. The request clock and the reporting reader used by the dashboard
"""

import uuid
from datetime import date
from typing import List, Optional

from fastapi import Depends, HTTPException, status, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import async_session_maker, get_async_session
from app.models.user import User
from app.services.cache_service import get_cache_service
from app.services.reporting_reader import ReportingReader, SqlReportingReader
from app.utils.months import Clock
from app.utils.permissions import Permission, missing_permissions
from app.utils.security import verify_access_token


# HTTP Bearer token security
security = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_async_session),
) -> User:
    """
    Get the current authenticated user from JWT token.

    Token can be provided via:
    1. Authorization: Bearer <token> header
    2. access_token cookie

    Raises:
        HTTPException: If token is invalid or user not found
    """
    token = None

    # Try Bearer header first
    if credentials:
        token = credentials.credentials
    else:
        # Fallback to cookie
        token = request.cookies.get("access_token")
        if token and token.startswith("Bearer "):
            token = token[7:]

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    payload = verify_access_token(token)

    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        user_uuid = uuid.UUID(user_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid user ID in token",
        )

    result = await db.execute(select(User).where(User.id == user_uuid))
    user = result.scalar_one_or_none()

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    return user


async def get_current_active_user(
    current_user: User = Depends(get_current_user),
) -> User:
    """Get current user and verify they are active."""
    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is deactivated",
        )
    return current_user


# ===========================================
# RBAC DEPENDENCIES
# ===========================================

def require_permission(required_permissions: List[Permission]):
    """
    Require specific permissions.

    Usage:
        @router.post("/employees")
        async def create_employee(
            user: User = Depends(require_permission([Permission.MANAGE_EMPLOYEES]))
        ):
            ...
    """
    async def permission_checker(
        current_user: User = Depends(get_current_active_user),
    ) -> User:
        missing = missing_permissions(current_user.role, required_permissions)
        if missing:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Missing permissions: {[p.value for p in missing]}",
            )
        return current_user

    return permission_checker


# ===========================================
# DASHBOARD COLLABORATORS
# ===========================================

def get_clock() -> Clock:
    """The clock used to decide the current month. Overridden in tests."""
    return date.today


def get_reporting_reader() -> ReportingReader:
    """Reader for dashboard aggregates; opens one session per read."""
    return SqlReportingReader(async_session_maker, cache=get_cache_service())
