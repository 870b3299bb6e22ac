"""
Orca Payroll - Authentication Router

API endpoints for user authentication.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_current_active_user
from app.models.user import User
from app.schemas.auth import (
    UserRegisterRequest,
    UserLoginRequest,
    TokenResponse,
    UserResponse,
    UserWithTokenResponse,
    CurrentUserResponse,
)
from app.services.auth_service import AuthService
from app.utils.permissions import get_permissions


router = APIRouter()


@router.post(
    "/register",
    response_model=UserWithTokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description="Register a dashboard user. The first user becomes admin, later users start as viewers.",
)
async def register(
    request: UserRegisterRequest,
    db: AsyncSession = Depends(get_async_session),
):
    """Register a new user and return an access token."""
    auth_service = AuthService(db)
    user = await auth_service.register_user(
        email=request.email,
        password=request.password,
        full_name=request.full_name,
    )
    tokens = auth_service.create_tokens(user)

    return UserWithTokenResponse(
        user=UserResponse.model_validate(user),
        tokens=TokenResponse(**tokens),
    )


@router.post(
    "/login",
    response_model=UserWithTokenResponse,
    summary="Login user",
    description="Authenticate user with email and password.",
)
async def login(
    request: UserLoginRequest,
    db: AsyncSession = Depends(get_async_session),
):
    """Login with email and password."""
    auth_service = AuthService(db)

    user = await auth_service.authenticate_user(
        email=request.email,
        password=request.password,
    )

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is deactivated",
        )

    tokens = auth_service.create_tokens(user)

    return UserWithTokenResponse(
        user=UserResponse.model_validate(user),
        tokens=TokenResponse(**tokens),
    )


@router.get(
    "/me",
    response_model=CurrentUserResponse,
    summary="Get current user",
)
async def get_me(
    current_user: User = Depends(get_current_active_user),
):
    """Get the current user and the permissions their role grants."""
    return CurrentUserResponse(
        user=UserResponse.model_validate(current_user),
        permissions=sorted(p.value for p in get_permissions(current_user.role)),
    )
