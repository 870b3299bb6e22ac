"""
Orca Payroll - Authentication Schemas

Pydantic schemas for authentication requests and responses.
"""

from datetime import datetime
from typing import Optional, List
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from app.models.user import UserRole


# ===========================================
# REQUEST SCHEMAS
# ===========================================

class UserRegisterRequest(BaseModel):
    """Schema for user registration request."""
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=100)
    full_name: Optional[str] = Field(None, max_length=255)


class UserLoginRequest(BaseModel):
    """Schema for user login request."""
    email: EmailStr
    password: str


# ===========================================
# RESPONSE SCHEMAS
# ===========================================

class TokenResponse(BaseModel):
    """Schema for token response."""
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds


class UserResponse(BaseModel):
    """Schema for user response."""
    id: UUID
    email: str
    full_name: Optional[str] = None
    role: UserRole
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class UserWithTokenResponse(BaseModel):
    """Schema for user response with token."""
    user: UserResponse
    tokens: TokenResponse


class CurrentUserResponse(BaseModel):
    """Schema for the current user with their permissions."""
    user: UserResponse
    permissions: List[str] = []


class MessageResponse(BaseModel):
    """Generic message response."""
    message: str
    success: bool = True
