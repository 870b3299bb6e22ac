"""
Orca Payroll - Currency & Department Schemas

Names and codes are trimmed before validation, so blank input is rejected.
"""

from datetime import datetime
from typing import Optional, List
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


def strip_text(value):
    return value.strip() if isinstance(value, str) else value


# ===========================================
# CURRENCY
# ===========================================

class CurrencyCreateRequest(BaseModel):
    """Schema for creating a currency."""
    code: str = Field(..., min_length=1, max_length=10, description="ISO code, e.g. USD")
    name: Optional[str] = Field(None, max_length=100)

    @field_validator("code", "name", mode="before")
    @classmethod
    def trim(cls, v):
        return strip_text(v)


class CurrencyUpdateRequest(BaseModel):
    """Schema for updating a currency."""
    code: Optional[str] = Field(None, min_length=1, max_length=10)
    name: Optional[str] = Field(None, max_length=100)

    @field_validator("code", "name", mode="before")
    @classmethod
    def trim(cls, v):
        return strip_text(v)


class CurrencyResponse(BaseModel):
    id: UUID
    code: str
    name: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class CurrencyListResponse(BaseModel):
    currencies: List[CurrencyResponse]
    total: int


# ===========================================
# DEPARTMENT
# ===========================================

class DepartmentCreateRequest(BaseModel):
    """Schema for creating or renaming a department."""
    name: str = Field(..., min_length=1, max_length=100)

    @field_validator("name", mode="before")
    @classmethod
    def trim(cls, v):
        return strip_text(v)


class DepartmentResponse(BaseModel):
    id: UUID
    name: str
    created_at: datetime

    class Config:
        from_attributes = True


class DepartmentListResponse(BaseModel):
    departments: List[DepartmentResponse]
    total: int
