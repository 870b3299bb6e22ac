"""
Orca Payroll - Employee Schemas

Pydantic schemas for employee management.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.models.employee import EmployeeStatus
from app.schemas.currency import CurrencyResponse, DepartmentResponse


# ===========================================
# REQUEST SCHEMAS
# ===========================================

class EmployeeCreateRequest(BaseModel):
    """Schema for hiring an employee."""
    full_name: str = Field(..., min_length=1, max_length=255)
    employee_code: Optional[str] = Field(None, max_length=50, description="Human-facing ID, e.g. EMP-001")
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=30)
    role: Optional[str] = Field(None, max_length=100)

    department_id: Optional[UUID] = None
    currency_id: Optional[UUID] = None

    monthly_salary: Decimal = Field(..., ge=0, max_digits=15, decimal_places=2)
    joining_date: date
    payment_method_notes: Optional[str] = None

    country: str = Field("", max_length=100)
    city: str = Field("", max_length=100)
    status: EmployeeStatus = EmployeeStatus.ACTIVE

    @field_validator("employee_code", mode="before")
    @classmethod
    def blank_code_is_none(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v


class EmployeeUpdateRequest(BaseModel):
    """Schema for updating an employee. Only provided fields change."""
    full_name: Optional[str] = Field(None, min_length=1, max_length=255)
    employee_code: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=30)
    role: Optional[str] = Field(None, max_length=100)

    department_id: Optional[UUID] = None
    currency_id: Optional[UUID] = None

    monthly_salary: Optional[Decimal] = Field(None, ge=0, max_digits=15, decimal_places=2)
    joining_date: Optional[date] = None
    payment_method_notes: Optional[str] = None

    country: Optional[str] = Field(None, max_length=100)
    city: Optional[str] = Field(None, max_length=100)
    status: Optional[EmployeeStatus] = None

    @field_validator("employee_code", mode="before")
    @classmethod
    def blank_code_is_none(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v


# ===========================================
# RESPONSE SCHEMAS
# ===========================================

class EmployeeResponse(BaseModel):
    """Schema for employee response."""
    id: UUID
    full_name: str
    employee_code: Optional[str] = None
    email: str
    phone: Optional[str] = None
    role: Optional[str] = None

    department_id: Optional[UUID] = None
    department: Optional[DepartmentResponse] = None
    currency_id: Optional[UUID] = None
    currency: Optional[CurrencyResponse] = None

    monthly_salary: Decimal
    joining_date: date
    payment_method_notes: Optional[str] = None
    country: str
    city: str
    status: EmployeeStatus

    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class EmployeeListResponse(BaseModel):
    """Schema for employee list response."""
    employees: List[EmployeeResponse]
    total: int
