"""
Orca Payroll - Salary Record Schemas

Months are accepted as "YYYY-MM" or a full date and stored as the first
day of the month.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from app.models.salary import SalaryStatus
from app.utils.error_handling import InvalidMonthException
from app.utils.months import YearMonth


def normalize_month(value) -> date:
    """Parse "YYYY-MM", "YYYY-MM-DD" or a date into the first day of that month."""
    try:
        return YearMonth.parse(value).first_day
    except InvalidMonthException as e:
        raise ValueError(e.message)


# ===========================================
# REQUEST SCHEMAS
# ===========================================

class SalaryRecordCreateRequest(BaseModel):
    """Schema for creating a monthly salary record."""
    employee_id: UUID
    month: date = Field(..., description="YYYY-MM or YYYY-MM-DD; stored as the first day of the month")
    base_salary: Decimal = Field(..., ge=0, max_digits=15, decimal_places=2)
    deductions: Decimal = Field(Decimal("0"), ge=0, max_digits=15, decimal_places=2)
    bonus: Decimal = Field(Decimal("0"), ge=0, max_digits=15, decimal_places=2)
    status: SalaryStatus = SalaryStatus.PENDING
    payment_date: Optional[date] = None
    comments: Optional[str] = None
    receipt_url: Optional[str] = Field(None, max_length=500)

    @field_validator("month", mode="before")
    @classmethod
    def first_day_of_month(cls, v):
        return normalize_month(v)


class SalaryRecordUpdateRequest(BaseModel):
    """Schema for updating a salary record. Employee and month are fixed."""
    base_salary: Optional[Decimal] = Field(None, ge=0, max_digits=15, decimal_places=2)
    deductions: Optional[Decimal] = Field(None, ge=0, max_digits=15, decimal_places=2)
    bonus: Optional[Decimal] = Field(None, ge=0, max_digits=15, decimal_places=2)
    status: Optional[SalaryStatus] = None
    payment_date: Optional[date] = None
    comments: Optional[str] = None
    receipt_url: Optional[str] = Field(None, max_length=500)


# ===========================================
# RESPONSE SCHEMAS
# ===========================================

class SalaryEmployeeSummary(BaseModel):
    id: UUID
    full_name: str
    employee_code: Optional[str] = None
    monthly_salary: Decimal
    currency_id: Optional[UUID] = None

    class Config:
        from_attributes = True


class SalaryRecordResponse(BaseModel):
    """Schema for salary record response."""
    id: UUID
    employee_id: UUID
    employee: Optional[SalaryEmployeeSummary] = None
    month: date
    base_salary: Decimal
    deductions: Decimal
    bonus: Decimal
    net_salary: Optional[Decimal] = None
    status: SalaryStatus
    payment_date: Optional[date] = None
    comments: Optional[str] = None
    receipt_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class SalaryRecordListResponse(BaseModel):
    records: List[SalaryRecordResponse]
    total: int
