"""
Orca Payroll - Expense Schemas

Pydantic schemas for fixed assets and day-to-day office expenses.
"""

import datetime as dt
from decimal import Decimal
from typing import Optional, List
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.expense import (
    AssetStatus,
    AssetType,
    ExpenseCategory,
    ExpensePaymentStatus,
)


# ===========================================
# FIXED ASSETS
# ===========================================

class FixedAssetCreateRequest(BaseModel):
    """Schema for registering a fixed asset."""
    asset_name: str = Field(..., min_length=1, max_length=255)
    asset_type: AssetType
    purchase_date: dt.date
    cost: Decimal = Field(..., ge=0, max_digits=15, decimal_places=2)
    currency_id: Optional[UUID] = None
    assigned_employee_id: Optional[UUID] = None
    depreciation_rate: Optional[Decimal] = Field(None, ge=0, le=100, description="Annual rate in percent")
    status: AssetStatus = AssetStatus.ACTIVE


class FixedAssetUpdateRequest(BaseModel):
    """Schema for updating a fixed asset."""
    asset_name: Optional[str] = Field(None, min_length=1, max_length=255)
    asset_type: Optional[AssetType] = None
    purchase_date: Optional[dt.date] = None
    cost: Optional[Decimal] = Field(None, ge=0, max_digits=15, decimal_places=2)
    currency_id: Optional[UUID] = None
    assigned_employee_id: Optional[UUID] = None
    depreciation_rate: Optional[Decimal] = Field(None, ge=0, le=100)
    status: Optional[AssetStatus] = None


class FixedAssetResponse(BaseModel):
    id: UUID
    asset_name: str
    asset_type: AssetType
    purchase_date: dt.date
    cost: Decimal
    currency_id: Optional[UUID] = None
    assigned_employee_id: Optional[UUID] = None
    depreciation_rate: Optional[Decimal] = None
    status: AssetStatus
    created_at: dt.datetime
    updated_at: dt.datetime

    class Config:
        from_attributes = True


class FixedAssetListResponse(BaseModel):
    assets: List[FixedAssetResponse]
    total: int


# ===========================================
# DAY-TO-DAY EXPENSES
# ===========================================

class DayToDayExpenseCreateRequest(BaseModel):
    """Schema for recording a day-to-day expense."""
    category: ExpenseCategory
    vendor: str = Field(..., min_length=1, max_length=255)
    date: dt.date
    amount: Decimal = Field(..., ge=0, max_digits=15, decimal_places=2)
    currency_id: Optional[UUID] = None
    payment_status: ExpensePaymentStatus = ExpensePaymentStatus.PENDING
    receipt_url: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = None


class DayToDayExpenseUpdateRequest(BaseModel):
    """Schema for updating a day-to-day expense."""
    category: Optional[ExpenseCategory] = None
    vendor: Optional[str] = Field(None, min_length=1, max_length=255)
    date: Optional[dt.date] = None
    amount: Optional[Decimal] = Field(None, ge=0, max_digits=15, decimal_places=2)
    currency_id: Optional[UUID] = None
    payment_status: Optional[ExpensePaymentStatus] = None
    receipt_url: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = None


class DayToDayExpenseResponse(BaseModel):
    id: UUID
    category: ExpenseCategory
    vendor: str
    date: dt.date
    amount: Decimal
    currency_id: Optional[UUID] = None
    payment_status: ExpensePaymentStatus
    receipt_url: Optional[str] = None
    notes: Optional[str] = None
    created_at: dt.datetime
    updated_at: dt.datetime

    class Config:
        from_attributes = True


class DayToDayExpenseListResponse(BaseModel):
    expenses: List[DayToDayExpenseResponse]
    total: int
