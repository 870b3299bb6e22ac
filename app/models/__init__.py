"""
Orca Payroll - SQLAlchemy Models Package

This package contains all database models for the application.
"""

from app.models.base import BaseModel, TimestampMixin
from app.models.user import User, UserRole
from app.models.currency import Currency, Department
from app.models.employee import Employee, EmployeeStatus
from app.models.salary import SalaryRecord, SalaryStatus
from app.models.expense import (
    AssetStatus,
    AssetType,
    DayToDayExpense,
    ExpenseCategory,
    ExpensePaymentStatus,
    FixedAsset,
)
from app.models.app_setting import AppSetting, AppSettingKey

__all__ = [
    "BaseModel",
    "TimestampMixin",
    "User",
    "UserRole",
    "Currency",
    "Department",
    "Employee",
    "EmployeeStatus",
    "SalaryRecord",
    "SalaryStatus",
    "AssetStatus",
    "AssetType",
    "DayToDayExpense",
    "ExpenseCategory",
    "ExpensePaymentStatus",
    "FixedAsset",
    "AppSetting",
    "AppSettingKey",
]
