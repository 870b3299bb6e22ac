"""
Orca Payroll - Expense Models

Office spending in two shapes:
- FixedAsset: capitalized equipment, optionally assigned to an employee
- DayToDayExpense: dated operating costs (rent, internet, pantry, ...)
"""

import uuid
import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Date, ForeignKey, Numeric, String, Text, Enum as SQLEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel, enum_values

if TYPE_CHECKING:
    from app.models.currency import Currency
    from app.models.employee import Employee


class AssetType(str, Enum):
    """Fixed asset types."""
    LAPTOP = "laptop"
    SERVER = "server"
    PHONE = "phone"
    FURNITURE = "furniture"


class AssetStatus(str, Enum):
    """Status of fixed asset."""
    ACTIVE = "active"
    RETIRED = "retired"


class ExpenseCategory(str, Enum):
    """Day-to-day expense categories."""
    UTILITIES = "utilities"
    INTERNET = "internet"
    RENT = "rent"
    SOFTWARE = "software"
    TRAVEL = "travel"
    PANTRY = "pantry"
    MARKETING = "marketing"
    OTHER = "other"


class ExpensePaymentStatus(str, Enum):
    """Payment status of a day-to-day expense."""
    PENDING = "pending"
    PAID = "paid"


class FixedAsset(BaseModel):
    """Capitalized asset. Active assets count toward the dashboard total."""

    __tablename__ = "fixed_assets"

    asset_name: Mapped[str] = mapped_column(String(255), nullable=False)
    asset_type: Mapped[AssetType] = mapped_column(
        SQLEnum(AssetType, name="assettype", values_callable=enum_values),
        nullable=False,
        index=True,
    )
    purchase_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    cost: Mapped[Decimal] = mapped_column(Numeric(precision=15, scale=2), nullable=False)
    currency_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("currencies.id", ondelete="SET NULL"),
        nullable=True,
    )
    assigned_employee_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("employees.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    depreciation_rate: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=5, scale=2),
        nullable=True,
        comment="Annual depreciation rate (%)",
    )
    status: Mapped[AssetStatus] = mapped_column(
        SQLEnum(AssetStatus, name="assetstatus", values_callable=enum_values),
        default=AssetStatus.ACTIVE,
        nullable=False,
        index=True,
    )

    currency: Mapped[Optional["Currency"]] = relationship("Currency", lazy="selectin")
    assigned_employee: Mapped[Optional["Employee"]] = relationship("Employee", lazy="selectin")


class DayToDayExpense(BaseModel):
    """Dated operating expense."""

    __tablename__ = "day_to_day_expenses"

    category: Mapped[ExpenseCategory] = mapped_column(
        SQLEnum(ExpenseCategory, name="expensecategory", values_callable=enum_values),
        nullable=False,
        index=True,
    )
    vendor: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(precision=15, scale=2), nullable=False)
    currency_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("currencies.id", ondelete="SET NULL"),
        nullable=True,
    )
    payment_status: Mapped[ExpensePaymentStatus] = mapped_column(
        SQLEnum(ExpensePaymentStatus, name="expensepaymentstatus", values_callable=enum_values),
        default=ExpensePaymentStatus.PENDING,
        nullable=False,
    )
    receipt_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    currency: Mapped[Optional["Currency"]] = relationship("Currency", lazy="selectin")
