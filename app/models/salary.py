"""
Orca Payroll - Salary Record Model

One row per (employee, calendar month). `month` always holds the first day
of the month. net_salary is a database-generated column.
"""

import uuid
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    Computed, Date, ForeignKey, Numeric, String, Text, UniqueConstraint,
    Enum as SQLEnum,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel, enum_values

if TYPE_CHECKING:
    from app.models.employee import Employee


class SalaryStatus(str, Enum):
    """Payment status of a monthly salary record."""
    PENDING = "pending"
    PAID = "paid"
    DEFERRED = "deferred"


class SalaryRecord(BaseModel):
    """Monthly salary record for an employee."""

    __tablename__ = "salary_records"
    __table_args__ = (
        UniqueConstraint("employee_id", "month", name="uq_salary_records_employee_month"),
    )

    employee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    month: Mapped[date] = mapped_column(Date, nullable=False, index=True)

    base_salary: Mapped[Decimal] = mapped_column(Numeric(precision=15, scale=2), nullable=False)
    deductions: Mapped[Decimal] = mapped_column(
        Numeric(precision=15, scale=2), nullable=False, default=Decimal("0")
    )
    bonus: Mapped[Decimal] = mapped_column(
        Numeric(precision=15, scale=2), nullable=False, default=Decimal("0")
    )
    net_salary: Mapped[Decimal] = mapped_column(
        Numeric(precision=15, scale=2),
        Computed("base_salary + bonus - deductions", persisted=True),
    )

    status: Mapped[SalaryStatus] = mapped_column(
        SQLEnum(SalaryStatus, name="salarystatus", values_callable=enum_values),
        default=SalaryStatus.PENDING,
        nullable=False,
        index=True,
    )
    payment_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    comments: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    receipt_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    employee: Mapped["Employee"] = relationship(
        "Employee", back_populates="salary_records", lazy="selectin"
    )
