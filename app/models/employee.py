"""
Orca Payroll - Employee Model

Employees are never hard-deleted; deactivation flips status to inactive.
"""

import uuid
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Date, ForeignKey, Numeric, String, Text, Enum as SQLEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel, enum_values

if TYPE_CHECKING:
    from app.models.currency import Currency, Department
    from app.models.salary import SalaryRecord


class EmployeeStatus(str, Enum):
    """Employment status."""
    ACTIVE = "active"
    INACTIVE = "inactive"


class Employee(BaseModel):
    """Employee with employment attributes and salary currency."""

    __tablename__ = "employees"

    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    employee_code: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
        index=True,
        comment="Human-facing employee ID (e.g., EMP-001)",
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    role: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    department_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("departments.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    currency_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("currencies.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    monthly_salary: Mapped[Decimal] = mapped_column(
        Numeric(precision=15, scale=2),
        nullable=False,
    )
    joining_date: Mapped[date] = mapped_column(Date, nullable=False)
    payment_method_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    country: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    city: Mapped[str] = mapped_column(String(100), nullable=False, default="")

    status: Mapped[EmployeeStatus] = mapped_column(
        SQLEnum(EmployeeStatus, name="employeestatus", values_callable=enum_values),
        default=EmployeeStatus.ACTIVE,
        nullable=False,
        index=True,
    )

    # Relationships
    department: Mapped[Optional["Department"]] = relationship("Department", lazy="selectin")
    currency: Mapped[Optional["Currency"]] = relationship("Currency", lazy="selectin")
    salary_records: Mapped[List["SalaryRecord"]] = relationship(
        "SalaryRecord",
        back_populates="employee",
        cascade="all, delete-orphan",
    )

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE
