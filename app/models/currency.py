"""
Orca Payroll - Currency & Department Models

Reference data managed by admins from the settings page.
"""

from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel


class Currency(BaseModel):
    """A currency that employees, expenses and assets can be denominated in."""

    __tablename__ = "currencies"

    code: Mapped[str] = mapped_column(String(10), nullable=False, unique=True)
    name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)


class Department(BaseModel):
    """Organizational department an employee belongs to."""

    __tablename__ = "departments"

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
