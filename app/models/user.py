"""
Orca Payroll - User Model

Dashboard users with role-based access control.

Roles:
- Admin: full access, including currencies, departments, reporting
  currency and exchange rates
- Finance: manages employees, salary records and expenses
- Viewer: read-only
"""

from enum import Enum
from typing import Optional

from sqlalchemy import Boolean, String, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel, enum_values


class UserRole(str, Enum):
    """User roles for dashboard RBAC."""
    ADMIN = "admin"
    FINANCE = "finance"
    VIEWER = "viewer"


class User(BaseModel):
    """User model for authentication and authorization."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    full_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    role: Mapped[UserRole] = mapped_column(
        SQLEnum(UserRole, name="userrole", values_callable=enum_values),
        default=UserRole.VIEWER,
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def can_edit(self) -> bool:
        """Admin and finance users may create and update records."""
        return self.role in (UserRole.ADMIN, UserRole.FINANCE)
