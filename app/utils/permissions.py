"""
Orca Payroll - Permissions System

Role-based permissions for dashboard users.

Permission Matrix:
==================

| Permission            | Admin | Finance | Viewer |
|-----------------------|-------|---------|--------|
| view_dashboard        | X     | X       | X      |
| view_payroll          | X     | X       | X      |
| manage_employees      | X     | X       |        |
| manage_salaries       | X     | X       |        |
| view_expenses         | X     | X       | X      |
| manage_expenses       | X     | X       |        |
| manage_reference_data | X     |         |        |
| manage_settings       | X     |         |        |
"""

from enum import Enum
from typing import List, Set

from app.models.user import UserRole


# ===========================================
# PERMISSION ENUMS
# ===========================================

class Permission(str, Enum):
    """Permissions for dashboard users."""

    VIEW_DASHBOARD = "view_dashboard"
    VIEW_PAYROLL = "view_payroll"
    MANAGE_EMPLOYEES = "manage_employees"
    MANAGE_SALARIES = "manage_salaries"
    VIEW_EXPENSES = "view_expenses"
    MANAGE_EXPENSES = "manage_expenses"
    # Currencies and departments
    MANAGE_REFERENCE_DATA = "manage_reference_data"
    # Reporting currency and exchange rates
    MANAGE_SETTINGS = "manage_settings"


# ===========================================
# ROLE PERMISSION MAPPINGS
# ===========================================

_READ_PERMISSIONS = {
    Permission.VIEW_DASHBOARD,
    Permission.VIEW_PAYROLL,
    Permission.VIEW_EXPENSES,
}

ROLE_PERMISSIONS = {
    UserRole.ADMIN: set(Permission),
    UserRole.FINANCE: _READ_PERMISSIONS | {
        Permission.MANAGE_EMPLOYEES,
        Permission.MANAGE_SALARIES,
        Permission.MANAGE_EXPENSES,
    },
    UserRole.VIEWER: set(_READ_PERMISSIONS),
}


# ===========================================
# PERMISSION HELPER FUNCTIONS
# ===========================================

def get_permissions(role: UserRole) -> Set[Permission]:
    """Get all permissions for a role."""
    return ROLE_PERMISSIONS.get(role, set())


def has_permission(role: UserRole, permission: Permission) -> bool:
    """Check if a role has a specific permission."""
    return permission in get_permissions(role)


def missing_permissions(role: UserRole, required: List[Permission]) -> List[Permission]:
    return [perm for perm in required if not has_permission(role, perm)]
