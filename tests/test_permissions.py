"""
Orca Payroll - Permission Matrix Tests
"""

import pytest

from app.models.user import User, UserRole
from app.utils.permissions import (
    Permission,
    get_permissions,
    has_permission,
    missing_permissions,
)


class TestRolePermissions:
    """Tests for the role to permission matrix."""

    def test_admin_has_everything(self):
        assert get_permissions(UserRole.ADMIN) == set(Permission)

    @pytest.mark.parametrize("role", list(UserRole))
    def test_every_role_can_read(self, role):
        for perm in (Permission.VIEW_DASHBOARD, Permission.VIEW_PAYROLL, Permission.VIEW_EXPENSES):
            assert has_permission(role, perm)

    def test_finance_edits_records_but_not_settings(self):
        assert has_permission(UserRole.FINANCE, Permission.MANAGE_EMPLOYEES)
        assert has_permission(UserRole.FINANCE, Permission.MANAGE_SALARIES)
        assert has_permission(UserRole.FINANCE, Permission.MANAGE_EXPENSES)
        assert not has_permission(UserRole.FINANCE, Permission.MANAGE_SETTINGS)
        assert not has_permission(UserRole.FINANCE, Permission.MANAGE_REFERENCE_DATA)

    def test_viewer_is_read_only(self):
        missing = missing_permissions(
            UserRole.VIEWER,
            [Permission.VIEW_DASHBOARD, Permission.MANAGE_SALARIES, Permission.MANAGE_SETTINGS],
        )
        assert missing == [Permission.MANAGE_SALARIES, Permission.MANAGE_SETTINGS]


class TestUserRoleHelpers:

    @pytest.mark.parametrize(
        "role,is_admin,can_edit",
        [
            (UserRole.ADMIN, True, True),
            (UserRole.FINANCE, False, True),
            (UserRole.VIEWER, False, False),
        ],
    )
    def test_flags(self, role, is_admin, can_edit):
        user = User(email="u@example.com", hashed_password="x", role=role)
        assert user.is_admin is is_admin
        assert user.can_edit is can_edit
