"""
Orca Payroll - Routers Package

FastAPI route handlers.

Routers:
- auth: Authentication (register, login, current user)
- employees: Employee management
- salary: Monthly salary records
- expenses: Fixed assets and day-to-day expenses
- settings: Currencies, departments, reporting currency and exchange rates
- dashboard: Dashboard stats, monthly charts and salary analysis
"""

from app.routers import (
    auth,
    employees,
    salary,
    expenses,
    settings,
    dashboard,
)

__all__ = [
    "auth",
    "employees",
    "salary",
    "expenses",
    "settings",
    "dashboard",
]
