"""
Orca Payroll - Services Package

Business logic services.
"""

from app.services.auth_service import AuthService
from app.services.employee_service import EmployeeService
from app.services.salary_service import SalaryService
from app.services.expense_service import ExpenseService
from app.services.currency_service import CurrencyService
from app.services.department_service import DepartmentService
from app.services.settings_service import SettingsService
from app.services.cache_service import CacheService, get_cache_service
from app.services.reporting_reader import ReportingReader, SqlReportingReader
from app.services.dashboard_service import DashboardService
from app.services.salary_analysis_service import SalaryAnalysisService

__all__ = [
    "AuthService",
    "EmployeeService",
    "SalaryService",
    "ExpenseService",
    "CurrencyService",
    "DepartmentService",
    "SettingsService",
    "CacheService",
    "get_cache_service",
    "ReportingReader",
    "SqlReportingReader",
    "DashboardService",
    "SalaryAnalysisService",
]
