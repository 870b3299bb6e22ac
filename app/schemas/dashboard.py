"""
Orca Payroll - Dashboard Schemas

Response schemas for the dashboard cards, the monthly charts and the
salary analysis view. All amounts are in the reporting currency.
"""

from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from app.utils.months import YearMonth


# ===========================================
# DASHBOARD
# ===========================================

class DashboardStatsResponse(BaseModel):
    """Headline figures for the current month and year to date."""
    month: str
    reporting_currency_id: Optional[UUID] = None
    total_monthly_payroll: Decimal
    pending_salaries_count: int
    annual_payroll_ytd: Decimal
    expenses_this_month: Decimal
    fixed_assets_total_value: Decimal

    @classmethod
    def from_stats(cls, stats) -> "DashboardStatsResponse":
        return cls(
            month=stats.month.key,
            reporting_currency_id=stats.reporting_currency_id,
            total_monthly_payroll=stats.total_monthly_payroll,
            pending_salaries_count=stats.pending_salaries_count,
            annual_payroll_ytd=stats.annual_payroll_ytd,
            expenses_this_month=stats.expenses_this_month,
            fixed_assets_total_value=stats.fixed_assets_total_value,
        )


class MonthTotalResponse(BaseModel):
    """One chart point. `month` is "YYYY-MM", `label` is e.g. "Jan 2026"."""
    month: str
    label: str
    total: Decimal

    @classmethod
    def build(cls, month: YearMonth, total: Decimal) -> "MonthTotalResponse":
        return cls(month=month.key, label=month.label, total=total)


class MonthTrendResponse(BaseModel):
    month: str
    label: str
    payroll: Decimal
    expenses: Decimal


class PayrollByMonthResponse(BaseModel):
    months: List[MonthTotalResponse]


class PayrollAndExpensesResponse(BaseModel):
    months: List[MonthTrendResponse]


# ===========================================
# SALARY ANALYSIS
# ===========================================

class StatusCountsResponse(BaseModel):
    pending: int
    paid: int
    deferred: int

    class Config:
        from_attributes = True


class EmployeeSalarySummaryResponse(BaseModel):
    employee_id: UUID
    employee_name: str
    employee_code: Optional[str] = None
    ytd: Decimal
    monthly_breakdown: List[MonthTotalResponse]
    pending_count: int
    paid_count: int
    deferred_count: int


class SalaryAnalysisResponse(BaseModel):
    year: int
    window_start: str
    window_end: str
    reporting_currency_id: Optional[UUID] = None
    total_payroll: Decimal
    average_per_employee: Decimal
    unique_employees: int
    status_counts: StatusCountsResponse
    month_totals: List[MonthTotalResponse]
    highest_month: Optional[MonthTotalResponse] = None
    lowest_month: Optional[MonthTotalResponse] = None
    employees: List[EmployeeSalarySummaryResponse]

    @classmethod
    def from_analysis(cls, analysis) -> "SalaryAnalysisResponse":
        def point(entry):
            if entry is None:
                return None
            return MonthTotalResponse.build(entry.month, entry.total)

        return cls(
            year=analysis.year,
            window_start=analysis.window_start.key,
            window_end=analysis.window_end.key,
            reporting_currency_id=analysis.reporting_currency_id,
            total_payroll=analysis.total_payroll,
            average_per_employee=analysis.average_per_employee,
            unique_employees=analysis.unique_employees,
            status_counts=StatusCountsResponse.model_validate(analysis.status_counts),
            month_totals=[point(m) for m in analysis.month_totals],
            highest_month=point(analysis.highest_month),
            lowest_month=point(analysis.lowest_month),
            employees=[
                EmployeeSalarySummaryResponse(
                    employee_id=e.employee_id,
                    employee_name=e.employee_name,
                    employee_code=e.employee_code,
                    ytd=e.ytd,
                    monthly_breakdown=[
                        MonthTotalResponse.build(month, total)
                        for month, total in e.monthly_breakdown.items()
                    ],
                    pending_count=e.pending_count,
                    paid_count=e.paid_count,
                    deferred_count=e.deferred_count,
                )
                for e in analysis.employees
            ],
        )
