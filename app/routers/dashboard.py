"""
Orca Payroll - Dashboard Router

Dashboard cards, monthly charts and the salary analysis view.
All amounts are converted into the reporting currency.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.config import settings
from app.dependencies import get_clock, get_reporting_reader, require_permission
from app.models.user import User
from app.schemas.dashboard import (
    DashboardStatsResponse,
    MonthTotalResponse,
    MonthTrendResponse,
    PayrollByMonthResponse,
    PayrollAndExpensesResponse,
    SalaryAnalysisResponse,
)
from app.services.dashboard_service import DashboardService
from app.services.reporting_reader import ReportingReader
from app.services.salary_analysis_service import SalaryAnalysisService
from app.utils.months import Clock
from app.utils.permissions import Permission


router = APIRouter()

can_view = require_permission([Permission.VIEW_DASHBOARD])


def get_dashboard_service(
    reader: ReportingReader = Depends(get_reporting_reader),
    clock: Clock = Depends(get_clock),
) -> DashboardService:
    return DashboardService(reader, clock=clock, window_months=settings.dashboard_window_months)


def get_salary_analysis_service(
    reader: ReportingReader = Depends(get_reporting_reader),
    clock: Clock = Depends(get_clock),
) -> SalaryAnalysisService:
    return SalaryAnalysisService(reader, clock=clock)


@router.get(
    "/stats",
    response_model=DashboardStatsResponse,
    summary="Dashboard stats",
    description="Current month payroll, pending salaries, YTD payroll, current month expenses and active fixed assets.",
)
async def get_dashboard_stats(
    current_user: User = Depends(can_view),
    service: DashboardService = Depends(get_dashboard_service),
):
    return DashboardStatsResponse.from_stats(await service.get_stats())


@router.get(
    "/payroll-by-month",
    response_model=PayrollByMonthResponse,
    summary="Payroll by month",
    description="Net payroll per month over the rolling window, oldest first, zero-filled.",
)
async def get_payroll_by_month(
    current_user: User = Depends(can_view),
    service: DashboardService = Depends(get_dashboard_service),
):
    points = await service.get_payroll_by_month()
    return PayrollByMonthResponse(
        months=[MonthTotalResponse.build(p.month, p.total) for p in points]
    )


@router.get(
    "/payroll-and-expenses",
    response_model=PayrollAndExpensesResponse,
    summary="Payroll and expenses by month",
)
async def get_payroll_and_expenses(
    current_user: User = Depends(can_view),
    service: DashboardService = Depends(get_dashboard_service),
):
    points = await service.get_payroll_and_expenses_by_month()
    return PayrollAndExpensesResponse(
        months=[
            MonthTrendResponse(
                month=p.month.key,
                label=p.month.label,
                payroll=p.payroll,
                expenses=p.expenses,
            )
            for p in points
        ]
    )


@router.get(
    "/salary-analysis",
    response_model=SalaryAnalysisResponse,
    summary="Salary analysis",
    description="Per-employee and company salary totals for a year (year to date for the current year).",
)
async def get_salary_analysis(
    year: Optional[int] = Query(None, ge=1900, le=9998),
    current_user: User = Depends(can_view),
    service: SalaryAnalysisService = Depends(get_salary_analysis_service),
):
    return SalaryAnalysisResponse.from_analysis(await service.get_analysis(year))
