"""
Orca Payroll - Salary Analysis Service

Per-employee and company-wide salary analysis for one calendar year.
For the current year the window stops at the end of the current month.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from app.models.salary import SalaryStatus
from app.services.reporting_reader import ReportingReader, gather_reads
from app.utils.error_handling import DataLoadException
from app.utils.months import Clock, YearMonth, current_month, month_buckets

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")


@dataclass
class StatusCounts:
    pending: int = 0
    paid: int = 0
    deferred: int = 0

    def add(self, status) -> None:
        if status == SalaryStatus.PENDING:
            self.pending += 1
        elif status == SalaryStatus.PAID:
            self.paid += 1
        else:
            self.deferred += 1


@dataclass
class EmployeeSalarySummary:
    employee_id: uuid.UUID
    employee_name: str
    employee_code: Optional[str]
    ytd: Decimal
    monthly_breakdown: Dict[YearMonth, Decimal]
    status_counts: StatusCounts = field(default_factory=StatusCounts)

    @property
    def pending_count(self) -> int:
        return self.status_counts.pending

    @property
    def paid_count(self) -> int:
        return self.status_counts.paid

    @property
    def deferred_count(self) -> int:
        return self.status_counts.deferred


@dataclass
class MonthAmount:
    month: YearMonth
    total: Decimal


@dataclass
class SalaryAnalysis:
    year: int
    window_start: YearMonth
    window_end: YearMonth
    reporting_currency_id: Optional[uuid.UUID]
    employees: List[EmployeeSalarySummary]
    total_payroll: Decimal
    month_totals: List[MonthAmount]
    status_counts: StatusCounts
    highest_month: Optional[MonthAmount]
    lowest_month: Optional[MonthAmount]
    average_per_employee: Decimal
    unique_employees: int


def pick_extremes(month_totals: List[MonthAmount]):
    """
    Highest and lowest month among months with a non-zero total.

    Ties go to the earliest month. Returns (None, None) when every month is zero.
    """
    highest = lowest = None
    for entry in month_totals:
        if entry.total == 0:
            continue
        if highest is None or entry.total > highest.total:
            highest = entry
        if lowest is None or entry.total < lowest.total:
            lowest = entry
    return highest, lowest


class SalaryAnalysisService:
    """Service for the salary analysis view."""

    def __init__(self, reader: ReportingReader, clock: Clock = date.today):
        self.reader = reader
        self.clock = clock

    def analysis_window(self, year: Optional[int] = None):
        current = current_month(self.clock)
        year = year or current.year
        start = YearMonth(year, 1)
        end = YearMonth(year, 12)
        if year == current.year:
            end = current
        return year, start, end

    async def get_analysis(self, year: Optional[int] = None) -> SalaryAnalysis:
        """Build the salary analysis for `year` (defaults to the current year)."""
        year, start, end = self.analysis_window(year)

        try:
            context, salaries = await gather_reads(
                self.reader.get_reporting_context(),
                self.reader.list_salary_records(start.first_day, end.next().first_day),
            )
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Failed to load salary analysis: {e}")
            raise DataLoadException("salary analysis", e) from e

        year_start, year_end = YearMonth(year, 1), YearMonth(year, 12)
        company_months = month_buckets(year_start, year_end)
        company_status = StatusCounts()
        per_employee: Dict[uuid.UUID, EmployeeSalarySummary] = {}

        for row in salaries:
            month = YearMonth.from_date(row.month)
            amount = context.convert(row.net_salary, row.employee_currency_id)

            summary = per_employee.get(row.employee_id)
            if summary is None:
                summary = EmployeeSalarySummary(
                    employee_id=row.employee_id,
                    employee_name=row.employee_name,
                    employee_code=row.employee_code,
                    ytd=Decimal("0"),
                    monthly_breakdown=month_buckets(year_start, year_end),
                )
                per_employee[row.employee_id] = summary

            summary.ytd += amount
            summary.status_counts.add(row.status)
            if month in summary.monthly_breakdown:
                summary.monthly_breakdown[month] += amount

            company_status.add(row.status)
            if month in company_months:
                company_months[month] += amount

        context.log_skipped([row.employee_currency_id for row in salaries], "salary analysis")

        employees = sorted(per_employee.values(), key=lambda s: s.ytd, reverse=True)
        total_payroll = sum((s.ytd for s in employees), Decimal("0"))
        month_totals = [MonthAmount(month=m, total=t) for m, t in company_months.items()]
        highest, lowest = pick_extremes(month_totals)

        unique_employees = len(employees)
        average = Decimal("0")
        if unique_employees:
            average = (total_payroll / unique_employees).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)

        return SalaryAnalysis(
            year=year,
            window_start=start,
            window_end=end,
            reporting_currency_id=context.reporting_currency_id,
            employees=employees,
            total_payroll=total_payroll,
            month_totals=month_totals,
            status_counts=company_status,
            highest_month=highest,
            lowest_month=lowest,
            average_per_employee=average,
            unique_employees=unique_employees,
        )
