"""
Orca Payroll - Dashboard Service

Currency-normalized dashboard aggregates:
1. Headline stats (current month payroll, pending salaries, YTD payroll,
   current month expenses, active fixed assets)
2. Payroll per month over a rolling window
3. Payroll and day-to-day expenses per month over the same window

Every amount is converted into the reporting currency before it is summed.
Reads for one load are issued concurrently; aggregation happens in memory.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from app.models.salary import SalaryStatus
from app.services.reporting_reader import ReportingReader, gather_reads
from app.utils.error_handling import DataLoadException
from app.utils.months import Clock, YearMonth, current_month, month_buckets, rolling_window

logger = logging.getLogger(__name__)


# ===========================================
# RESULT TYPES
# ===========================================

@dataclass
class DashboardStats:
    total_monthly_payroll: Decimal
    pending_salaries_count: int
    annual_payroll_ytd: Decimal
    expenses_this_month: Decimal
    fixed_assets_total_value: Decimal
    reporting_currency_id: Optional[uuid.UUID]
    month: YearMonth


@dataclass
class MonthTotal:
    month: YearMonth
    total: Decimal


@dataclass
class MonthTrend:
    month: YearMonth
    payroll: Decimal
    expenses: Decimal


class DashboardService:
    """Service for the dashboard overview cards and charts."""

    def __init__(
        self,
        reader: ReportingReader,
        clock: Clock = date.today,
        window_months: int = 12,
    ):
        self.reader = reader
        self.clock = clock
        self.window_months = window_months

    async def _gather(self, panel: str, *reads):
        try:
            return await gather_reads(*reads)
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Failed to load {panel}: {e}")
            raise DataLoadException(panel, e) from e

    def _window(self):
        start, end = rolling_window(self.clock(), self.window_months)
        return start, end, start.first_day, end.next().first_day

    # =========================================================================
    # HEADLINE STATS
    # =========================================================================

    async def get_stats(self) -> DashboardStats:
        """
        Headline figures for the current calendar month and year to date.

        Empty tables give zeros. Fixed assets are summed over every active
        asset regardless of purchase date.
        """
        current = current_month(self.clock)
        month_start = current.first_day
        month_end = current.next().first_day
        year_start = YearMonth(current.year, 1).first_day

        context, salaries, expenses, assets = await self._gather(
            "dashboard stats",
            self.reader.get_reporting_context(),
            self.reader.list_salary_records(year_start, month_end),
            self.reader.list_day_to_day_expenses(month_start, month_end),
            self.reader.list_fixed_assets(active_only=True),
        )

        total_monthly_payroll = Decimal("0")
        annual_payroll_ytd = Decimal("0")
        pending_salaries_count = 0
        for row in salaries:
            amount = context.convert(row.net_salary, row.employee_currency_id)
            annual_payroll_ytd += amount
            if YearMonth.from_date(row.month) == current:
                total_monthly_payroll += amount
                if row.status == SalaryStatus.PENDING:
                    pending_salaries_count += 1

        expenses_this_month = sum(
            (context.convert(row.amount, row.currency_id) for row in expenses),
            Decimal("0"),
        )
        fixed_assets_total_value = sum(
            (context.convert(row.cost, row.currency_id) for row in assets),
            Decimal("0"),
        )

        context.log_skipped(
            [row.employee_currency_id for row in salaries]
            + [row.currency_id for row in expenses]
            + [row.currency_id for row in assets],
            "dashboard stats",
        )

        return DashboardStats(
            total_monthly_payroll=total_monthly_payroll,
            pending_salaries_count=pending_salaries_count,
            annual_payroll_ytd=annual_payroll_ytd,
            expenses_this_month=expenses_this_month,
            fixed_assets_total_value=fixed_assets_total_value,
            reporting_currency_id=context.reporting_currency_id,
            month=current,
        )

    # =========================================================================
    # MONTHLY CHARTS
    # =========================================================================

    async def get_payroll_by_month(self) -> List[MonthTotal]:
        """Converted net payroll per month, oldest month first, zero-filled."""
        start, end, range_start, range_end = self._window()

        context, salaries = await self._gather(
            "payroll by month",
            self.reader.get_reporting_context(),
            self.reader.list_salary_records(range_start, range_end),
        )

        buckets = month_buckets(start, end)
        for row in salaries:
            month = YearMonth.from_date(row.month)
            if month in buckets:
                buckets[month] += context.convert(row.net_salary, row.employee_currency_id)

        context.log_skipped([row.employee_currency_id for row in salaries], "payroll by month")
        return [MonthTotal(month=month, total=total) for month, total in buckets.items()]

    async def get_payroll_and_expenses_by_month(self) -> List[MonthTrend]:
        """Payroll and day-to-day expenses per month over the same window."""
        start, end, range_start, range_end = self._window()

        context, salaries, expenses = await self._gather(
            "payroll and expenses by month",
            self.reader.get_reporting_context(),
            self.reader.list_salary_records(range_start, range_end),
            self.reader.list_day_to_day_expenses(range_start, range_end),
        )

        payroll = month_buckets(start, end)
        for row in salaries:
            month = YearMonth.from_date(row.month)
            if month in payroll:
                payroll[month] += context.convert(row.net_salary, row.employee_currency_id)

        spent = month_buckets(start, end)
        for row in expenses:
            month = YearMonth.from_date(row.date)
            if month in spent:
                spent[month] += context.convert(row.amount, row.currency_id)

        context.log_skipped(
            [row.employee_currency_id for row in salaries] + [row.currency_id for row in expenses],
            "payroll and expenses by month",
        )
        return [
            MonthTrend(month=month, payroll=payroll[month], expenses=spent[month])
            for month in payroll
        ]
