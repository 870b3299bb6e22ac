"""
Orca Payroll - Salary Analysis Tests

Tests for the per-employee and company-wide salary analysis:
- Analysis window (year to date for the current year)
- Totals, averages and status counts
- Highest / lowest month selection
"""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from app.models.salary import SalaryStatus
from app.services.salary_analysis_service import (
    MonthAmount,
    SalaryAnalysisService,
    StatusCounts,
    pick_extremes,
)
from app.utils.error_handling import DataLoadException
from app.utils.months import YearMonth
from tests.fixtures.reporting import TODAY, FakeReportingReader, salary_row


USD = uuid4()
EUR = uuid4()


def make_service(reader):
    return SalaryAnalysisService(reader, clock=lambda: TODAY)


class TestAnalysisWindow:
    """Tests for SalaryAnalysisService.analysis_window."""

    def test_current_year_stops_at_current_month(self):
        year, start, end = make_service(FakeReportingReader()).analysis_window()
        assert year == 2026
        assert start == YearMonth(2026, 1)
        assert end == YearMonth(2026, 3)

    def test_past_year_is_full_year(self):
        year, start, end = make_service(FakeReportingReader()).analysis_window(2025)
        assert (year, start, end) == (2025, YearMonth(2025, 1), YearMonth(2025, 12))

    @pytest.mark.asyncio
    async def test_reader_range_is_half_open(self):
        reader = FakeReportingReader()
        await make_service(reader).get_analysis()
        assert reader.salary_ranges == [(date(2026, 1, 1), date(2026, 4, 1))]


class TestSalaryAnalysis:
    """Tests for SalaryAnalysisService.get_analysis."""

    @pytest.mark.asyncio
    async def test_no_records(self):
        analysis = await make_service(FakeReportingReader()).get_analysis()

        assert analysis.employees == []
        assert analysis.total_payroll == Decimal("0")
        assert analysis.unique_employees == 0
        assert analysis.average_per_employee == Decimal("0")
        assert analysis.highest_month is None
        assert analysis.lowest_month is None
        assert len(analysis.month_totals) == 12
        assert all(m.total == Decimal("0") for m in analysis.month_totals)

    @pytest.mark.asyncio
    async def test_two_employees(self):
        alice, bob = uuid4(), uuid4()
        reader = FakeReportingReader(
            salaries=[
                salary_row(date(2026, 1, 1), "1000", employee_id=alice, name="Alice",
                           status=SalaryStatus.PAID),
                salary_row(date(2026, 3, 1), "1000", employee_id=alice, name="Alice",
                           status=SalaryStatus.PENDING),
                salary_row(date(2026, 1, 1), "3000", employee_id=bob, name="Bob",
                           currency_id=EUR, status=SalaryStatus.DEFERRED),
            ],
            reporting_currency_id=USD,
            rates={EUR: Decimal("1.1")},
        )
        analysis = await make_service(reader).get_analysis()

        assert analysis.unique_employees == 2
        assert analysis.total_payroll == Decimal("5300")
        assert analysis.total_payroll == sum(e.ytd for e in analysis.employees)
        assert analysis.average_per_employee == Decimal("2650.00")

        # Sorted by YTD, highest first
        assert [e.employee_name for e in analysis.employees] == ["Bob", "Alice"]
        bob_summary, alice_summary = analysis.employees
        assert bob_summary.ytd == Decimal("3300")
        assert alice_summary.ytd == Decimal("2000")
        assert len(alice_summary.monthly_breakdown) == 12
        assert alice_summary.monthly_breakdown[YearMonth(2026, 1)] == Decimal("1000")
        assert alice_summary.monthly_breakdown[YearMonth(2026, 2)] == Decimal("0")
        assert alice_summary.paid_count == 1
        assert alice_summary.pending_count == 1
        assert bob_summary.deferred_count == 1

        assert analysis.status_counts == StatusCounts(pending=1, paid=1, deferred=1)

        totals = {m.month.key: m.total for m in analysis.month_totals}
        assert totals["2026-01"] == Decimal("4300")
        assert totals["2026-03"] == Decimal("1000")
        assert analysis.highest_month.month == YearMonth(2026, 1)
        assert analysis.lowest_month.month == YearMonth(2026, 3)

    @pytest.mark.asyncio
    async def test_average_rounds_to_cents(self):
        reader = FakeReportingReader(
            salaries=[
                salary_row(date(2026, 1, 1), "100"),
                salary_row(date(2026, 1, 1), "100"),
                salary_row(date(2026, 1, 1), "100.01"),
            ],
        )
        analysis = await make_service(reader).get_analysis()
        assert analysis.average_per_employee == Decimal("100.00")

    @pytest.mark.asyncio
    async def test_past_year(self):
        reader = FakeReportingReader(
            salaries=[
                salary_row(date(2025, 6, 1), "500"),
                salary_row(date(2025, 12, 1), "700"),
                salary_row(date(2026, 1, 1), "900"),
            ],
        )
        analysis = await make_service(reader).get_analysis(2025)

        assert analysis.year == 2025
        assert analysis.window_end == YearMonth(2025, 12)
        assert analysis.total_payroll == Decimal("1200")
        assert analysis.highest_month.month == YearMonth(2025, 12)
        assert analysis.lowest_month.month == YearMonth(2025, 6)

    @pytest.mark.asyncio
    async def test_read_failure(self):
        reader = FakeReportingReader(fail_with=ConnectionResetError("gone"))
        with pytest.raises(DataLoadException):
            await make_service(reader).get_analysis()


class TestPickExtremes:
    """Tests for highest / lowest month selection."""

    def test_ties_go_to_earliest_month(self):
        months = [
            MonthAmount(YearMonth(2026, 1), Decimal("100")),
            MonthAmount(YearMonth(2026, 2), Decimal("100")),
            MonthAmount(YearMonth(2026, 3), Decimal("100")),
        ]
        highest, lowest = pick_extremes(months)
        assert highest.month == YearMonth(2026, 1)
        assert lowest.month == YearMonth(2026, 1)

    def test_zero_months_are_ignored(self):
        months = [
            MonthAmount(YearMonth(2026, 1), Decimal("0")),
            MonthAmount(YearMonth(2026, 2), Decimal("300")),
            MonthAmount(YearMonth(2026, 3), Decimal("200")),
        ]
        highest, lowest = pick_extremes(months)
        assert highest.month == YearMonth(2026, 2)
        assert lowest.month == YearMonth(2026, 3)

    def test_all_zero(self):
        months = [MonthAmount(YearMonth(2026, m), Decimal("0")) for m in range(1, 13)]
        assert pick_extremes(months) == (None, None)


class TestStatusCounts:

    def test_unknown_status_counts_as_deferred(self):
        counts = StatusCounts()
        counts.add(SalaryStatus.PENDING)
        counts.add(SalaryStatus.PAID)
        counts.add("on_hold")
        assert counts == StatusCounts(pending=1, paid=1, deferred=1)
