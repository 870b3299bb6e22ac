"""
In-memory stand-ins for the dashboard's data access.

FakeReportingReader serves rows from plain lists, and make_mock_session
builds an AsyncSession double whose execute() calls return canned results.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID, uuid4

from app.models.salary import SalaryStatus
from app.services.fx_service import ExchangeRates
from app.services.reporting_reader import (
    AssetRow,
    ExpenseRow,
    ReportingReader,
    SalaryRow,
)


TODAY = date(2026, 3, 15)


# =============================================================================
# REPORTING READER
# =============================================================================

class FakeReportingReader(ReportingReader):
    """ReportingReader over plain lists. Ranges are half-open like the SQL reader."""

    def __init__(
        self,
        salaries: Optional[List[SalaryRow]] = None,
        expenses: Optional[List[ExpenseRow]] = None,
        assets: Optional[List[AssetRow]] = None,
        reporting_currency_id: Optional[UUID] = None,
        rates: Optional[ExchangeRates] = None,
        fail_with: Optional[Exception] = None,
    ):
        self.salaries = salaries or []
        self.expenses = expenses or []
        self.assets = assets or []
        self.reporting_currency_id = reporting_currency_id
        self.rates = rates or {}
        self.fail_with = fail_with
        self.salary_ranges = []

    async def list_salary_records(self, start: date, end: date) -> List[SalaryRow]:
        if self.fail_with is not None:
            raise self.fail_with
        self.salary_ranges.append((start, end))
        return [row for row in self.salaries if start <= row.month < end]

    async def list_day_to_day_expenses(self, start: date, end: date) -> List[ExpenseRow]:
        return [row for row in self.expenses if start <= row.date < end]

    async def list_fixed_assets(self, active_only: bool = True) -> List[AssetRow]:
        return list(self.assets)

    async def get_reporting_currency_id(self) -> Optional[UUID]:
        return self.reporting_currency_id

    async def get_exchange_rates(self) -> ExchangeRates:
        return dict(self.rates)


def salary_row(
    month: date,
    net_salary,
    employee_id: Optional[UUID] = None,
    currency_id: Optional[UUID] = None,
    status: SalaryStatus = SalaryStatus.PENDING,
    name: str = "Test Employee",
    code: Optional[str] = None,
) -> SalaryRow:
    return SalaryRow(
        month=month,
        net_salary=Decimal(str(net_salary)),
        employee_currency_id=currency_id,
        status=status,
        employee_id=employee_id or uuid4(),
        employee_name=name,
        employee_code=code,
    )


# =============================================================================
# DATABASE SESSION
# =============================================================================

class MockResult:
    """Mock SQLAlchemy result."""

    def __init__(self, data=None):
        self.data = data

    def scalars(self):
        return self

    def all(self):
        if self.data is None:
            return []
        return self.data if isinstance(self.data, list) else [self.data]

    def first(self):
        items = self.all()
        return items[0] if items else None

    def scalar_one_or_none(self):
        return self.first()


def make_mock_session(*results) -> MagicMock:
    """AsyncSession stand-in; each execute() returns the next MockResult."""
    session = MagicMock()
    session.add = MagicMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.refresh = AsyncMock()
    session.flush = AsyncMock()
    session.get = AsyncMock(return_value=None)
    session.scalar = AsyncMock(return_value=0)
    session.execute = AsyncMock(side_effect=[MockResult(r) for r in results])
    return session
