"""
Orca Payroll - Reporting Reader

Read-only data access for the dashboard and salary analysis.

Each read opens its own session from the session factory, so a dashboard
load can issue all of its reads concurrently through gather_reads. Date
ranges are half-open: start <= value < end.
"""

import asyncio
import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.models.employee import Employee
from app.models.expense import AssetStatus, DayToDayExpense, FixedAsset
from app.models.salary import SalaryRecord, SalaryStatus
from app.services.cache_service import CacheService
from app.services.fx_service import ExchangeRates, ReportingContext
from app.services.settings_service import SettingsService

logger = logging.getLogger(__name__)


# ===========================================
# ROW TYPES
# ===========================================

@dataclass(frozen=True)
class SalaryRow:
    """A salary record joined with the employee's currency."""
    month: date
    net_salary: Decimal
    employee_currency_id: Optional[uuid.UUID]
    status: SalaryStatus
    employee_id: uuid.UUID
    employee_name: str = ""
    employee_code: Optional[str] = None


@dataclass(frozen=True)
class ExpenseRow:
    date: date
    amount: Decimal
    currency_id: Optional[uuid.UUID]


@dataclass(frozen=True)
class AssetRow:
    cost: Decimal
    currency_id: Optional[uuid.UUID]


async def gather_reads(*reads):
    """
    Run reads concurrently and return their results in order.

    Every read is awaited to completion before the first failure is
    re-raised, so no query is still running on its session afterwards.
    """
    results = await asyncio.gather(*reads, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return results


# ===========================================
# READER INTERFACE
# ===========================================

class ReportingReader(ABC):
    """Source of the rows and settings the aggregations consume."""

    @abstractmethod
    async def list_salary_records(self, start: date, end: date) -> List[SalaryRow]:
        ...

    @abstractmethod
    async def list_day_to_day_expenses(self, start: date, end: date) -> List[ExpenseRow]:
        ...

    @abstractmethod
    async def list_fixed_assets(self, active_only: bool = True) -> List[AssetRow]:
        ...

    @abstractmethod
    async def get_reporting_currency_id(self) -> Optional[uuid.UUID]:
        ...

    @abstractmethod
    async def get_exchange_rates(self) -> ExchangeRates:
        ...

    async def get_reporting_context(self) -> ReportingContext:
        reporting_currency_id, rates = await gather_reads(
            self.get_reporting_currency_id(),
            self.get_exchange_rates(),
        )
        return ReportingContext(reporting_currency_id=reporting_currency_id, rates=rates)


class SqlReportingReader(ReportingReader):
    """ReportingReader backed by the application database."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        cache: Optional[CacheService] = None,
    ):
        self.session_factory = session_factory
        self.cache = cache

    async def list_salary_records(self, start: date, end: date) -> List[SalaryRow]:
        query = (
            select(
                SalaryRecord.month,
                SalaryRecord.net_salary,
                SalaryRecord.status,
                SalaryRecord.employee_id,
                Employee.currency_id,
                Employee.full_name,
                Employee.employee_code,
            )
            .join(Employee, SalaryRecord.employee_id == Employee.id)
            .where(SalaryRecord.month >= start)
            .where(SalaryRecord.month < end)
            .order_by(SalaryRecord.month)
        )
        async with self.session_factory() as session:
            result = await session.execute(query)
            rows = result.all()

        return [
            SalaryRow(
                month=row.month,
                net_salary=row.net_salary if row.net_salary is not None else Decimal("0"),
                employee_currency_id=row.currency_id,
                status=row.status,
                employee_id=row.employee_id,
                employee_name=row.full_name,
                employee_code=row.employee_code,
            )
            for row in rows
        ]

    async def list_day_to_day_expenses(self, start: date, end: date) -> List[ExpenseRow]:
        query = (
            select(DayToDayExpense.date, DayToDayExpense.amount, DayToDayExpense.currency_id)
            .where(DayToDayExpense.date >= start)
            .where(DayToDayExpense.date < end)
        )
        async with self.session_factory() as session:
            result = await session.execute(query)
            rows = result.all()
        return [ExpenseRow(date=row.date, amount=row.amount, currency_id=row.currency_id) for row in rows]

    async def list_fixed_assets(self, active_only: bool = True) -> List[AssetRow]:
        query = select(FixedAsset.cost, FixedAsset.currency_id)
        if active_only:
            query = query.where(FixedAsset.status == AssetStatus.ACTIVE)
        async with self.session_factory() as session:
            result = await session.execute(query)
            rows = result.all()
        return [AssetRow(cost=row.cost, currency_id=row.currency_id) for row in rows]

    async def get_reporting_currency_id(self) -> Optional[uuid.UUID]:
        async with self.session_factory() as session:
            return await SettingsService(session, self.cache).get_reporting_currency_id()

    async def get_exchange_rates(self) -> ExchangeRates:
        async with self.session_factory() as session:
            return await SettingsService(session, self.cache).get_exchange_rates()

    async def get_reporting_context(self) -> ReportingContext:
        async with self.session_factory() as session:
            return await SettingsService(session, self.cache).get_reporting_context()
