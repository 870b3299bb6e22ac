"""
Orca Payroll - Salary Service

Business logic for monthly salary records. There is at most one record
per employee per month; `month` is always stored as the first day.
"""

import logging
import uuid
from datetime import date
from decimal import Decimal
from typing import Any, List, Optional, Union

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.employee import Employee
from app.models.salary import SalaryRecord, SalaryStatus
from app.utils.error_handling import (
    DuplicateEntryException,
    EmployeeNotFoundException,
    ErrorCode,
    SalaryRecordNotFoundException,
)
from app.utils.months import YearMonth

logger = logging.getLogger(__name__)


class SalaryService:
    """Service for salary record operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_salary_records(
        self,
        month: Optional[Union[str, date, YearMonth]] = None,
        employee_id: Optional[uuid.UUID] = None,
        status: Optional[SalaryStatus] = None,
    ) -> List[SalaryRecord]:
        """List salary records, newest month first. `month` is "YYYY-MM"."""
        query = select(SalaryRecord)

        if month:
            ym = YearMonth.parse(month)
            query = query.where(SalaryRecord.month >= ym.first_day)
            query = query.where(SalaryRecord.month < ym.next().first_day)
        if employee_id:
            query = query.where(SalaryRecord.employee_id == employee_id)
        if status:
            query = query.where(SalaryRecord.status == status)

        query = query.order_by(SalaryRecord.month.desc(), SalaryRecord.created_at.desc())

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_salary_records_for_year(self, year: int) -> List[SalaryRecord]:
        """All records for a calendar year, oldest month first."""
        query = (
            select(SalaryRecord)
            .where(SalaryRecord.month >= date(year, 1, 1))
            .where(SalaryRecord.month < date(year + 1, 1, 1))
            .order_by(SalaryRecord.month)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_salary_record_by_id(self, record_id: uuid.UUID) -> Optional[SalaryRecord]:
        result = await self.db.execute(
            select(SalaryRecord).where(SalaryRecord.id == record_id)
        )
        return result.scalar_one_or_none()

    async def get_salary_record_or_404(self, record_id: uuid.UUID) -> SalaryRecord:
        record = await self.get_salary_record_by_id(record_id)
        if record is None:
            raise SalaryRecordNotFoundException(record_id)
        return record

    async def _existing_for_month(self, employee_id: uuid.UUID, month: date) -> Optional[SalaryRecord]:
        result = await self.db.execute(
            select(SalaryRecord)
            .where(SalaryRecord.employee_id == employee_id)
            .where(SalaryRecord.month == month)
        )
        return result.scalar_one_or_none()

    async def create_salary_record(
        self,
        employee_id: uuid.UUID,
        month: Union[str, date, YearMonth],
        base_salary: Decimal,
        deductions: Decimal = Decimal("0"),
        bonus: Decimal = Decimal("0"),
        status: SalaryStatus = SalaryStatus.PENDING,
        **kwargs: Any,
    ) -> SalaryRecord:
        """
        Create a salary record.

        Raises:
            EmployeeNotFoundException: unknown employee
            DuplicateEntryException: the employee already has a record for that month
        """
        month_start = YearMonth.parse(month).first_day

        employee = await self.db.get(Employee, employee_id)
        if employee is None:
            raise EmployeeNotFoundException(employee_id)

        if await self._existing_for_month(employee_id, month_start) is not None:
            raise self._duplicate(month_start)

        record = SalaryRecord(
            employee_id=employee_id,
            month=month_start,
            base_salary=base_salary,
            deductions=deductions,
            bonus=bonus,
            status=status,
            **kwargs,
        )
        self.db.add(record)
        try:
            await self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent insert for the same month
            await self.db.rollback()
            raise self._duplicate(month_start)

        await self.db.refresh(record)
        logger.info(f"Created salary record {record.id} for employee {employee_id} ({month_start:%Y-%m})")
        return record

    def _duplicate(self, month_start: date) -> DuplicateEntryException:
        return DuplicateEntryException(
            resource_type="SalaryRecord",
            field="month",
            value=YearMonth.from_date(month_start).key,
            code=ErrorCode.DUPLICATE_SALARY_MONTH,
        )

    async def update_salary_record(self, record: SalaryRecord, **kwargs: Any) -> SalaryRecord:
        """Update amounts, status or payment details. net_salary is recomputed by the database."""
        for key, value in kwargs.items():
            if key in ("employee_id", "month", "net_salary"):
                continue
            if hasattr(record, key):
                setattr(record, key, value)

        await self.db.commit()
        await self.db.refresh(record)
        return record
