"""
Orca Payroll - Employee Service

Business logic for employee management. Hiring an employee also opens a
pending salary record for the joining month.
"""

import logging
import uuid
from datetime import date
from decimal import Decimal
from typing import Any, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.employee import Employee, EmployeeStatus
from app.models.salary import SalaryRecord, SalaryStatus
from app.utils.error_handling import EmployeeNotFoundException
from app.utils.months import YearMonth

logger = logging.getLogger(__name__)


class EmployeeService:
    """Service for employee operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_employees(
        self,
        department_id: Optional[uuid.UUID] = None,
        status: Optional[EmployeeStatus] = None,
        country: Optional[str] = None,
        city: Optional[str] = None,
        currency_id: Optional[uuid.UUID] = None,
    ) -> List[Employee]:
        """List employees, newest first."""
        query = select(Employee)

        if department_id:
            query = query.where(Employee.department_id == department_id)
        if status:
            query = query.where(Employee.status == status)
        if country:
            query = query.where(Employee.country == country)
        if city:
            query = query.where(Employee.city == city)
        if currency_id:
            query = query.where(Employee.currency_id == currency_id)

        query = query.order_by(Employee.created_at.desc())

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_employee_by_id(self, employee_id: uuid.UUID) -> Optional[Employee]:
        """Get employee by ID."""
        result = await self.db.execute(
            select(Employee).where(Employee.id == employee_id)
        )
        return result.scalar_one_or_none()

    async def get_employee_or_404(self, employee_id: uuid.UUID) -> Employee:
        employee = await self.get_employee_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFoundException(employee_id)
        return employee

    async def create_employee(
        self,
        full_name: str,
        email: str,
        monthly_salary: Decimal,
        joining_date: date,
        **kwargs: Any,
    ) -> Employee:
        """
        Create an employee and a pending salary record for the joining month.

        The salary record is best effort: if it cannot be written the hire
        still stands and the record can be added from the salary page.
        """
        employee = Employee(
            full_name=full_name,
            email=email,
            monthly_salary=monthly_salary,
            joining_date=joining_date,
            **kwargs,
        )
        self.db.add(employee)
        await self.db.commit()
        await self.db.refresh(employee)

        await self._open_joining_month_record(employee)
        return employee

    async def _open_joining_month_record(self, employee: Employee) -> Optional[SalaryRecord]:
        employee_id = employee.id
        record = SalaryRecord(
            employee_id=employee_id,
            month=YearMonth.from_date(employee.joining_date).first_day,
            base_salary=employee.monthly_salary,
            deductions=Decimal("0"),
            bonus=Decimal("0"),
            status=SalaryStatus.PENDING,
        )
        try:
            self.db.add(record)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.warning(
                f"Could not create joining-month salary record for employee {employee_id}: {e}"
            )
            # rollback expires the already-committed employee too
            await self.db.refresh(employee)
            return None
        return record

    async def update_employee(self, employee: Employee, **kwargs: Any) -> Employee:
        """Update an employee. Only the provided fields change."""
        for key, value in kwargs.items():
            if hasattr(employee, key):
                setattr(employee, key, value)

        await self.db.commit()
        await self.db.refresh(employee)
        return employee

    async def deactivate_employee(self, employee: Employee) -> Employee:
        """Soft delete: mark inactive. Salary history is kept."""
        return await self.update_employee(employee, status=EmployeeStatus.INACTIVE)

    async def activate_employee(self, employee: Employee) -> Employee:
        return await self.update_employee(employee, status=EmployeeStatus.ACTIVE)
