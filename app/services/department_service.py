"""
Orca Payroll - Department Service
"""

import uuid
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.currency import Department
from app.utils.error_handling import DuplicateEntryException, NotFoundException


class DepartmentService:
    """Service for department operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_departments(self) -> List[Department]:
        result = await self.db.execute(select(Department).order_by(Department.name))
        return list(result.scalars().all())

    async def get_department_or_404(self, department_id: uuid.UUID) -> Department:
        department = await self.db.get(Department, department_id)
        if department is None:
            raise NotFoundException("Department", department_id)
        return department

    async def get_department_by_name(self, name: str) -> Optional[Department]:
        result = await self.db.execute(
            select(Department).where(Department.name == name)
        )
        return result.scalar_one_or_none()

    async def create_department(self, name: str) -> Department:
        name = name.strip()
        if await self.get_department_by_name(name):
            raise DuplicateEntryException("Department", "name", name)

        department = Department(name=name)
        self.db.add(department)
        await self.db.commit()
        await self.db.refresh(department)
        return department

    async def rename_department(self, department: Department, name: str) -> Department:
        name = name.strip()
        if name != department.name and await self.get_department_by_name(name):
            raise DuplicateEntryException("Department", "name", name)

        department.name = name
        await self.db.commit()
        await self.db.refresh(department)
        return department

    async def delete_department(self, department: Department) -> None:
        await self.db.delete(department)
        await self.db.commit()
