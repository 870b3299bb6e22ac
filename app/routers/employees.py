"""
Orca Payroll - Employees Router

API endpoints for employee management.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import require_permission
from app.models.employee import EmployeeStatus
from app.models.user import User
from app.schemas.employee import (
    EmployeeCreateRequest,
    EmployeeUpdateRequest,
    EmployeeResponse,
    EmployeeListResponse,
)
from app.services.employee_service import EmployeeService
from app.utils.permissions import Permission


router = APIRouter()

can_view = require_permission([Permission.VIEW_PAYROLL])
can_manage = require_permission([Permission.MANAGE_EMPLOYEES])


@router.get(
    "",
    response_model=EmployeeListResponse,
    summary="List employees",
)
async def list_employees(
    department_id: Optional[UUID] = Query(None),
    status_filter: Optional[EmployeeStatus] = Query(None, alias="status"),
    country: Optional[str] = Query(None),
    city: Optional[str] = Query(None),
    currency_id: Optional[UUID] = Query(None),
    current_user: User = Depends(can_view),
    db: AsyncSession = Depends(get_async_session),
):
    """List employees, newest first."""
    employees = await EmployeeService(db).get_employees(
        department_id=department_id,
        status=status_filter,
        country=country,
        city=city,
        currency_id=currency_id,
    )
    return EmployeeListResponse(
        employees=[EmployeeResponse.model_validate(e) for e in employees],
        total=len(employees),
    )


@router.get(
    "/{employee_id}",
    response_model=EmployeeResponse,
    summary="Get employee",
)
async def get_employee(
    employee_id: UUID,
    current_user: User = Depends(can_view),
    db: AsyncSession = Depends(get_async_session),
):
    return await EmployeeService(db).get_employee_or_404(employee_id)


@router.post(
    "",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create employee",
    description="Create an employee. A pending salary record is opened for the joining month.",
)
async def create_employee(
    request: EmployeeCreateRequest,
    current_user: User = Depends(can_manage),
    db: AsyncSession = Depends(get_async_session),
):
    return await EmployeeService(db).create_employee(**request.model_dump())


@router.patch(
    "/{employee_id}",
    response_model=EmployeeResponse,
    summary="Update employee",
)
async def update_employee(
    employee_id: UUID,
    request: EmployeeUpdateRequest,
    current_user: User = Depends(can_manage),
    db: AsyncSession = Depends(get_async_session),
):
    service = EmployeeService(db)
    employee = await service.get_employee_or_404(employee_id)
    return await service.update_employee(employee, **request.model_dump(exclude_unset=True))


@router.post(
    "/{employee_id}/deactivate",
    response_model=EmployeeResponse,
    summary="Deactivate employee",
    description="Soft delete: the employee is marked inactive and salary history is kept.",
)
async def deactivate_employee(
    employee_id: UUID,
    current_user: User = Depends(can_manage),
    db: AsyncSession = Depends(get_async_session),
):
    service = EmployeeService(db)
    employee = await service.get_employee_or_404(employee_id)
    return await service.deactivate_employee(employee)


@router.post(
    "/{employee_id}/activate",
    response_model=EmployeeResponse,
    summary="Activate employee",
)
async def activate_employee(
    employee_id: UUID,
    current_user: User = Depends(can_manage),
    db: AsyncSession = Depends(get_async_session),
):
    service = EmployeeService(db)
    employee = await service.get_employee_or_404(employee_id)
    return await service.activate_employee(employee)
