"""
Orca Payroll - Salary Router

API endpoints for monthly salary records.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import require_permission
from app.models.salary import SalaryStatus
from app.models.user import User
from app.schemas.salary import (
    SalaryRecordCreateRequest,
    SalaryRecordUpdateRequest,
    SalaryRecordResponse,
    SalaryRecordListResponse,
)
from app.services.salary_service import SalaryService
from app.utils.permissions import Permission


router = APIRouter()

can_view = require_permission([Permission.VIEW_PAYROLL])
can_manage = require_permission([Permission.MANAGE_SALARIES])


@router.get(
    "",
    response_model=SalaryRecordListResponse,
    summary="List salary records",
)
async def list_salary_records(
    month: Optional[str] = Query(None, description="YYYY-MM", pattern=r"^\d{4}-\d{2}$"),
    employee_id: Optional[UUID] = Query(None),
    status_filter: Optional[SalaryStatus] = Query(None, alias="status"),
    current_user: User = Depends(can_view),
    db: AsyncSession = Depends(get_async_session),
):
    """List salary records, newest month first."""
    records = await SalaryService(db).get_salary_records(
        month=month,
        employee_id=employee_id,
        status=status_filter,
    )
    return SalaryRecordListResponse(
        records=[SalaryRecordResponse.model_validate(r) for r in records],
        total=len(records),
    )


@router.get(
    "/year/{year}",
    response_model=SalaryRecordListResponse,
    summary="List salary records for a year",
)
async def list_salary_records_for_year(
    year: int = Path(..., ge=1900, le=9998),
    current_user: User = Depends(can_view),
    db: AsyncSession = Depends(get_async_session),
):
    records = await SalaryService(db).get_salary_records_for_year(year)
    return SalaryRecordListResponse(
        records=[SalaryRecordResponse.model_validate(r) for r in records],
        total=len(records),
    )


@router.get(
    "/{record_id}",
    response_model=SalaryRecordResponse,
    summary="Get salary record",
)
async def get_salary_record(
    record_id: UUID,
    current_user: User = Depends(can_view),
    db: AsyncSession = Depends(get_async_session),
):
    return await SalaryService(db).get_salary_record_or_404(record_id)


@router.post(
    "",
    response_model=SalaryRecordResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create salary record",
    description="Create a record for an employee-month. A second record for the same month returns 409.",
)
async def create_salary_record(
    request: SalaryRecordCreateRequest,
    current_user: User = Depends(can_manage),
    db: AsyncSession = Depends(get_async_session),
):
    return await SalaryService(db).create_salary_record(**request.model_dump())


@router.patch(
    "/{record_id}",
    response_model=SalaryRecordResponse,
    summary="Update salary record",
)
async def update_salary_record(
    record_id: UUID,
    request: SalaryRecordUpdateRequest,
    current_user: User = Depends(can_manage),
    db: AsyncSession = Depends(get_async_session),
):
    service = SalaryService(db)
    record = await service.get_salary_record_or_404(record_id)
    return await service.update_salary_record(record, **request.model_dump(exclude_unset=True))
