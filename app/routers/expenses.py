"""
Orca Payroll - Expenses Router

API endpoints for fixed assets and day-to-day office expenses.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import require_permission
from app.models.expense import (
    AssetStatus,
    AssetType,
    ExpenseCategory,
    ExpensePaymentStatus,
)
from app.models.user import User
from app.schemas.expense import (
    FixedAssetCreateRequest,
    FixedAssetUpdateRequest,
    FixedAssetResponse,
    FixedAssetListResponse,
    DayToDayExpenseCreateRequest,
    DayToDayExpenseUpdateRequest,
    DayToDayExpenseResponse,
    DayToDayExpenseListResponse,
)
from app.services.expense_service import ExpenseService
from app.utils.permissions import Permission


router = APIRouter()

can_view = require_permission([Permission.VIEW_EXPENSES])
can_manage = require_permission([Permission.MANAGE_EXPENSES])


# ===========================================
# FIXED ASSETS
# ===========================================

@router.get(
    "/fixed-assets",
    response_model=FixedAssetListResponse,
    summary="List fixed assets",
)
async def list_fixed_assets(
    asset_type: Optional[AssetType] = Query(None),
    status_filter: Optional[AssetStatus] = Query(None, alias="status"),
    current_user: User = Depends(can_view),
    db: AsyncSession = Depends(get_async_session),
):
    assets = await ExpenseService(db).get_fixed_assets(asset_type=asset_type, status=status_filter)
    return FixedAssetListResponse(
        assets=[FixedAssetResponse.model_validate(a) for a in assets],
        total=len(assets),
    )


@router.post(
    "/fixed-assets",
    response_model=FixedAssetResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create fixed asset",
)
async def create_fixed_asset(
    request: FixedAssetCreateRequest,
    current_user: User = Depends(can_manage),
    db: AsyncSession = Depends(get_async_session),
):
    return await ExpenseService(db).create_fixed_asset(**request.model_dump())


@router.patch(
    "/fixed-assets/{asset_id}",
    response_model=FixedAssetResponse,
    summary="Update fixed asset",
)
async def update_fixed_asset(
    asset_id: UUID,
    request: FixedAssetUpdateRequest,
    current_user: User = Depends(can_manage),
    db: AsyncSession = Depends(get_async_session),
):
    service = ExpenseService(db)
    asset = await service.get_fixed_asset_or_404(asset_id)
    return await service.update_fixed_asset(asset, **request.model_dump(exclude_unset=True))


@router.delete(
    "/fixed-assets/{asset_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete fixed asset",
)
async def delete_fixed_asset(
    asset_id: UUID,
    current_user: User = Depends(can_manage),
    db: AsyncSession = Depends(get_async_session),
):
    service = ExpenseService(db)
    asset = await service.get_fixed_asset_or_404(asset_id)
    await service.delete_fixed_asset(asset)


# ===========================================
# DAY-TO-DAY EXPENSES
# ===========================================

@router.get(
    "/day-to-day",
    response_model=DayToDayExpenseListResponse,
    summary="List day-to-day expenses",
)
async def list_day_to_day_expenses(
    category: Optional[ExpenseCategory] = Query(None),
    payment_status: Optional[ExpensePaymentStatus] = Query(None),
    month: Optional[str] = Query(None, description="YYYY-MM", pattern=r"^\d{4}-\d{2}$"),
    current_user: User = Depends(can_view),
    db: AsyncSession = Depends(get_async_session),
):
    expenses = await ExpenseService(db).get_day_to_day_expenses(
        category=category,
        payment_status=payment_status,
        month=month,
    )
    return DayToDayExpenseListResponse(
        expenses=[DayToDayExpenseResponse.model_validate(e) for e in expenses],
        total=len(expenses),
    )


@router.post(
    "/day-to-day",
    response_model=DayToDayExpenseResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create day-to-day expense",
)
async def create_day_to_day_expense(
    request: DayToDayExpenseCreateRequest,
    current_user: User = Depends(can_manage),
    db: AsyncSession = Depends(get_async_session),
):
    return await ExpenseService(db).create_day_to_day_expense(**request.model_dump())


@router.patch(
    "/day-to-day/{expense_id}",
    response_model=DayToDayExpenseResponse,
    summary="Update day-to-day expense",
)
async def update_day_to_day_expense(
    expense_id: UUID,
    request: DayToDayExpenseUpdateRequest,
    current_user: User = Depends(can_manage),
    db: AsyncSession = Depends(get_async_session),
):
    service = ExpenseService(db)
    expense = await service.get_day_to_day_expense_or_404(expense_id)
    return await service.update_day_to_day_expense(expense, **request.model_dump(exclude_unset=True))


@router.delete(
    "/day-to-day/{expense_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete day-to-day expense",
)
async def delete_day_to_day_expense(
    expense_id: UUID,
    current_user: User = Depends(can_manage),
    db: AsyncSession = Depends(get_async_session),
):
    service = ExpenseService(db)
    expense = await service.get_day_to_day_expense_or_404(expense_id)
    await service.delete_day_to_day_expense(expense)
