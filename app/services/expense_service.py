"""
Orca Payroll - Expense Service

Business logic for fixed assets and day-to-day office expenses.
"""

import uuid
from typing import Any, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.expense import (
    AssetStatus,
    AssetType,
    DayToDayExpense,
    ExpenseCategory,
    ExpensePaymentStatus,
    FixedAsset,
)
from app.utils.error_handling import NotFoundException
from app.utils.months import YearMonth


class ExpenseService:
    """Service for fixed asset and day-to-day expense operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # =========================================================================
    # FIXED ASSETS
    # =========================================================================

    async def get_fixed_assets(
        self,
        asset_type: Optional[AssetType] = None,
        status: Optional[AssetStatus] = None,
    ) -> List[FixedAsset]:
        """List fixed assets, most recent purchase first."""
        query = select(FixedAsset)
        if asset_type:
            query = query.where(FixedAsset.asset_type == asset_type)
        if status:
            query = query.where(FixedAsset.status == status)
        query = query.order_by(FixedAsset.purchase_date.desc())

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_fixed_asset_or_404(self, asset_id: uuid.UUID) -> FixedAsset:
        asset = await self.db.get(FixedAsset, asset_id)
        if asset is None:
            raise NotFoundException("FixedAsset", asset_id)
        return asset

    async def create_fixed_asset(self, **kwargs: Any) -> FixedAsset:
        asset = FixedAsset(**kwargs)
        self.db.add(asset)
        await self.db.commit()
        await self.db.refresh(asset)
        return asset

    async def update_fixed_asset(self, asset: FixedAsset, **kwargs: Any) -> FixedAsset:
        for key, value in kwargs.items():
            if hasattr(asset, key):
                setattr(asset, key, value)
        await self.db.commit()
        await self.db.refresh(asset)
        return asset

    async def delete_fixed_asset(self, asset: FixedAsset) -> None:
        await self.db.delete(asset)
        await self.db.commit()

    # =========================================================================
    # DAY-TO-DAY EXPENSES
    # =========================================================================

    async def get_day_to_day_expenses(
        self,
        category: Optional[ExpenseCategory] = None,
        payment_status: Optional[ExpensePaymentStatus] = None,
        month: Optional[str] = None,
    ) -> List[DayToDayExpense]:
        """List expenses, most recent first. `month` is "YYYY-MM"."""
        query = select(DayToDayExpense)
        if category:
            query = query.where(DayToDayExpense.category == category)
        if payment_status:
            query = query.where(DayToDayExpense.payment_status == payment_status)
        if month:
            ym = YearMonth.parse(month)
            query = query.where(DayToDayExpense.date >= ym.first_day)
            query = query.where(DayToDayExpense.date < ym.next().first_day)
        query = query.order_by(DayToDayExpense.date.desc())

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_day_to_day_expense_or_404(self, expense_id: uuid.UUID) -> DayToDayExpense:
        expense = await self.db.get(DayToDayExpense, expense_id)
        if expense is None:
            raise NotFoundException("DayToDayExpense", expense_id)
        return expense

    async def create_day_to_day_expense(self, **kwargs: Any) -> DayToDayExpense:
        expense = DayToDayExpense(**kwargs)
        self.db.add(expense)
        await self.db.commit()
        await self.db.refresh(expense)
        return expense

    async def update_day_to_day_expense(self, expense: DayToDayExpense, **kwargs: Any) -> DayToDayExpense:
        for key, value in kwargs.items():
            if hasattr(expense, key):
                setattr(expense, key, value)
        await self.db.commit()
        await self.db.refresh(expense)
        return expense

    async def delete_day_to_day_expense(self, expense: DayToDayExpense) -> None:
        await self.db.delete(expense)
        await self.db.commit()
