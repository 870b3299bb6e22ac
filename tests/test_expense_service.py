"""
Orca Payroll - Expense Service Tests
"""

from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from app.models.expense import (
    AssetStatus,
    AssetType,
    DayToDayExpense,
    ExpenseCategory,
    ExpensePaymentStatus,
    FixedAsset,
)
from app.services.expense_service import ExpenseService
from app.utils.error_handling import InvalidMonthException, NotFoundException
from tests.fixtures.reporting import make_mock_session


def make_asset(**overrides) -> FixedAsset:
    fields = dict(
        id=uuid4(),
        asset_name="ThinkPad T14",
        asset_type=AssetType.LAPTOP,
        purchase_date=date(2025, 11, 3),
        cost=Decimal("1450.00"),
        status=AssetStatus.ACTIVE,
    )
    fields.update(overrides)
    return FixedAsset(**fields)


def make_expense(**overrides) -> DayToDayExpense:
    fields = dict(
        id=uuid4(),
        category=ExpenseCategory.INTERNET,
        vendor="Spectranet",
        date=date(2026, 2, 10),
        amount=Decimal("75.50"),
        payment_status=ExpensePaymentStatus.PENDING,
    )
    fields.update(overrides)
    return DayToDayExpense(**fields)


def bound_params(db) -> list:
    """Values bound into the single statement passed to db.execute."""
    statement = db.execute.await_args.args[0]
    return list(statement.compile().params.values())


class TestFixedAssets:
    """Tests for the fixed asset register."""

    @pytest.mark.asyncio
    async def test_list_filters_by_type_and_status(self):
        assets = [make_asset()]
        db = make_mock_session(assets)

        result = await ExpenseService(db).get_fixed_assets(
            asset_type=AssetType.LAPTOP, status=AssetStatus.ACTIVE
        )

        assert result == assets
        params = bound_params(db)
        assert AssetType.LAPTOP in params
        assert AssetStatus.ACTIVE in params

    @pytest.mark.asyncio
    async def test_list_without_filters_binds_nothing(self):
        db = make_mock_session([])

        assert await ExpenseService(db).get_fixed_assets() == []
        assert bound_params(db) == []

    @pytest.mark.asyncio
    async def test_create(self):
        db = make_mock_session()

        asset = await ExpenseService(db).create_fixed_asset(
            asset_name="Rack server",
            asset_type=AssetType.SERVER,
            purchase_date=date(2026, 1, 20),
            cost=Decimal("6200.00"),
        )

        assert asset.asset_name == "Rack server"
        db.add.assert_called_once_with(asset)
        db.commit.assert_awaited_once()
        db.refresh.assert_awaited_once_with(asset)

    @pytest.mark.asyncio
    async def test_update_retires_asset(self):
        asset = make_asset()
        db = make_mock_session()

        await ExpenseService(db).update_fixed_asset(asset, status=AssetStatus.RETIRED, bogus="x")

        assert asset.status == AssetStatus.RETIRED
        assert not hasattr(asset, "bogus")
        db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete(self):
        asset = make_asset()
        db = make_mock_session()

        await ExpenseService(db).delete_fixed_asset(asset)

        db.delete.assert_awaited_once_with(asset)
        db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_get_or_404(self):
        asset = make_asset()
        db = make_mock_session()
        db.get = AsyncMock(return_value=asset)
        service = ExpenseService(db)

        assert await service.get_fixed_asset_or_404(asset.id) is asset

        db.get = AsyncMock(return_value=None)
        with pytest.raises(NotFoundException) as exc_info:
            await service.get_fixed_asset_or_404(uuid4())
        assert exc_info.value.details["resource_type"] == "FixedAsset"


class TestDayToDayExpenses:
    """Tests for day-to-day expense listing and edits."""

    @pytest.mark.asyncio
    async def test_month_filter_is_half_open(self):
        db = make_mock_session([make_expense()])

        await ExpenseService(db).get_day_to_day_expenses(month="2026-02")

        dates = sorted(p for p in bound_params(db) if isinstance(p, date))
        assert dates == [date(2026, 2, 1), date(2026, 3, 1)]

    @pytest.mark.asyncio
    async def test_december_filter_rolls_into_next_year(self):
        db = make_mock_session([])

        await ExpenseService(db).get_day_to_day_expenses(month="2025-12")

        dates = sorted(p for p in bound_params(db) if isinstance(p, date))
        assert dates == [date(2025, 12, 1), date(2026, 1, 1)]

    @pytest.mark.asyncio
    async def test_category_and_payment_status_filters(self):
        db = make_mock_session([])

        await ExpenseService(db).get_day_to_day_expenses(
            category=ExpenseCategory.RENT, payment_status=ExpensePaymentStatus.PAID
        )

        params = bound_params(db)
        assert ExpenseCategory.RENT in params
        assert ExpensePaymentStatus.PAID in params

    @pytest.mark.asyncio
    async def test_invalid_month_filter(self):
        db = make_mock_session([])

        with pytest.raises(InvalidMonthException):
            await ExpenseService(db).get_day_to_day_expenses(month="2026-13")
        db.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_and_mark_paid(self):
        db = make_mock_session()
        service = ExpenseService(db)

        expense = await service.create_day_to_day_expense(
            category=ExpenseCategory.PANTRY,
            vendor="Shoprite",
            date=date(2026, 3, 2),
            amount=Decimal("42.10"),
        )
        await service.update_day_to_day_expense(expense, payment_status=ExpensePaymentStatus.PAID)

        assert expense.vendor == "Shoprite"
        assert expense.payment_status == ExpensePaymentStatus.PAID
        assert db.commit.await_count == 2

    @pytest.mark.asyncio
    async def test_delete(self):
        expense = make_expense()
        db = make_mock_session()

        await ExpenseService(db).delete_day_to_day_expense(expense)

        db.delete.assert_awaited_once_with(expense)

    @pytest.mark.asyncio
    async def test_missing_expense_is_404(self):
        service = ExpenseService(make_mock_session())

        with pytest.raises(NotFoundException) as exc_info:
            await service.get_day_to_day_expense_or_404(uuid4())
        assert exc_info.value.status_code == 404
