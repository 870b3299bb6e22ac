"""
Orca Payroll - Settings Service Tests

Tests for the reporting currency and exchange rate settings, and the
cached reporting context.
"""

import json
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from app.models.app_setting import AppSetting, AppSettingKey
from app.models.currency import Currency
from app.services.cache_service import CacheService
from app.services.fx_service import ReportingContext
from app.services.settings_service import SettingsService
from app.utils.error_handling import NotFoundException
from tests.fixtures.reporting import make_mock_session


USD = uuid4()
EUR = uuid4()


def make_cache(cached=None) -> MagicMock:
    cache = MagicMock(spec=CacheService)
    cache.get_reporting_context = AsyncMock(return_value=cached)
    cache.set_reporting_context = AsyncMock(return_value=True)
    cache.invalidate_reporting_context = AsyncMock(return_value=True)
    return cache


def setting(key, value) -> AppSetting:
    return AppSetting(key=key, value=value)


class TestReportingCurrency:
    """Tests for reading and writing the reporting currency."""

    @pytest.mark.asyncio
    async def test_unset_means_none(self):
        service = SettingsService(make_mock_session(None), cache=make_cache())
        assert await service.get_reporting_currency_id() is None

    @pytest.mark.asyncio
    async def test_reads_json_value(self):
        db = make_mock_session(setting(AppSettingKey.REPORTING_CURRENCY_ID, json.dumps(str(USD))))
        service = SettingsService(db, cache=make_cache())
        assert await service.get_reporting_currency_id() == USD

    @pytest.mark.asyncio
    async def test_malformed_value_means_none(self):
        db = make_mock_session(setting(AppSettingKey.REPORTING_CURRENCY_ID, "{{oops"))
        service = SettingsService(db, cache=make_cache())
        assert await service.get_reporting_currency_id() is None

    @pytest.mark.asyncio
    async def test_set_stores_and_invalidates_cache(self):
        db = make_mock_session(None)
        db.get = AsyncMock(return_value=Currency(id=USD, code="USD", name="US Dollar"))
        cache = make_cache()
        service = SettingsService(db, cache=cache)

        result = await service.set_reporting_currency_id(USD)

        assert result == USD
        stored = db.add.call_args[0][0]
        assert stored.key == AppSettingKey.REPORTING_CURRENCY_ID
        assert json.loads(stored.value) == str(USD)
        db.commit.assert_awaited_once()
        cache.invalidate_reporting_context.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_set_updates_existing_row(self):
        existing = setting(AppSettingKey.REPORTING_CURRENCY_ID, json.dumps(str(EUR)))
        db = make_mock_session(existing)
        db.get = AsyncMock(return_value=Currency(id=USD, code="USD"))
        service = SettingsService(db, cache=make_cache())

        await service.set_reporting_currency_id(USD)

        db.add.assert_not_called()
        assert json.loads(existing.value) == str(USD)

    @pytest.mark.asyncio
    async def test_clear_reporting_currency(self):
        db = make_mock_session(None)
        service = SettingsService(db, cache=make_cache())

        assert await service.set_reporting_currency_id(None) is None
        assert db.add.call_args[0][0].value == "null"

    @pytest.mark.asyncio
    async def test_unknown_currency_rejected(self):
        db = make_mock_session()
        cache = make_cache()
        service = SettingsService(db, cache=cache)

        with pytest.raises(NotFoundException):
            await service.set_reporting_currency_id(uuid4())
        db.commit.assert_not_awaited()
        cache.invalidate_reporting_context.assert_not_awaited()


class TestExchangeRates:
    """Tests for reading and writing exchange rates."""

    @pytest.mark.asyncio
    async def test_reads_rates(self):
        db = make_mock_session(setting(AppSettingKey.EXCHANGE_RATES, json.dumps({str(EUR): 1.1})))
        service = SettingsService(db, cache=make_cache())
        assert await service.get_exchange_rates() == {EUR: Decimal("1.1")}

    @pytest.mark.asyncio
    async def test_save_drops_reporting_currency_and_bad_rates(self):
        other = uuid4()
        db = make_mock_session(
            setting(AppSettingKey.REPORTING_CURRENCY_ID, json.dumps(str(USD))),
            None,
        )
        cache = make_cache()
        service = SettingsService(db, cache=cache)

        saved = await service.set_exchange_rates(
            {USD: Decimal("1"), EUR: Decimal("1.1"), other: Decimal("0")}
        )

        assert saved == {EUR: Decimal("1.1")}
        stored = db.add.call_args[0][0]
        assert stored.key == AppSettingKey.EXCHANGE_RATES
        assert json.loads(stored.value) == {str(EUR): "1.1"}
        cache.invalidate_reporting_context.assert_awaited_once()


class TestReportingContext:
    """Tests for the cached reporting context."""

    @pytest.mark.asyncio
    async def test_cache_hit_skips_database(self):
        cached = ReportingContext(reporting_currency_id=USD, rates={EUR: Decimal("1.1")}).to_dict()
        db = make_mock_session()
        service = SettingsService(db, cache=make_cache(cached))

        context = await service.get_reporting_context()

        assert context.reporting_currency_id == USD
        assert context.rates == {EUR: Decimal("1.1")}
        db.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_cache_miss_loads_and_stores(self):
        db = make_mock_session(
            setting(AppSettingKey.REPORTING_CURRENCY_ID, json.dumps(str(USD))),
            setting(AppSettingKey.EXCHANGE_RATES, json.dumps({str(EUR): 1.25})),
        )
        cache = make_cache()
        service = SettingsService(db, cache=cache)

        context = await service.get_reporting_context()

        assert context == ReportingContext(reporting_currency_id=USD, rates={EUR: Decimal("1.25")})
        cache.set_reporting_context.assert_awaited_once_with(context.to_dict())
