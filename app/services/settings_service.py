"""
Orca Payroll - Settings Service

Admin-managed application settings: the reporting currency and the
exchange rates into it. Both are stored as JSON text in `app_settings`.
"""

import json
import logging
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.app_setting import AppSetting, AppSettingKey
from app.models.currency import Currency
from app.services.cache_service import CacheService, get_cache_service
from app.services.fx_service import (
    ExchangeRates,
    ReportingContext,
    clean_exchange_rates,
    dump_exchange_rates,
    parse_currency_id,
    parse_exchange_rates,
)
from app.utils.error_handling import NotFoundException

logger = logging.getLogger(__name__)


class SettingsService:
    """Service for reporting currency and exchange rate settings."""

    def __init__(self, db: AsyncSession, cache: Optional[CacheService] = None):
        self.db = db
        self.cache = cache or get_cache_service()

    # =========================================================================
    # RAW KEY/VALUE ACCESS
    # =========================================================================

    async def _get_setting(self, key: str) -> Optional[AppSetting]:
        result = await self.db.execute(
            select(AppSetting).where(AppSetting.key == key)
        )
        return result.scalar_one_or_none()

    async def _get_value(self, key: str) -> Optional[str]:
        setting = await self._get_setting(key)
        return setting.value if setting else None

    async def _set_value(self, key: str, value: str) -> None:
        setting = await self._get_setting(key)
        if setting is None:
            self.db.add(AppSetting(key=key, value=value))
        else:
            setting.value = value
        await self.db.commit()

    # =========================================================================
    # REPORTING CURRENCY
    # =========================================================================

    async def get_reporting_currency_id(self) -> Optional[uuid.UUID]:
        """The reporting currency id, or None when no conversion is configured."""
        return parse_currency_id(
            await self._get_value(AppSettingKey.REPORTING_CURRENCY_ID)
        )

    async def set_reporting_currency_id(
        self,
        currency_id: Optional[uuid.UUID],
    ) -> Optional[uuid.UUID]:
        """Set the reporting currency. None switches conversion off."""
        if currency_id is not None:
            currency = await self.db.get(Currency, currency_id)
            if currency is None:
                raise NotFoundException("Currency", currency_id)

        await self._set_value(
            AppSettingKey.REPORTING_CURRENCY_ID,
            json.dumps(str(currency_id) if currency_id else None),
        )
        await self.cache.invalidate_reporting_context()
        logger.info(f"Reporting currency set to {currency_id}")
        return currency_id

    # =========================================================================
    # EXCHANGE RATES
    # =========================================================================

    async def get_exchange_rates(self) -> ExchangeRates:
        return parse_exchange_rates(
            await self._get_value(AppSettingKey.EXCHANGE_RATES)
        )

    async def set_exchange_rates(self, rates: ExchangeRates) -> ExchangeRates:
        """
        Replace the exchange rates.

        The reporting currency's own entry and non-positive rates are
        dropped before saving. Returns the rates actually stored.
        """
        reporting_currency_id = await self.get_reporting_currency_id()
        cleaned = clean_exchange_rates(rates, reporting_currency_id)

        await self._set_value(AppSettingKey.EXCHANGE_RATES, dump_exchange_rates(cleaned))
        await self.cache.invalidate_reporting_context()
        logger.info(f"Saved {len(cleaned)} exchange rate(s)")
        return cleaned

    # =========================================================================
    # REPORTING CONTEXT
    # =========================================================================

    async def get_reporting_context(self) -> ReportingContext:
        """Reporting currency and rates, served from Redis when cached."""
        cached = await self.cache.get_reporting_context()
        if cached is not None:
            return ReportingContext.from_dict(cached)

        context = ReportingContext(
            reporting_currency_id=await self.get_reporting_currency_id(),
            rates=await self.get_exchange_rates(),
        )
        await self.cache.set_reporting_context(context.to_dict())
        return context
