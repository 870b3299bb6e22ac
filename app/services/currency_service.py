"""
Orca Payroll - Currency Service

Admin-managed list of currencies.
"""

import uuid
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.currency import Currency
from app.utils.error_handling import DuplicateEntryException, NotFoundException


class CurrencyService:
    """Service for currency operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_currencies(self) -> List[Currency]:
        """List currencies ordered by name."""
        result = await self.db.execute(
            select(Currency).order_by(Currency.name, Currency.code)
        )
        return list(result.scalars().all())

    async def get_currency_or_404(self, currency_id: uuid.UUID) -> Currency:
        currency = await self.db.get(Currency, currency_id)
        if currency is None:
            raise NotFoundException("Currency", currency_id)
        return currency

    async def get_currency_by_code(self, code: str) -> Optional[Currency]:
        result = await self.db.execute(
            select(Currency).where(Currency.code == code)
        )
        return result.scalar_one_or_none()

    async def create_currency(self, code: str, name: Optional[str] = None) -> Currency:
        code = code.strip()
        if await self.get_currency_by_code(code):
            raise DuplicateEntryException("Currency", "code", code)

        currency = Currency(code=code, name=name.strip() if name else name)
        self.db.add(currency)
        await self.db.commit()
        await self.db.refresh(currency)
        return currency

    async def update_currency(
        self,
        currency: Currency,
        code: Optional[str] = None,
        name: Optional[str] = None,
    ) -> Currency:
        if code is not None:
            code = code.strip()
            if code != currency.code and await self.get_currency_by_code(code):
                raise DuplicateEntryException("Currency", "code", code)
            currency.code = code
        if name is not None:
            currency.name = name.strip()

        await self.db.commit()
        await self.db.refresh(currency)
        return currency

    async def delete_currency(self, currency: Currency) -> None:
        """Delete a currency. Employees, assets and expenses using it keep no currency."""
        await self.db.delete(currency)
        await self.db.commit()
