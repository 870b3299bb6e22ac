"""
Orca Payroll - Settings Schemas

Reporting currency and exchange rates. A rate means
"1 unit of that currency = rate units of the reporting currency".
"""

from decimal import Decimal
from typing import Dict, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class ReportingCurrencyRequest(BaseModel):
    """Set the reporting currency. null switches conversion off."""
    reporting_currency_id: Optional[UUID] = None


class ReportingCurrencyResponse(BaseModel):
    reporting_currency_id: Optional[UUID] = None


class ExchangeRatesRequest(BaseModel):
    """
    Replace all exchange rates.

    Entries for the reporting currency itself and rates of zero or less are
    dropped on save.
    """
    rates: Dict[UUID, Decimal] = Field(default_factory=dict)


class ExchangeRatesResponse(BaseModel):
    reporting_currency_id: Optional[UUID] = None
    rates: Dict[UUID, Decimal]
