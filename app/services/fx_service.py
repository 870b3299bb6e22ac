"""
Orca Payroll - Foreign Exchange (FX) Service

Converts amounts into the admin-configured reporting currency.

Rates are expressed as "1 unit of currency X = rate units of the
reporting currency". Conversion is fail-open: when the reporting currency,
the source currency or a usable rate is missing, the amount is passed
through unchanged instead of raising.
"""

import json
import logging
import uuid
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)


CurrencyId = uuid.UUID
ExchangeRates = Dict[CurrencyId, Decimal]

Number = Union[Decimal, int, float, str]


# =========================================================================
# CONVERSION
# =========================================================================

def _usable_rate(rates: ExchangeRates, currency_id: CurrencyId) -> Optional[Decimal]:
    rate = rates.get(currency_id)
    if rate is None:
        return None
    try:
        rate = Decimal(rate)
    except (InvalidOperation, TypeError, ValueError):
        return None
    if not rate.is_finite() or rate <= 0:
        return None
    return rate


def convert_to_reporting(
    amount: Number,
    source_currency_id: Optional[CurrencyId],
    reporting_currency_id: Optional[CurrencyId],
    rates: ExchangeRates,
) -> Decimal:
    """
    Convert an amount into the reporting currency.

    Rules, first match wins:
        1. no reporting currency, or no source currency -> unchanged
        2. source is the reporting currency -> unchanged
        3. rate missing, unparsable or not positive -> unchanged
        4. amount * rate
    """
    amount = Decimal(amount)
    if reporting_currency_id is None or source_currency_id is None:
        return amount
    if source_currency_id == reporting_currency_id:
        return amount
    rate = _usable_rate(rates, source_currency_id)
    if rate is None:
        return amount
    return amount * rate


@dataclass(frozen=True)
class ReportingContext:
    """Reporting currency and exchange rates, loaded once per request."""

    reporting_currency_id: Optional[CurrencyId] = None
    rates: ExchangeRates = field(default_factory=dict)

    def convert(self, amount: Number, source_currency_id: Optional[CurrencyId]) -> Decimal:
        return convert_to_reporting(
            amount, source_currency_id, self.reporting_currency_id, self.rates
        )

    def conversion_skipped(self, source_currency_id: Optional[CurrencyId]) -> bool:
        """True when an amount in this currency is passed through for lack of a rate."""
        if self.reporting_currency_id is None or source_currency_id is None:
            return False
        if source_currency_id == self.reporting_currency_id:
            return False
        return _usable_rate(self.rates, source_currency_id) is None

    def log_skipped(self, currency_ids, panel: str) -> None:
        skipped = sorted(
            {str(cid) for cid in currency_ids if self.conversion_skipped(cid)}
        )
        if skipped:
            logger.debug(f"{panel}: no usable exchange rate for {skipped}, amounts left unconverted")

    # =====================================================================
    # SERIALIZATION (settings cache)
    # =====================================================================

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reporting_currency_id": str(self.reporting_currency_id) if self.reporting_currency_id else None,
            "exchange_rates": {str(k): str(v) for k, v in self.rates.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReportingContext":
        return cls(
            reporting_currency_id=parse_currency_id(data.get("reporting_currency_id")),
            rates=parse_exchange_rates(data.get("exchange_rates")),
        )


# =========================================================================
# SETTINGS PARSING
# Stored settings are JSON text; anything malformed means "no conversion".
# =========================================================================

def _load_json(raw: Any) -> Any:
    if isinstance(raw, str):
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, ValueError):
            return raw
    return raw


def parse_currency_id(raw: Any) -> Optional[CurrencyId]:
    """Parse a stored reporting currency id. Blank or invalid values give None."""
    value = _load_json(raw)
    if value is None or value == "":
        return None
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        logger.warning(f"Ignoring invalid reporting currency id: {raw!r}")
        return None


def parse_exchange_rates(raw: Any) -> ExchangeRates:
    """Parse stored exchange rates, dropping keys or rates that cannot be read."""
    value = _load_json(raw)
    if not isinstance(value, dict):
        if value not in (None, ""):
            logger.warning("Ignoring malformed exchange rates setting")
        return {}

    rates: ExchangeRates = {}
    for key, rate in value.items():
        try:
            currency_id = key if isinstance(key, uuid.UUID) else uuid.UUID(str(key))
            rates[currency_id] = Decimal(str(rate))
        except (ValueError, InvalidOperation):
            logger.debug(f"Skipping unreadable exchange rate entry {key!r}: {rate!r}")
    return rates


def clean_exchange_rates(
    rates: ExchangeRates,
    reporting_currency_id: Optional[CurrencyId],
) -> ExchangeRates:
    """Rates as they are saved: no entry for the reporting currency, only positive rates."""
    cleaned: ExchangeRates = {}
    for currency_id, rate in rates.items():
        if currency_id == reporting_currency_id:
            continue
        usable = _usable_rate({currency_id: rate}, currency_id)
        if usable is not None:
            cleaned[currency_id] = usable
    return cleaned


def dump_exchange_rates(rates: ExchangeRates) -> str:
    """Rates as JSON with decimal-string values."""
    return json.dumps({str(k): str(v) for k, v in rates.items()})
