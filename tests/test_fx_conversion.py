"""
Orca Payroll - FX Conversion Unit Tests

Tests for conversion into the reporting currency:
- Pass-through rules when conversion is not configured
- Rate application
- Parsing and cleaning of stored settings
"""

import json
from decimal import Decimal
from uuid import uuid4

import pytest

from app.services.fx_service import (
    ReportingContext,
    clean_exchange_rates,
    convert_to_reporting,
    dump_exchange_rates,
    parse_currency_id,
    parse_exchange_rates,
)


USD = uuid4()
EUR = uuid4()
GBP = uuid4()


class TestConvertToReporting:
    """Tests for convert_to_reporting."""

    def test_applies_rate(self):
        """1000 EUR at 1.1 is 1100 in the reporting currency."""
        result = convert_to_reporting(Decimal("1000"), EUR, USD, {EUR: Decimal("1.1")})
        assert result == Decimal("1100")

    def test_no_reporting_currency_passes_through(self):
        result = convert_to_reporting(Decimal("1000"), EUR, None, {EUR: Decimal("1.1")})
        assert result == Decimal("1000")

    def test_no_source_currency_passes_through(self):
        result = convert_to_reporting(Decimal("250.50"), None, USD, {EUR: Decimal("1.1")})
        assert result == Decimal("250.50")

    def test_same_currency_passes_through(self):
        result = convert_to_reporting(Decimal("1000"), USD, USD, {USD: Decimal("2")})
        assert result == Decimal("1000")

    def test_missing_rate_passes_through(self):
        result = convert_to_reporting(Decimal("1000"), GBP, USD, {EUR: Decimal("1.1")})
        assert result == Decimal("1000")

    @pytest.mark.parametrize("rate", [Decimal("0"), Decimal("-1.5"), "abc", Decimal("NaN")])
    def test_unusable_rate_passes_through(self, rate):
        result = convert_to_reporting(Decimal("1000"), EUR, USD, {EUR: rate})
        assert result == Decimal("1000")

    def test_accepts_plain_numbers(self):
        assert convert_to_reporting(10, EUR, USD, {EUR: Decimal("2")}) == Decimal("20")
        assert convert_to_reporting("10.5", EUR, USD, {EUR: Decimal("2")}) == Decimal("21.0")


class TestReportingContext:
    """Tests for the per-request reporting context."""

    def test_convert_uses_context(self):
        context = ReportingContext(reporting_currency_id=USD, rates={EUR: Decimal("1.1")})
        assert context.convert(Decimal("1000"), EUR) == Decimal("1100")

    def test_default_context_converts_nothing(self):
        context = ReportingContext()
        assert context.convert(Decimal("1000"), EUR) == Decimal("1000")
        assert context.conversion_skipped(EUR) is False

    def test_conversion_skipped_only_for_missing_rates(self):
        context = ReportingContext(reporting_currency_id=USD, rates={EUR: Decimal("1.1")})
        assert context.conversion_skipped(EUR) is False
        assert context.conversion_skipped(USD) is False
        assert context.conversion_skipped(None) is False
        assert context.conversion_skipped(GBP) is True

    def test_dict_round_trip(self):
        context = ReportingContext(reporting_currency_id=USD, rates={EUR: Decimal("1.1")})
        restored = ReportingContext.from_dict(json.loads(json.dumps(context.to_dict())))
        assert restored == context


class TestSettingsParsing:
    """Tests for reading the stored JSON settings."""

    def test_parse_currency_id_from_json_string(self):
        assert parse_currency_id(json.dumps(str(USD))) == USD

    def test_parse_currency_id_null(self):
        assert parse_currency_id("null") is None
        assert parse_currency_id(None) is None
        assert parse_currency_id("") is None

    def test_parse_currency_id_garbage(self):
        assert parse_currency_id("not-a-uuid") is None

    def test_parse_exchange_rates(self):
        raw = json.dumps({str(EUR): 1.1, str(GBP): "1.27"})
        rates = parse_exchange_rates(raw)
        assert rates == {EUR: Decimal("1.1"), GBP: Decimal("1.27")}

    @pytest.mark.parametrize("raw", ["{not json", "[1, 2]", "42", None, ""])
    def test_malformed_exchange_rates_mean_no_rates(self, raw):
        assert parse_exchange_rates(raw) == {}

    def test_unreadable_entries_are_skipped(self):
        raw = json.dumps({str(EUR): 1.1, "bogus": 2, str(GBP): "x"})
        assert parse_exchange_rates(raw) == {EUR: Decimal("1.1")}


class TestCleanExchangeRates:
    """Tests for the rates saved by the settings page."""

    def test_drops_reporting_currency_entry(self):
        cleaned = clean_exchange_rates({USD: Decimal("1"), EUR: Decimal("1.1")}, USD)
        assert cleaned == {EUR: Decimal("1.1")}

    def test_drops_non_positive_rates(self):
        cleaned = clean_exchange_rates({EUR: Decimal("0"), GBP: Decimal("-2")}, USD)
        assert cleaned == {}

    def test_keeps_everything_without_reporting_currency(self):
        cleaned = clean_exchange_rates({USD: Decimal("1"), EUR: Decimal("1.1")}, None)
        assert cleaned == {USD: Decimal("1"), EUR: Decimal("1.1")}

    def test_dump_keeps_decimal_strings(self):
        payload = json.loads(dump_exchange_rates({EUR: Decimal("1.1")}))
        assert payload == {str(EUR): "1.1"}

    def test_dump_and_parse_preserve_precision(self):
        rates = {EUR: Decimal("0.000123456789012345678"), GBP: Decimal("1234567.891234567891")}
        assert parse_exchange_rates(dump_exchange_rates(rates)) == rates
