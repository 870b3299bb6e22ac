"""
Orca Payroll - Calendar Month Tests
"""

from datetime import date
from decimal import Decimal

import pytest

from app.utils.error_handling import InvalidMonthException
from app.utils.months import (
    YearMonth,
    current_month,
    month_buckets,
    month_range,
    rolling_window,
)


class TestYearMonth:
    """Tests for the YearMonth value type."""

    def test_parse_month_string(self):
        assert YearMonth.parse("2026-01") == YearMonth(2026, 1)

    def test_parse_full_date_string(self):
        assert YearMonth.parse("2026-02-28") == YearMonth(2026, 2)

    def test_parse_date(self):
        assert YearMonth.parse(date(2025, 12, 31)) == YearMonth(2025, 12)

    @pytest.mark.parametrize("value", ["2026-13", "2026-1", "26-01", "2026-02-30", "january", ""])
    def test_parse_rejects_bad_input(self, value):
        with pytest.raises(InvalidMonthException):
            YearMonth.parse(value)

    def test_invalid_month_number(self):
        with pytest.raises(ValueError):
            YearMonth(2026, 0)

    def test_key_and_label(self):
        month = YearMonth(2026, 1)
        assert month.key == "2026-01"
        assert month.label == "Jan 2026"
        assert str(month) == "2026-01"
        assert month.first_day == date(2026, 1, 1)

    def test_shift_across_years(self):
        assert YearMonth(2026, 1).shift(-1) == YearMonth(2025, 12)
        assert YearMonth(2025, 12).next() == YearMonth(2026, 1)
        assert YearMonth(2026, 3).shift(-14) == YearMonth(2025, 1)

    def test_ordering_is_chronological(self):
        assert YearMonth(2025, 12) < YearMonth(2026, 1) < YearMonth(2026, 2)


class TestMonthRanges:
    """Tests for month ranges and windows."""

    def test_month_range_inclusive(self):
        months = month_range(YearMonth(2025, 11), YearMonth(2026, 2))
        assert [m.key for m in months] == ["2025-11", "2025-12", "2026-01", "2026-02"]

    def test_month_range_empty_when_reversed(self):
        assert month_range(YearMonth(2026, 2), YearMonth(2026, 1)) == []

    def test_month_buckets_zero_filled(self):
        buckets = month_buckets(YearMonth(2026, 1), YearMonth(2026, 3))
        assert list(buckets) == [YearMonth(2026, 1), YearMonth(2026, 2), YearMonth(2026, 3)]
        assert all(v == Decimal("0") for v in buckets.values())

    def test_rolling_window_twelve_months(self):
        start, end = rolling_window(date(2026, 3, 15), 12)
        assert start == YearMonth(2025, 4)
        assert end == YearMonth(2026, 3)
        assert len(month_range(start, end)) == 12

    def test_rolling_window_single_month(self):
        start, end = rolling_window(date(2026, 3, 15), 1)
        assert start == end == YearMonth(2026, 3)

    def test_rolling_window_rejects_empty(self):
        with pytest.raises(ValueError):
            rolling_window(date(2026, 3, 15), 0)

    @pytest.mark.parametrize(
        "today,first,last",
        [
            (date(2024, 2, 29), YearMonth(2023, 3), YearMonth(2024, 2)),
            (date(2025, 1, 31), YearMonth(2024, 2), YearMonth(2025, 1)),
            (date(2025, 12, 31), YearMonth(2025, 1), YearMonth(2025, 12)),
            (date(2026, 1, 1), YearMonth(2025, 2), YearMonth(2026, 1)),
            (date(2026, 3, 15), YearMonth(2025, 4), YearMonth(2026, 3)),
        ],
    )
    def test_rolling_window_on_calendar_edges(self, today, first, last):
        start, end = rolling_window(today, 12)
        months = month_range(start, end)

        assert (start, end) == (first, last)
        assert end == YearMonth.from_date(today)
        assert len(months) == 12
        assert len(set(months)) == 12
        assert all(a < b for a, b in zip(months, months[1:]))

    @pytest.mark.parametrize("today", [date(2024, 2, 29), date(2025, 12, 31), date(2026, 1, 1)])
    def test_rolling_window_custom_length(self, today):
        start, end = rolling_window(today, 6)
        assert len(month_range(start, end)) == 6
        assert end == YearMonth.from_date(today)

    def test_current_month_uses_clock(self):
        assert current_month(lambda: date(2026, 7, 4)) == YearMonth(2026, 7)
