"""
Orca Payroll - Calendar Month Helpers

Months are handled as an explicit (year, month) value instead of "YYYY-MM"
strings. The dashboard window is derived from a clock that callers pass in,
so "today" can be pinned in tests.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Callable, Dict, List, Tuple, Union

from app.utils.error_handling import InvalidMonthException


Clock = Callable[[], date]

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


@dataclass(frozen=True, order=True)
class YearMonth:
    """A calendar month. Ordering is chronological."""

    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"month must be in 1..12, got {self.month}")

    @classmethod
    def from_date(cls, value: date) -> "YearMonth":
        return cls(value.year, value.month)

    @classmethod
    def parse(cls, value: Union[str, date, "YearMonth"]) -> "YearMonth":
        """Accept "YYYY-MM", "YYYY-MM-DD", a date or a YearMonth."""
        if isinstance(value, YearMonth):
            return value
        if isinstance(value, date):
            return cls.from_date(value)
        text = str(value).strip()
        parts = text.split("-")
        if len(parts) not in (2, 3) or len(parts[0]) != 4 or len(parts[1]) != 2:
            raise InvalidMonthException(value)
        try:
            year, month = int(parts[0]), int(parts[1])
            if len(parts) == 3:
                date(year, month, int(parts[2]))
            return cls(year, month)
        except ValueError:
            raise InvalidMonthException(value)

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def key(self) -> str:
        """ "2026-01" """
        return f"{self.year:04d}-{self.month:02d}"

    @property
    def label(self) -> str:
        """ "Jan 2026" """
        return f"{MONTH_ABBREVIATIONS[self.month - 1]} {self.year}"

    def shift(self, months: int) -> "YearMonth":
        index = self.year * 12 + (self.month - 1) + months
        return YearMonth(index // 12, index % 12 + 1)

    def next(self) -> "YearMonth":
        return self.shift(1)

    def __str__(self) -> str:
        return self.key


def current_month(clock: Clock = date.today) -> YearMonth:
    return YearMonth.from_date(clock())


def month_range(start: YearMonth, end: YearMonth) -> List[YearMonth]:
    """Every month from start to end, inclusive. Empty when start > end."""
    months = []
    cursor = start
    while cursor <= end:
        months.append(cursor)
        cursor = cursor.next()
    return months


def month_buckets(start: YearMonth, end: YearMonth) -> Dict[YearMonth, Decimal]:
    """Zero-filled, chronologically ordered month buckets."""
    return {month: Decimal("0") for month in month_range(start, end)}


def rolling_window(today: date, months: int = 12) -> Tuple[YearMonth, YearMonth]:
    """The `months` calendar months ending with the month containing `today`."""
    if months < 1:
        raise ValueError("window must contain at least one month")
    end = YearMonth.from_date(today)
    return end.shift(-(months - 1)), end
