"""Calendar-month keys used as the time axis of every monthly series."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterator, TypeVar

from evaengine.errors import InvalidMonthKeyError

T = TypeVar("T")

# Meteorological seasons (northern hemisphere), month numbers 1 -- 12.
SUMMER_MONTHS = frozenset({6, 7, 8})
WINTER_MONTHS = frozenset({12, 1, 2})


@dataclass(frozen=True, order=True)
class MonthKey:
    """A (year, month) pair, rendered as ``"YYYY-MM"``.

    Ordering is chronological because ``year`` is compared before ``month``.
    """

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise InvalidMonthKeyError(f"month must be in 1..12, got {self.month}")

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    @classmethod
    def parse(cls, value: str) -> "MonthKey":
        """Parse ``"YYYY-MM"`` (a trailing ``-DD`` day part is ignored)."""
        parts = str(value).strip().split("-")
        if len(parts) < 2:
            raise InvalidMonthKeyError(f"Expected 'YYYY-MM', got {value!r}")
        try:
            year, month = int(parts[0]), int(parts[1])
        except ValueError as exc:
            raise InvalidMonthKeyError(f"Expected 'YYYY-MM', got {value!r}") from exc
        return cls(year, month)

    @classmethod
    def from_date(cls, d: date) -> "MonthKey":
        return cls(d.year, d.month)

    @property
    def month_index(self) -> int:
        """Zero-based month of year (0 = January)."""
        return self.month - 1

    @property
    def is_summer(self) -> bool:
        return self.month in SUMMER_MONTHS

    @property
    def is_winter(self) -> bool:
        return self.month in WINTER_MONTHS

    def shift(self, months: int) -> "MonthKey":
        """Return the key ``months`` calendar months later (or earlier)."""
        total = self.year * 12 + self.month_index + months
        return MonthKey(total // 12, total % 12 + 1)

    def shift_years(self, years: int) -> "MonthKey":
        return MonthKey(self.year + years, self.month)


def as_month_key(value: MonthKey | str) -> MonthKey:
    """Accept either a ``MonthKey`` or its string form."""
    if isinstance(value, MonthKey):
        return value
    return MonthKey.parse(value)


def months_between(start: MonthKey | str, end: MonthKey | str) -> list[MonthKey]:
    """Inclusive list of month keys from *start* to *end*.

    Returns an empty list when *end* precedes *start*.
    """
    current = as_month_key(start)
    stop = as_month_key(end)
    keys: list[MonthKey] = []
    while current <= stop:
        keys.append(current)
        current = current.shift(1)
    return keys


def iter_sorted(series: dict[MonthKey, T]) -> Iterator[tuple[MonthKey, T]]:
    """Iterate a monthly series in chronological order."""
    for key in sorted(series):
        yield key, series[key]
