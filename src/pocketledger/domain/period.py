"""Calendar month value type used to scope the expense list."""

from __future__ import annotations

from calendar import monthrange
from dataclasses import dataclass
from datetime import date, datetime

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


@dataclass(frozen=True, order=True)
class Period:
    """A ``(year, month)`` pair; always stands for the first day of that month."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"month must be within 1..12, got {self.month}")

    @classmethod
    def from_date(cls, value: date) -> "Period":
        return cls(value.year, value.month)

    @classmethod
    def current(cls) -> "Period":
        return cls.from_date(date.today())

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, monthrange(self.year, self.month)[1])

    def shift(self, delta_months: int) -> "Period":
        """Move by whole months, rolling the year over in either direction."""

        index = self.year * 12 + (self.month - 1) + delta_months
        year, month_index = divmod(index, 12)
        return Period(year, month_index + 1)

    def to_query_key(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    def label(self) -> str:
        """Human readable ``Month YYYY``; independent of the process locale."""

        return f"{MONTH_NAMES[self.month - 1]} {self.year:04d}"

    def contains(self, moment: date | datetime) -> bool:
        return moment.year == self.year and moment.month == self.month

    def __str__(self) -> str:
        return self.to_query_key()


def shift(period: Period, delta_months: int) -> Period:
    return period.shift(delta_months)


def to_query_key(period: Period) -> str:
    return period.to_query_key()


def label(period: Period) -> str:
    return period.label()
