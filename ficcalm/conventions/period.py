"""
Calendar periods and date arithmetic on top of ``relativedelta``.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Union

from dateutil.relativedelta import relativedelta

from ficcalm.errors import InvalidValueError

from .types import Frequency, TimeUnit


def to_date(dt: Union[date, datetime]) -> date:
    """Convert datetime to date if needed."""
    return dt.date() if isinstance(dt, datetime) else dt


@dataclass(frozen=True)
class Period:
    """A signed length of calendar time, e.g. ``Period(3, TimeUnit.MONTHS)``."""

    length: int
    unit: TimeUnit

    @classmethod
    def from_frequency(cls, frequency: Frequency) -> "Period":
        """Natural period of a payment frequency (Semiannual -> 6M, ...)."""
        mapping = {
            Frequency.ANNUAL: cls(1, TimeUnit.YEARS),
            Frequency.SEMIANNUAL: cls(6, TimeUnit.MONTHS),
            Frequency.EVERY_FOURTH_MONTH: cls(4, TimeUnit.MONTHS),
            Frequency.QUARTERLY: cls(3, TimeUnit.MONTHS),
            Frequency.BIMONTHLY: cls(2, TimeUnit.MONTHS),
            Frequency.MONTHLY: cls(1, TimeUnit.MONTHS),
            Frequency.BIWEEKLY: cls(2, TimeUnit.WEEKS),
            Frequency.WEEKLY: cls(1, TimeUnit.WEEKS),
            Frequency.DAILY: cls(1, TimeUnit.DAYS),
        }
        if frequency not in mapping:
            raise InvalidValueError(f"No natural period for frequency {frequency.name}")
        return mapping[frequency]

    @classmethod
    def parse(cls, text: str) -> "Period":
        """Parse tenors such as ``"3M"``, ``"10Y"`` or ``"1D"``."""
        text = text.strip().upper()
        try:
            unit = TimeUnit(text[-1])
            length = int(text[:-1])
        except (ValueError, IndexError) as exc:
            raise InvalidValueError(f"Invalid period string: {text!r}") from exc
        return cls(length, unit)

    def to_relativedelta(self) -> relativedelta:
        if self.unit == TimeUnit.DAYS:
            return relativedelta(days=self.length)
        if self.unit == TimeUnit.WEEKS:
            return relativedelta(weeks=self.length)
        if self.unit == TimeUnit.MONTHS:
            return relativedelta(months=self.length)
        return relativedelta(years=self.length)

    def __neg__(self) -> "Period":
        return Period(-self.length, self.unit)

    def __mul__(self, n: int) -> "Period":
        return Period(self.length * n, self.unit)

    __rmul__ = __mul__

    def __radd__(self, other: date) -> date:
        if isinstance(other, date):
            return to_date(other) + self.to_relativedelta()
        return NotImplemented

    def __rsub__(self, other: date) -> date:
        if isinstance(other, date):
            return to_date(other) - self.to_relativedelta()
        return NotImplemented

    def __str__(self) -> str:
        return f"{self.length}{self.unit.value}"


def advance(dt: date, n: int, unit: TimeUnit) -> date:
    """Move ``dt`` by ``n`` units."""
    return dt + Period(n, unit)


def days_between(start: date, end: date) -> int:
    return (end - start).days
