"""
Yield term structure contract shared by every curve.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Protocol, runtime_checkable

from ficcalm.conventions.daycount import DayCounter
from ficcalm.conventions.period import Period
from ficcalm.conventions.types import Frequency
from ficcalm.errors import InvalidValueError
from ficcalm.rates.interestrate import Compounding, InterestRate


@runtime_checkable
class YieldProvider(Protocol):
    """Anything that can discount and project rates from a reference date."""

    @property
    def reference_date(self) -> date:
        ...

    def discount_factor(self, dt: date) -> float:
        ...

    def forward_rate(
        self, start: date, end: date, compounding: Compounding, frequency: Frequency
    ) -> float:
        ...


class YieldTermStructure(ABC):
    """Base implementation for yield curves.

    Subclasses provide ``_discount_factor`` for dates strictly after the
    reference date and ``advance_to_date``. Advancing never mutates a curve; it
    returns a new one dated at the later reference date whose discount factors
    are ``DF_old(x) / DF_old(new_reference_date)``.
    """

    def __init__(self, reference_date: date, day_counter: DayCounter, name: str = ""):
        self._reference_date = reference_date
        self.day_counter = day_counter
        self.name = name

    @property
    def reference_date(self) -> date:
        return self._reference_date

    def discount_factor(self, dt: date) -> float:
        """Discount factor from the reference date to ``dt``."""
        if dt < self._reference_date:
            raise InvalidValueError(
                f"Date {dt} is before the curve reference date {self._reference_date}"
            )
        if dt == self._reference_date:
            return 1.0
        return self._discount_factor(dt)

    @abstractmethod
    def _discount_factor(self, dt: date) -> float:
        """Discount factor for ``dt > reference_date``."""

    def forward_rate(
        self,
        start: date,
        end: date,
        compounding: Compounding,
        frequency: Frequency,
    ) -> float:
        """Forward rate between ``start`` and ``end`` implied by the curve."""
        if end <= start:
            raise InvalidValueError(f"Forward end {end} must be after start {start}")
        compound = self.discount_factor(start) / self.discount_factor(end)
        year_fraction = self.day_counter.year_fraction(start, end)
        return InterestRate.implied_rate(
            compound, self.day_counter, compounding, frequency, year_fraction
        ).rate

    def year_fraction(self, dt: date) -> float:
        return self.day_counter.year_fraction(self._reference_date, dt)

    @abstractmethod
    def advance_to_date(self, dt: date) -> "YieldTermStructure":
        """Curve rolled forward to reference date ``dt``."""

    def advance_to_period(self, period: Period) -> "YieldTermStructure":
        """Curve rolled forward by ``period``."""
        return self.advance_to_date(self._reference_date + period)

    def _check_advance(self, dt: date) -> None:
        if dt < self._reference_date:
            raise InvalidValueError(
                f"Cannot advance curve dated {self._reference_date} back to {dt}"
            )

    def __str__(self) -> str:
        label = f"{self.__class__.__name__}({self.name})" if self.name else self.__class__.__name__
        return f"{label} @ {self._reference_date}"
