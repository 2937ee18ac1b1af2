"""
Interest rate primitive: compound factors, discount factors and the
analytic inverse (implied rate) for every compounding convention.
"""

import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from ficcalm.conventions.daycount import ACT_360, DayCounter
from ficcalm.conventions.types import Frequency
from ficcalm.errors import InvalidValueError


class Compounding(Enum):
    """Compounding conventions."""

    SIMPLE = "SIMPLE"
    COMPOUNDED = "COMPOUNDED"
    CONTINUOUS = "CONTINUOUS"
    SIMPLE_THEN_COMPOUNDED = "SIMPLE_THEN_COMPOUNDED"
    COMPOUNDED_THEN_SIMPLE = "COMPOUNDED_THEN_SIMPLE"


@dataclass(frozen=True)
class RateDefinition:
    """How a rate value is quoted: (day counter, compounding, frequency)."""

    day_counter: DayCounter = field(default_factory=lambda: ACT_360)
    compounding: Compounding = Compounding.SIMPLE
    frequency: Frequency = Frequency.ANNUAL


@dataclass(frozen=True)
class InterestRate:
    """A rate value together with its quoting conventions."""

    rate: float
    compounding: Compounding = Compounding.SIMPLE
    frequency: Frequency = Frequency.ANNUAL
    day_counter: DayCounter = field(default_factory=lambda: ACT_360)

    @classmethod
    def from_rate_definition(cls, rate: float, definition: RateDefinition) -> "InterestRate":
        return cls(rate, definition.compounding, definition.frequency, definition.day_counter)

    @property
    def rate_definition(self) -> RateDefinition:
        return RateDefinition(self.day_counter, self.compounding, self.frequency)

    def with_rate(self, rate: float) -> "InterestRate":
        return InterestRate(rate, self.compounding, self.frequency, self.day_counter)

    def compound_factor_from_yf(self, year_fraction: float) -> float:
        """Growth of one unit over ``year_fraction`` years."""
        r = self.rate
        t = year_fraction
        comp = self.compounding
        if comp == Compounding.SIMPLE:
            return 1.0 + r * t
        if comp == Compounding.CONTINUOUS:
            return math.exp(r * t)

        f = self.frequency.per_year()
        if comp == Compounding.COMPOUNDED:
            return (1.0 + r / f) ** (f * t)
        if comp == Compounding.SIMPLE_THEN_COMPOUNDED:
            if t <= 1.0 / f:
                return 1.0 + r * t
            return (1.0 + r / f) ** (f * t)
        if comp == Compounding.COMPOUNDED_THEN_SIMPLE:
            if t <= 1.0 / f:
                return (1.0 + r / f) ** (f * t)
            return 1.0 + r * t
        raise InvalidValueError(f"Unknown compounding: {comp}")

    def compound_factor(self, start: date, end: date) -> float:
        return self.compound_factor_from_yf(self.day_counter.year_fraction(start, end))

    def discount_factor(self, start: date, end: date) -> float:
        return 1.0 / self.compound_factor(start, end)

    def discount_factor_from_yf(self, year_fraction: float) -> float:
        return 1.0 / self.compound_factor_from_yf(year_fraction)

    @staticmethod
    def implied_rate(
        compound: float,
        day_counter: DayCounter,
        compounding: Compounding,
        frequency: Frequency,
        year_fraction: float,
    ) -> "InterestRate":
        """
        Rate that reproduces ``compound`` over ``year_fraction`` years.

        Raises:
            InvalidValueError: if ``compound <= 0`` or ``year_fraction <= 0``
        """
        if compound <= 0.0:
            raise InvalidValueError(f"Positive compound factor required, got {compound}")
        if year_fraction <= 0.0:
            raise InvalidValueError(f"Positive year fraction required, got {year_fraction}")

        if compound == 1.0:
            return InterestRate(0.0, compounding, frequency, day_counter)

        t = year_fraction
        if compounding == Compounding.SIMPLE:
            r = (compound - 1.0) / t
        elif compounding == Compounding.CONTINUOUS:
            r = math.log(compound) / t
        else:
            f = frequency.per_year()
            if compounding == Compounding.COMPOUNDED:
                r = (compound ** (1.0 / (f * t)) - 1.0) * f
            elif compounding == Compounding.SIMPLE_THEN_COMPOUNDED:
                if t <= 1.0 / f:
                    r = (compound - 1.0) / t
                else:
                    r = (compound ** (1.0 / (f * t)) - 1.0) * f
            elif compounding == Compounding.COMPOUNDED_THEN_SIMPLE:
                if t <= 1.0 / f:
                    r = (compound ** (1.0 / (f * t)) - 1.0) * f
                else:
                    r = (compound - 1.0) / t
            else:
                raise InvalidValueError(f"Unknown compounding: {compounding}")
        return InterestRate(r, compounding, frequency, day_counter)

    def __str__(self) -> str:
        return (
            f"{self.rate:.6%} {self.day_counter} {self.compounding.value.lower()}"
            f" {self.frequency.name.lower()}"
        )
