"""
Composite curve: a spread curve stacked on top of a base curve.
"""
from datetime import date

from ficcalm.conventions.period import Period
from ficcalm.conventions.types import Frequency
from ficcalm.errors import InvalidValueError
from ficcalm.rates.interestrate import Compounding

from .base import YieldTermStructure


class CompositeTermStructure(YieldTermStructure):
    """
    Discount factors multiply and forward rates add.

    DF(d) = DF_spread(d) * DF_base(d); the reference date is the base curve's.
    """

    def __init__(self, spread_curve: YieldTermStructure, base_curve: YieldTermStructure, name: str = ""):
        super().__init__(base_curve.reference_date, base_curve.day_counter, name)
        self.spread_curve = spread_curve
        self.base_curve = base_curve

    def discount_factor(self, dt: date) -> float:
        if dt < self.reference_date:
            raise InvalidValueError(
                f"Date {dt} is before the curve reference date {self.reference_date}"
            )
        return self.spread_curve.discount_factor(dt) * self.base_curve.discount_factor(dt)

    def _discount_factor(self, dt: date) -> float:
        return self.discount_factor(dt)

    def forward_rate(
        self,
        start: date,
        end: date,
        compounding: Compounding,
        frequency: Frequency,
    ) -> float:
        return self.spread_curve.forward_rate(
            start, end, compounding, frequency
        ) + self.base_curve.forward_rate(start, end, compounding, frequency)

    def advance_to_date(self, dt: date) -> "CompositeTermStructure":
        self._check_advance(dt)
        return CompositeTermStructure(
            self.spread_curve.advance_to_date(dt), self.base_curve.advance_to_date(dt), self.name
        )

    def advance_to_period(self, period: Period) -> "CompositeTermStructure":
        return CompositeTermStructure(
            self.spread_curve.advance_to_period(period),
            self.base_curve.advance_to_period(period),
            self.name,
        )

    def __repr__(self) -> str:
        return f"CompositeTermStructure(spread_curve={self.spread_curve!r}, base_curve={self.base_curve!r})"
