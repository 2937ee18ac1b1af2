"""
Flat forward curve.
"""
from datetime import date
from typing import Optional

from ficcalm.rates.interestrate import InterestRate, RateDefinition

from .base import YieldTermStructure


class FlatForwardTermStructure(YieldTermStructure):
    """Single rate applied from the reference date to every horizon."""

    def __init__(
        self,
        reference_date: date,
        rate: float,
        rate_definition: Optional[RateDefinition] = None,
        name: str = "",
    ):
        rate_definition = rate_definition or RateDefinition()
        super().__init__(reference_date, rate_definition.day_counter, name)
        self.rate_definition = rate_definition
        self.interest_rate = InterestRate.from_rate_definition(rate, rate_definition)

    @property
    def rate(self) -> float:
        return self.interest_rate.rate

    def _discount_factor(self, dt: date) -> float:
        return self.interest_rate.discount_factor(self.reference_date, dt)

    def advance_to_date(self, dt: date) -> "FlatForwardTermStructure":
        # the rate is kept; only the anchor moves
        self._check_advance(dt)
        return FlatForwardTermStructure(dt, self.rate, self.rate_definition, self.name)

    def __repr__(self) -> str:
        return (
            f"FlatForwardTermStructure(reference_date={self.reference_date}, "
            f"rate={self.rate}, rate_definition={self.rate_definition})"
        )
