"""
Overnight index whose history is stored as compounded index levels.
"""

import logging
from datetime import date
from typing import List, Mapping, Optional, Tuple

from ficcalm.conventions.types import Frequency
from ficcalm.curves.base import YieldTermStructure
from ficcalm.errors import EvaluationError, InvalidValueError, NotFoundError
from ficcalm.rates.interestrate import Compounding, InterestRate, RateDefinition

from .base import InterestRateIndex

logger = logging.getLogger(__name__)

# (last known day, last projected day, curve, level on the last known day)
Projection = Tuple[date, date, YieldTermStructure, float]


class OvernightIndex(InterestRateIndex):
    """
    Overnight index with fixings given as index levels (e.g. 100.0, 100.0137, ...).

    The average rate between two dates is implied by the ratio of the levels.
    """

    def __init__(
        self,
        term_structure: Optional[YieldTermStructure] = None,
        fixings: Optional[Mapping[date, float]] = None,
        rate_definition: Optional[RateDefinition] = None,
        name: str = "",
    ):
        super().__init__(term_structure, fixings, rate_definition, name)
        self._projections: List[Projection] = []

    def past_fixing(self, dt: date) -> Optional[float]:
        level = self._fixings.get(dt)
        if level is not None:
            return level
        for first, last, curve, base_level in self._projections:
            if first < dt <= last:
                # level(d+1) = level(d) * DF(d) / DF(d+1) telescopes to this
                level = base_level / curve.discount_factor(dt)
                self._fixings.setdefault(dt, level)
                return level
        return None

    def _level(self, dt: date) -> float:
        level = self.past_fixing(dt)
        if level is None:
            raise EvaluationError(f"No index level for {self.name or 'OvernightIndex'} on {dt}")
        return level

    def _implied(
        self, compound: float, start: date, end: date, compounding: Compounding, frequency: Frequency
    ) -> float:
        day_counter = self.rate_definition.day_counter
        return InterestRate.implied_rate(
            compound, day_counter, compounding, frequency, day_counter.year_fraction(start, end)
        ).rate

    def average_rate(
        self,
        start: date,
        end: date,
        compounding: Optional[Compounding] = None,
        frequency: Optional[Frequency] = None,
    ) -> float:
        """Rate implied by ``level(end) / level(start)``."""
        compounding = compounding or self.rate_definition.compounding
        frequency = frequency or self.rate_definition.frequency
        compound = self._level(end) / self._level(start)
        return self._implied(compound, start, end, compounding, frequency)

    def realised_rate(
        self, start: date, end: date, compounding: Compounding, frequency: Frequency
    ) -> Optional[float]:
        if self.past_fixing(start) is None:
            return None
        return self.forward_rate(start, end, compounding, frequency)

    def forward_rate(
        self, start: date, end: date, compounding: Compounding, frequency: Frequency
    ) -> float:
        if end <= start:
            raise InvalidValueError(f"End date {end} must be after start date {start}")
        ref = self.reference_date
        if end <= ref:
            return self.average_rate(start, end, compounding, frequency)
        if start < ref:
            projected_end = self._level(ref) / self.term_structure().discount_factor(end)
            compound = projected_end / self._level(start)
            return self._implied(compound, start, end, compounding, frequency)
        return self.term_structure().forward_rate(start, end, compounding, frequency)

    def advance_to_date(self, dt: date) -> "OvernightIndex":
        """
        Roll the index to ``dt``, extending the level series day by day with
        ``level(d + 1) = level(d) * DF(d) / DF(d + 1)`` on the pre-advance curve.
        """
        self._check_advance(dt)
        curve = self.term_structure()
        ref = self.reference_date
        advanced = OvernightIndex(
            curve.advance_to_date(dt), self._fixings, self.rate_definition, self.name
        )
        advanced._projections = list(self._projections)
        if dt > ref:
            base_level = self.past_fixing(ref)
            if base_level is None:
                raise NotFoundError(
                    f"Cannot advance {self.name or 'OvernightIndex'}: no level on {ref}"
                )
            advanced._projections.append((ref, dt, curve, base_level))
        logger.debug("Advanced %s from %s to %s", self, ref, dt)
        return advanced
