"""
Term (IBOR-style) rate index.
"""

import logging
from datetime import date, timedelta
from typing import List, Mapping, Optional, Tuple

from ficcalm.conventions.period import Period
from ficcalm.conventions.types import Frequency
from ficcalm.curves.base import YieldTermStructure
from ficcalm.errors import EvaluationError, InvalidValueError
from ficcalm.rates.interestrate import Compounding, RateDefinition

from .base import InterestRateIndex

logger = logging.getLogger(__name__)

# (first day, last day, curve used to project fixings on those days)
Projection = Tuple[date, date, YieldTermStructure]


class IborIndex(InterestRateIndex):
    """
    Index fixing once per period of length ``tenor``.

    Periods that started before the reference date are priced with the fixing
    observed on the period start; later periods use the curve forward.
    """

    def __init__(
        self,
        term_structure: Optional[YieldTermStructure] = None,
        fixings: Optional[Mapping[date, float]] = None,
        rate_definition: Optional[RateDefinition] = None,
        tenor: Optional[Period] = None,
        name: str = "",
    ):
        super().__init__(term_structure, fixings, rate_definition, name)
        self.tenor = tenor or Period.from_frequency(self.rate_definition.frequency)
        self._projections: List[Projection] = []

    def past_fixing(self, dt: date) -> Optional[float]:
        fixing = self._fixings.get(dt)
        if fixing is not None:
            return fixing
        for first, last, curve in self._projections:
            if first <= dt <= last:
                rd = self.rate_definition
                fixing = curve.forward_rate(dt, dt + self.tenor, rd.compounding, rd.frequency)
                self._fixings.setdefault(dt, fixing)
                return fixing
        return None

    def realised_rate(
        self, start: date, end: date, compounding: Compounding, frequency: Frequency
    ) -> Optional[float]:
        return self.past_fixing(start)

    def forward_rate(
        self, start: date, end: date, compounding: Compounding, frequency: Frequency
    ) -> float:
        if end < start:
            raise InvalidValueError(f"End date {end} must not be before start date {start}")
        if start < self.reference_date:
            fixing = self.past_fixing(start)
            if fixing is None:
                raise EvaluationError(f"No fixing for {self.name or 'IborIndex'} on {start}")
            return fixing
        return self.term_structure().forward_rate(start, end, compounding, frequency)

    def advance_to_date(self, dt: date) -> "IborIndex":
        """
        Roll the index to ``dt``.

        Every calendar day from the current reference date through ``dt``
        receives a fixing equal to the pre-advance curve's forward over
        ``(day, day + tenor)``. Fixings are projected on first use.
        """
        self._check_advance(dt)
        curve = self.term_structure()
        advanced = IborIndex(
            curve.advance_to_date(dt),
            self._fixings,
            self.rate_definition,
            self.tenor,
            self.name,
        )
        advanced._projections = list(self._projections)
        if dt > self.reference_date:
            advanced._projections.append((self.reference_date, dt, curve))
        logger.debug("Advanced %s from %s to %s", self, self.reference_date, dt)
        return advanced

    def projected_fixing_days(self) -> List[date]:
        """Days whose fixings come from a pre-advance curve."""
        days = []
        for first, last, _ in self._projections:
            n = (last - first).days
            days.extend(first + timedelta(days=i) for i in range(n + 1))
        return days
