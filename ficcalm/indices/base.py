"""
Common behaviour of interest rate indices.
"""

import logging
from abc import ABC, abstractmethod
from datetime import date
from typing import Dict, Mapping, Optional

from ficcalm.conventions.period import Period
from ficcalm.conventions.types import Frequency
from ficcalm.curves.base import YieldTermStructure
from ficcalm.errors import InvalidValueError, NotFoundError
from ficcalm.rates.interestrate import Compounding, RateDefinition

logger = logging.getLogger(__name__)


class InterestRateIndex(ABC):
    """A projection curve plus the realised history of the index.

    The reference date is the curve's reference date when a curve is
    attached, otherwise the latest fixing date.
    """

    def __init__(
        self,
        term_structure: Optional[YieldTermStructure] = None,
        fixings: Optional[Mapping[date, float]] = None,
        rate_definition: Optional[RateDefinition] = None,
        name: str = "",
    ):
        self._term_structure = term_structure
        self._fixings: Dict[date, float] = dict(fixings or {})
        self.rate_definition = rate_definition or RateDefinition()
        self.name = name

        if term_structure is None and not self._fixings:
            raise InvalidValueError("An index needs a term structure or fixings")
        latest = max(self._fixings) if self._fixings else None
        if term_structure is not None and latest is not None and latest > term_structure.reference_date:
            raise InvalidValueError(
                f"Fixing on {latest} is after the curve reference date {term_structure.reference_date}"
            )

    @property
    def reference_date(self) -> date:
        if self._term_structure is not None:
            return self._term_structure.reference_date
        return max(self._fixings)

    def term_structure(self) -> YieldTermStructure:
        if self._term_structure is None:
            raise NotFoundError(f"No term structure attached to index {self.name or self.__class__.__name__}")
        return self._term_structure

    @property
    def frequency(self) -> Frequency:
        return self.rate_definition.frequency

    @property
    def fixings(self) -> Dict[date, float]:
        return dict(self._fixings)

    def add_fixing(self, dt: date, value: float) -> None:
        if dt > self.reference_date:
            raise InvalidValueError(
                f"Fixing date {dt} is after the index reference date {self.reference_date}"
            )
        self._fixings[dt] = value

    def past_fixing(self, dt: date) -> Optional[float]:
        """Historical fixing on ``dt``, or None when there is none."""
        return self._fixings.get(dt)

    @abstractmethod
    def realised_rate(
        self, start: date, end: date, compounding: Compounding, frequency: Frequency
    ) -> Optional[float]:
        """
        Rate for an accrual period that started on ``start``, taken from the
        index history; None when the history does not cover ``start``.
        """

    def discount_factor(self, dt: date) -> float:
        return self.term_structure().discount_factor(dt)

    @abstractmethod
    def forward_rate(
        self, start: date, end: date, compounding: Compounding, frequency: Frequency
    ) -> float:
        """Rate over ``[start, end]``, from fixings where the period has started."""

    @abstractmethod
    def advance_to_date(self, dt: date) -> "InterestRateIndex":
        """Index rolled to ``dt``; the elapsed days become fixings."""

    def advance_to_period(self, period: Period) -> "InterestRateIndex":
        return self.advance_to_date(self.reference_date + period)

    def _check_advance(self, dt: date) -> None:
        if dt < self.reference_date:
            raise InvalidValueError(
                f"Cannot advance index dated {self.reference_date} back to {dt}"
            )

    def __str__(self) -> str:
        return f"{self.__class__.__name__}({self.name}) @ {self.reference_date}"
