"""
Discount factor curve interpolated over year fractions.
"""
import logging
from datetime import date, timedelta
from typing import Callable, List, Sequence, Union

from ficcalm.conventions.daycount import ACT_360, DayCounter
from ficcalm.conventions.period import Period
from ficcalm.errors import InvalidValueError
from ficcalm.interpolation import InterpolationMethod, create_interpolator

from .base import YieldTermStructure

logger = logging.getLogger(__name__)


class DiscountTermStructure(YieldTermStructure):
    """
    Curve defined by pillar dates and the discount factors at those dates.

    The first pillar is the reference date and carries a discount factor of
    exactly 1.0.
    """

    def __init__(
        self,
        dates: Sequence[date],
        discount_factors: Sequence[float],
        day_counter: DayCounter = ACT_360,
        interpolation: Union[str, InterpolationMethod] = InterpolationMethod.LINEAR,
        allow_extrapolation: bool = False,
        name: str = "",
    ):
        """
        Initialize discount curve.

        Args:
            dates: Pillar dates, strictly ascending; ``dates[0]`` is the reference date
            discount_factors: Discount factors at the pillars; the first must be 1.0
            day_counter: Day counter converting dates to interpolation times
            interpolation: Interpolation method over discount factors
            allow_extrapolation: Whether dates past the last pillar are allowed
            name: Curve name
        """
        if len(dates) != len(discount_factors):
            raise InvalidValueError("Dates and discount factors must have same length")
        if len(dates) < 2:
            raise InvalidValueError("Need at least 2 pillar points")
        if discount_factors[0] != 1.0:
            raise InvalidValueError(
                f"First discount factor must be 1.0, got {discount_factors[0]}"
            )
        for i, df in enumerate(discount_factors):
            if df <= 0:
                raise InvalidValueError(f"Discount factor at pillar {i} must be positive: {df}")
        for i in range(1, len(dates)):
            if dates[i] <= dates[i - 1]:
                raise InvalidValueError("Dates must be strictly ascending")
            increase = discount_factors[i] - discount_factors[i - 1]
            if increase > 1e-6:
                logger.warning(
                    "Discount factors increasing at pillar %s (increase = %.8f)", i, increase
                )

        super().__init__(dates[0], day_counter, name)
        self.dates: List[date] = list(dates)
        self.discount_factors: List[float] = list(discount_factors)
        self.interpolation = interpolation
        self.allow_extrapolation = allow_extrapolation

        pillar_times = [day_counter.year_fraction(dates[0], d) for d in dates]
        self.interpolator = create_interpolator(
            interpolation, pillar_times, self.discount_factors, allow_extrapolation
        )

    def _discount_factor(self, dt: date) -> float:
        return self.interpolator.interpolate(self.year_fraction(dt))

    def _extrapolated_discount_factor(self, dt: date) -> float:
        if dt == self.reference_date:
            return 1.0
        return self.interpolator.interpolate(self.year_fraction(dt), allow_extrapolation=True)

    def _shifted(self, new_reference: date, shift: Callable[[date], date]) -> "DiscountTermStructure":
        self._check_advance(new_reference)
        new_dates = [shift(d) for d in self.dates]
        anchor = self._extrapolated_discount_factor(new_reference)
        new_dfs = [1.0] + [
            self._extrapolated_discount_factor(d) / anchor for d in new_dates[1:]
        ]
        logger.debug(
            "Advanced discount curve %s from %s to %s", self.name, self.reference_date, new_reference
        )
        return DiscountTermStructure(
            new_dates,
            new_dfs,
            self.day_counter,
            self.interpolation,
            self.allow_extrapolation,
            self.name,
        )

    def advance_to_date(self, dt: date) -> "DiscountTermStructure":
        offset = timedelta(days=(dt - self.reference_date).days)
        return self._shifted(dt, lambda d: d + offset)

    def advance_to_period(self, period: Period) -> "DiscountTermStructure":
        return self._shifted(self.reference_date + period, lambda d: d + period)

    def __repr__(self) -> str:
        return (
            f"DiscountTermStructure(dates={self.dates}, "
            f"discount_factors={self.discount_factors}, "
            f"day_counter={self.day_counter}, interpolation={self.interpolation!r})"
        )
