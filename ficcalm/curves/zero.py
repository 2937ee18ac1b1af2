"""
Zero rate curves: pillars given as dates or as tenors from the reference date.
"""
import logging
from datetime import date, timedelta
from typing import Callable, List, Optional, Sequence, Union

from ficcalm.conventions.period import Period
from ficcalm.errors import InvalidValueError
from ficcalm.interpolation import InterpolationMethod, create_interpolator
from ficcalm.rates.interestrate import InterestRate, RateDefinition

from .base import YieldTermStructure

logger = logging.getLogger(__name__)


class _InterpolatedZeroCurve(YieldTermStructure):
    """Zero rates quoted under ``rate_definition`` and interpolated over time."""

    def __init__(
        self,
        reference_date: date,
        pillar_dates: Sequence[date],
        rates: Sequence[float],
        rate_definition: Optional[RateDefinition],
        interpolation: Union[str, InterpolationMethod],
        allow_extrapolation: bool,
        name: str,
    ):
        rate_definition = rate_definition or RateDefinition()
        if len(pillar_dates) != len(rates):
            raise InvalidValueError("Dates and rates must have same length")
        super().__init__(reference_date, rate_definition.day_counter, name)
        self.rate_definition = rate_definition
        self.rates: List[float] = list(rates)
        self.interpolation = interpolation
        self.allow_extrapolation = allow_extrapolation

        pillar_times = [self.year_fraction(d) for d in pillar_dates]
        self.interpolator = create_interpolator(
            interpolation, pillar_times, self.rates, allow_extrapolation
        )

    def zero_rate(self, dt: date, allow_extrapolation: Optional[bool] = None) -> float:
        return self.interpolator.interpolate(self.year_fraction(dt), allow_extrapolation)

    def _discount_factor(self, dt: date) -> float:
        return self._df(dt, None)

    def _df(self, dt: date, allow_extrapolation: Optional[bool]) -> float:
        if dt == self.reference_date:
            return 1.0
        t = self.year_fraction(dt)
        rate = InterestRate.from_rate_definition(
            self.interpolator.interpolate(t, allow_extrapolation), self.rate_definition
        )
        return rate.discount_factor_from_yf(t)

    def _rolled_rates(self, new_reference: date, new_pillars: Sequence[date]) -> List[float]:
        """Zero rates seen from ``new_reference`` keeping forward dynamics."""
        anchor = self._df(new_reference, True)
        definition = self.rate_definition
        rolled: List[Optional[float]] = []
        for d in new_pillars:
            t = definition.day_counter.year_fraction(new_reference, d)
            if t <= 0:
                rolled.append(None)
                continue
            compound = anchor / self._df(d, True)
            rolled.append(
                InterestRate.implied_rate(
                    compound, definition.day_counter, definition.compounding, definition.frequency, t
                ).rate
            )
        # pillars at the new reference date take the first rolled rate
        first = next((r for r in rolled if r is not None), None)
        if first is None:
            raise InvalidValueError("Advanced curve has no pillar after its reference date")
        return [first if r is None else r for r in rolled]


class ZeroRateTermStructure(_InterpolatedZeroCurve):
    """Zero rate curve with explicit pillar dates; ``dates[0]`` is the reference date."""

    def __init__(
        self,
        reference_date: date,
        dates: Sequence[date],
        rates: Sequence[float],
        rate_definition: Optional[RateDefinition] = None,
        interpolation: Union[str, InterpolationMethod] = InterpolationMethod.LINEAR,
        allow_extrapolation: bool = False,
        name: str = "",
    ):
        if not dates or dates[0] != reference_date:
            raise InvalidValueError("First pillar date must equal the reference date")
        super().__init__(
            reference_date, dates, rates, rate_definition, interpolation, allow_extrapolation, name
        )
        self.dates: List[date] = list(dates)

    def _shifted(self, new_reference: date, shift: Callable[[date], date]) -> "ZeroRateTermStructure":
        self._check_advance(new_reference)
        new_dates = [shift(d) for d in self.dates]
        logger.debug("Advanced zero curve %s from %s to %s", self.name, self.reference_date, new_reference)
        return ZeroRateTermStructure(
            new_reference,
            new_dates,
            self._rolled_rates(new_reference, new_dates),
            self.rate_definition,
            self.interpolation,
            self.allow_extrapolation,
            self.name,
        )

    def advance_to_date(self, dt: date) -> "ZeroRateTermStructure":
        offset = timedelta(days=(dt - self.reference_date).days)
        return self._shifted(dt, lambda d: d + offset)

    def advance_to_period(self, period: Period) -> "ZeroRateTermStructure":
        return self._shifted(self.reference_date + period, lambda d: d + period)


class TenorBasedZeroRateTermStructure(_InterpolatedZeroCurve):
    """Zero rate curve whose pillars are tenors counted from the reference date.

    Often used as the spread leg of a :class:`CompositeTermStructure`.
    """

    def __init__(
        self,
        reference_date: date,
        tenors: Sequence[Period],
        rates: Sequence[float],
        rate_definition: Optional[RateDefinition] = None,
        interpolation: Union[str, InterpolationMethod] = InterpolationMethod.LINEAR,
        allow_extrapolation: bool = False,
        name: str = "",
    ):
        self.tenors: List[Period] = list(tenors)
        pillar_dates = [reference_date + tenor for tenor in self.tenors]
        super().__init__(
            reference_date,
            pillar_dates,
            rates,
            rate_definition,
            interpolation,
            allow_extrapolation,
            name,
        )

    @property
    def spreads(self) -> List[float]:
        return self.rates

    def advance_to_date(self, dt: date) -> "TenorBasedZeroRateTermStructure":
        self._check_advance(dt)
        new_pillars = [dt + tenor for tenor in self.tenors]
        return TenorBasedZeroRateTermStructure(
            dt,
            self.tenors,
            self._rolled_rates(dt, new_pillars),
            self.rate_definition,
            self.interpolation,
            self.allow_extrapolation,
            self.name,
        )
