"""
Fixed against floating interest rate swap.

A swap is two instruments sharing a notional, start and end date. Only the
coupons are exchanged; the principal flows of the legs stay on the leg
objects and never reach the swap's cash-flow list.
"""

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import List, Optional

from ficcalm.cashflows.cashflow import Cashflow, FixedRateCoupon, FloatingRateCoupon
from ficcalm.cashflows.types import Side
from ficcalm.conventions.calendars import NULL_CALENDAR, Calendar
from ficcalm.conventions.period import Period
from ficcalm.conventions.types import BusinessDayAdjustment, Frequency
from ficcalm.currencies.currency import Currency
from ficcalm.rates.interestrate import InterestRate, RateDefinition

from .builders import _require, _resolve_end_date, make_fixed_rate_instrument, make_floating_rate_instrument
from .instrument import FixedRateInstrument, FloatingRateInstrument, Instrument
from .types import PositionType, Structure

logger = logging.getLogger(__name__)


def _leg_coupons(leg: Instrument) -> List[Cashflow]:
    return [cf for cf in leg.cashflows if isinstance(cf, (FixedRateCoupon, FloatingRateCoupon))]


@dataclass
class FixFloatSwap(Instrument):
    """
    ``side`` is the side of the fixed leg: RECEIVE is a receiver swap. The
    cash-flow list holds the fixed leg coupons followed by the floating leg
    coupons; they are the same objects the legs hold.
    """

    fixed_leg: Optional[FixedRateInstrument] = None
    floating_leg: Optional[FloatingRateInstrument] = None

    @property
    def rate(self) -> InterestRate:
        return self.fixed_leg.rate

    @property
    def spread(self) -> float:
        return self.floating_leg.spread

    @property
    def forecast_curve_id(self) -> Optional[int]:
        return self.floating_leg.forecast_curve_id

    def fixed_leg_cashflows(self) -> List[Cashflow]:
        return _leg_coupons(self.fixed_leg)

    def floating_leg_cashflows(self) -> List[Cashflow]:
        return _leg_coupons(self.floating_leg)

    def _with_legs(self, fixed_leg: FixedRateInstrument, floating_leg: FloatingRateInstrument) -> "FixFloatSwap":
        return replace(
            self,
            fixed_leg=fixed_leg,
            floating_leg=floating_leg,
            cashflows=_leg_coupons(fixed_leg) + _leg_coupons(floating_leg),
        )

    def with_rate(self, rate: float) -> "FixFloatSwap":
        """Copy paying ``rate`` on the fixed leg; both legs are copied."""
        return self._with_legs(self.fixed_leg.with_rate(rate), self.floating_leg.with_spread(self.spread))

    def with_spread(self, spread: float) -> "FixFloatSwap":
        """Copy paying ``spread`` over the index on the floating leg."""
        return self._with_legs(self.fixed_leg.with_rate(self.rate.rate), self.floating_leg.with_spread(spread))


def make_fix_float_swap(
    *,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    tenor: Optional[Period] = None,
    notional: Optional[float] = None,
    fixed_rate: Optional[float] = None,
    spread: float = 0.0,
    fixed_rate_definition: Optional[RateDefinition] = None,
    floating_rate_definition: Optional[RateDefinition] = None,
    fixed_payment_frequency: Optional[Frequency] = None,
    floating_payment_frequency: Optional[Frequency] = None,
    side: Side = Side.RECEIVE,
    currency: Currency = Currency.USD,
    discount_curve_id: Optional[int] = None,
    forecast_curve_id: Optional[int] = None,
    calendar: Calendar = NULL_CALENDAR,
    adjustment: BusinessDayAdjustment = BusinessDayAdjustment.NO_ADJUSTMENT,
    id: Optional[str] = None,
    position_type: PositionType = PositionType.BASE,
) -> FixFloatSwap:
    """
    Build a fixed/floating swap on a constant notional.

    Args:
        side: Side of the fixed leg; the floating leg takes the inverse
        floating_payment_frequency: Defaults to the fixed leg frequency

    Raises:
        ValueNotSetError: if a required field is missing
    """
    end_date = _resolve_end_date(start_date, end_date, tenor)
    _require(
        start_date=start_date,
        end_date=end_date,
        notional=notional,
        fixed_rate=fixed_rate,
        fixed_payment_frequency=fixed_payment_frequency,
        forecast_curve_id=forecast_curve_id,
    )
    common = dict(
        start_date=start_date,
        end_date=end_date,
        notional=notional,
        structure=Structure.BULLET,
        currency=currency,
        discount_curve_id=discount_curve_id,
        calendar=calendar,
        adjustment=adjustment,
        position_type=position_type,
    )
    fixed_leg = make_fixed_rate_instrument(
        rate=fixed_rate,
        rate_definition=fixed_rate_definition,
        payment_frequency=fixed_payment_frequency,
        side=side,
        id=None if id is None else f"{id}/fixed",
        **common,
    )
    floating_leg = make_floating_rate_instrument(
        spread=spread,
        rate_definition=floating_rate_definition,
        payment_frequency=floating_payment_frequency or fixed_payment_frequency,
        side=side.inverse(),
        forecast_curve_id=forecast_curve_id,
        id=None if id is None else f"{id}/floating",
        **common,
    )
    swap = FixFloatSwap(
        start_date=start_date,
        end_date=end_date,
        notional=notional,
        payment_frequency=fixed_payment_frequency,
        structure=Structure.BULLET,
        side=side,
        currency=currency,
        discount_curve_id=discount_curve_id,
        cashflows=_leg_coupons(fixed_leg) + _leg_coupons(floating_leg),
        id=id,
        position_type=position_type,
        fixed_leg=fixed_leg,
        floating_leg=floating_leg,
    )
    logger.debug("Built fix/float swap %s with %s coupons", id, len(swap.cashflows))
    return swap
