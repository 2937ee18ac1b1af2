"""
Keyword builders for fixed and floating rate instruments.

Cash-flows are laid out as: disbursements first, then per period the coupon
followed by that period's redemption (if any). The disbursement side is the
inverse of the instrument side.
"""

import logging
from datetime import date
from typing import Dict, List, Optional, Tuple, Union

from ficcalm.cashflows.cashflow import (
    Cashflow,
    Disbursement,
    FixedRateCoupon,
    FloatingRateCoupon,
    Redemption,
)
from ficcalm.cashflows.types import Side
from ficcalm.conventions.calendars import NULL_CALENDAR, Calendar
from ficcalm.conventions.period import Period
from ficcalm.conventions.types import BusinessDayAdjustment, Frequency
from ficcalm.currencies.currency import Currency
from ficcalm.errors import UnsupportedFeatureError, ValueNotSetError
from ficcalm.rates.interestrate import InterestRate, RateDefinition
from ficcalm.schedule.core import SchedulePeriod
from ficcalm.schedule.generator import make_schedule

from .amortization import equal_payments, equal_redemptions
from .instrument import FixedRateInstrument, FloatingRateInstrument
from .types import PositionType, Structure

logger = logging.getLogger(__name__)

# Principal plan: (disbursement date, amount) list, per-period outstanding
# notional and per-period redemption amount.
PrincipalPlan = Tuple[List[Tuple[date, float]], List[float], List[float]]


def _require(**fields) -> None:
    missing = [name for name, value in fields.items() if value is None]
    if missing:
        raise ValueNotSetError(f"Required field(s) not set: {', '.join(missing)}")


def _resolve_end_date(start_date: Optional[date], end_date: Optional[date], tenor: Optional[Period]):
    if end_date is None and start_date is not None and tenor is not None:
        return start_date + tenor
    return end_date


def _periods(
    start_date: date,
    end_date: date,
    structure: Structure,
    payment_frequency: Optional[Frequency],
    calendar: Calendar,
    adjustment: BusinessDayAdjustment,
) -> List[SchedulePeriod]:
    if structure == Structure.ZERO:
        payment_frequency = Frequency.ONCE
    _require(payment_frequency=payment_frequency)
    schedule = make_schedule(
        start_date,
        end_date,
        frequency=payment_frequency,
        calendar=calendar,
        adjustment=adjustment,
    )
    return schedule.periods


def _explicit_plan(
    periods: List[SchedulePeriod],
    disbursements: Dict[date, float],
    redemptions: Dict[date, float],
) -> PrincipalPlan:
    notionals = []
    for period in periods:
        paid_in = sum(v for d, v in disbursements.items() if d <= period.accrual_start)
        paid_out = sum(v for d, v in redemptions.items() if d <= period.accrual_start)
        notionals.append(paid_in - paid_out)
    return sorted(disbursements.items()), notionals, []


def _principal_plan(
    structure: Structure,
    notional: float,
    start_date: date,
    periods: List[SchedulePeriod],
    compound_factors: Optional[List[float]] = None,
) -> PrincipalPlan:
    n = len(periods)
    if structure in (Structure.BULLET, Structure.ZERO):
        redemptions = [0.0] * (n - 1) + [notional]
    elif structure == Structure.EQUAL_REDEMPTIONS:
        redemptions = equal_redemptions(notional, n)
    elif structure == Structure.EQUAL_PAYMENTS:
        if compound_factors is None:
            raise UnsupportedFeatureError("Equal payments are only supported for fixed rate instruments")
        redemptions = equal_payments(notional, compound_factors)
    else:
        raise UnsupportedFeatureError(f"Structure {structure} needs explicit principal flows")

    notionals = []
    outstanding = notional
    for amount in redemptions:
        notionals.append(outstanding)
        outstanding -= amount
    return [(start_date, notional)], notionals, redemptions


def _assemble(
    plan: PrincipalPlan,
    coupons: List[Cashflow],
    periods: List[SchedulePeriod],
    side: Side,
    currency: Currency,
    explicit_redemptions: Optional[Dict[date, float]] = None,
) -> List[Cashflow]:
    disbursed, _, redemptions = plan
    cashflows: List[Cashflow] = [
        Disbursement(d, amount, currency, side.inverse()) for d, amount in disbursed
    ]
    for i, (period, coupon) in enumerate(zip(periods, coupons)):
        if coupon is not None:
            cashflows.append(coupon)
        if redemptions and redemptions[i] != 0.0:
            cashflows.append(Redemption(period.payment_date, redemptions[i], currency, side))
    if explicit_redemptions:
        cashflows.extend(
            Redemption(d, amount, currency, side) for d, amount in sorted(explicit_redemptions.items())
        )
    return cashflows


def make_fixed_rate_instrument(
    *,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    tenor: Optional[Period] = None,
    notional: Optional[float] = None,
    rate: Union[float, InterestRate, None] = None,
    rate_definition: Optional[RateDefinition] = None,
    payment_frequency: Optional[Frequency] = None,
    structure: Structure = Structure.BULLET,
    side: Side = Side.RECEIVE,
    currency: Currency = Currency.USD,
    discount_curve_id: Optional[int] = None,
    calendar: Calendar = NULL_CALENDAR,
    adjustment: BusinessDayAdjustment = BusinessDayAdjustment.NO_ADJUSTMENT,
    disbursements: Optional[Dict[date, float]] = None,
    redemptions: Optional[Dict[date, float]] = None,
    id: Optional[str] = None,
    position_type: PositionType = PositionType.BASE,
) -> FixedRateInstrument:
    """
    Build a fixed rate loan or deposit.

    Args:
        start_date: Disbursement date
        end_date: Maturity; derived from ``start_date + tenor`` when omitted
        notional: Principal amount; for ``Structure.OTHER`` the sum of
            ``disbursements`` is used when omitted
        rate: Coupon rate, either a plain number quoted under
            ``rate_definition`` or a full ``InterestRate``
        payment_frequency: Coupon frequency (ignored for zero coupons)
        side: RECEIVE for an asset, PAY for a liability
        disbursements / redemptions: Explicit principal flows, required for
            ``Structure.OTHER``

    Raises:
        ValueNotSetError: if a required field is missing
    """
    end_date = _resolve_end_date(start_date, end_date, tenor)
    if structure == Structure.OTHER:
        _require(disbursements=disbursements, redemptions=redemptions)
        if notional is None:
            notional = sum(disbursements.values())
    _require(start_date=start_date, end_date=end_date, notional=notional, rate=rate)

    if not isinstance(rate, InterestRate):
        rate = InterestRate.from_rate_definition(rate, rate_definition or RateDefinition())

    periods = _periods(start_date, end_date, structure, payment_frequency, calendar, adjustment)
    if structure == Structure.OTHER:
        plan = _explicit_plan(periods, disbursements, redemptions)
    else:
        factors = [rate.compound_factor(p.accrual_start, p.accrual_end) for p in periods]
        plan = _principal_plan(structure, notional, start_date, periods, factors)

    coupons = [
        FixedRateCoupon(outstanding, rate, p.accrual_start, p.accrual_end, p.payment_date, currency, side)
        if outstanding != 0.0
        else None
        for p, outstanding in zip(periods, plan[1])
    ]
    cashflows = _assemble(plan, coupons, periods, side, currency, redemptions if structure == Structure.OTHER else None)
    logger.debug("Built fixed rate %s instrument with %s cash-flows", structure.name, len(cashflows))
    return FixedRateInstrument(
        start_date=start_date,
        end_date=end_date,
        notional=notional,
        payment_frequency=Frequency.ONCE if structure == Structure.ZERO else payment_frequency,
        structure=structure,
        side=side,
        currency=currency,
        discount_curve_id=discount_curve_id,
        cashflows=cashflows,
        id=id,
        position_type=position_type,
        rate=rate,
    )


def make_floating_rate_instrument(
    *,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    tenor: Optional[Period] = None,
    notional: Optional[float] = None,
    spread: Optional[float] = None,
    rate_definition: Optional[RateDefinition] = None,
    payment_frequency: Optional[Frequency] = None,
    structure: Structure = Structure.BULLET,
    side: Side = Side.RECEIVE,
    currency: Currency = Currency.USD,
    discount_curve_id: Optional[int] = None,
    forecast_curve_id: Optional[int] = None,
    calendar: Calendar = NULL_CALENDAR,
    adjustment: BusinessDayAdjustment = BusinessDayAdjustment.NO_ADJUSTMENT,
    disbursements: Optional[Dict[date, float]] = None,
    redemptions: Optional[Dict[date, float]] = None,
    id: Optional[str] = None,
    position_type: PositionType = PositionType.BASE,
) -> FloatingRateInstrument:
    """Build a floating rate instrument; coupons fix on their accrual start."""
    end_date = _resolve_end_date(start_date, end_date, tenor)
    if structure == Structure.OTHER:
        _require(disbursements=disbursements, redemptions=redemptions)
        if notional is None:
            notional = sum(disbursements.values())
    _require(
        start_date=start_date,
        end_date=end_date,
        notional=notional,
        spread=spread,
        forecast_curve_id=forecast_curve_id,
    )
    if structure == Structure.EQUAL_PAYMENTS:
        raise UnsupportedFeatureError("Equal payments are only supported for fixed rate instruments")
    rate_definition = rate_definition or RateDefinition()

    periods = _periods(start_date, end_date, structure, payment_frequency, calendar, adjustment)
    if structure == Structure.OTHER:
        plan = _explicit_plan(periods, disbursements, redemptions)
    else:
        plan = _principal_plan(structure, notional, start_date, periods)

    coupons = [
        FloatingRateCoupon(
            notional=outstanding,
            spread=spread,
            accrual_start=p.accrual_start,
            accrual_end=p.accrual_end,
            payment_date=p.payment_date,
            fixing_date=p.accrual_start,
            rate_definition=rate_definition,
            forecast_curve_id=forecast_curve_id,
            currency=currency,
            side=side,
        )
        if outstanding != 0.0
        else None
        for p, outstanding in zip(periods, plan[1])
    ]
    cashflows = _assemble(plan, coupons, periods, side, currency, redemptions if structure == Structure.OTHER else None)
    logger.debug("Built floating rate %s instrument with %s cash-flows", structure.name, len(cashflows))
    return FloatingRateInstrument(
        start_date=start_date,
        end_date=end_date,
        notional=notional,
        payment_frequency=Frequency.ONCE if structure == Structure.ZERO else payment_frequency,
        structure=structure,
        side=side,
        currency=currency,
        discount_curve_id=discount_curve_id,
        cashflows=cashflows,
        id=id,
        position_type=position_type,
        spread=spread,
        rate_definition=rate_definition,
        forecast_curve_id=forecast_curve_id,
    )
