"""
Cash-flow variants.

The set is closed: disbursements, redemptions, fixed rate coupons and floating
rate coupons. Visitors dispatch on the concrete type. Every cash-flow carries
an ``id`` slot that the indexing pass fills with its position in the market
data vector.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from typing import ClassVar, Optional, Union

from ficcalm.currencies.currency import Currency
from ficcalm.errors import InvalidValueError, ValueNotSetError
from ficcalm.rates.interestrate import InterestRate, RateDefinition

from .types import CashflowType, Side


@dataclass
class Disbursement:
    """Principal paid out (or received) when an instrument starts."""

    cashflow_type: ClassVar[CashflowType] = CashflowType.DISBURSEMENT

    payment_date: date
    notional: float
    currency: Currency
    side: Side
    id: Optional[int] = field(default=None, compare=False)

    def amount(self) -> float:
        return self.notional


@dataclass
class Redemption:
    """Principal repaid on ``payment_date``."""

    cashflow_type: ClassVar[CashflowType] = CashflowType.REDEMPTION

    payment_date: date
    notional: float
    currency: Currency
    side: Side
    id: Optional[int] = field(default=None, compare=False)

    def amount(self) -> float:
        return self.notional


def _check_accrual(start: date, end: date) -> None:
    if start >= end:
        raise InvalidValueError(f"Accrual start {start} must be before accrual end {end}")


def _overlap(accrual_start: date, accrual_end: date, start: date, end: date):
    lo = max(accrual_start, start)
    hi = min(accrual_end, end)
    return (lo, hi) if lo < hi else None


@dataclass
class FixedRateCoupon:
    cashflow_type: ClassVar[CashflowType] = CashflowType.FIXED_RATE_COUPON

    notional: float
    rate: InterestRate
    accrual_start: date
    accrual_end: date
    payment_date: date
    currency: Currency
    side: Side
    id: Optional[int] = field(default=None, compare=False)

    def __post_init__(self):
        _check_accrual(self.accrual_start, self.accrual_end)

    def amount(self) -> float:
        return self.notional * (self.rate.compound_factor(self.accrual_start, self.accrual_end) - 1.0)

    def accrued_amount(self, start: date, end: date) -> float:
        """Interest accrued over the part of ``[start, end]`` inside the accrual period."""
        window = _overlap(self.accrual_start, self.accrual_end, start, end)
        if window is None:
            return 0.0
        return self.notional * (self.rate.compound_factor(*window) - 1.0)

    def with_rate(self, rate: float) -> "FixedRateCoupon":
        return replace(self, rate=self.rate.with_rate(rate))


@dataclass
class FloatingRateCoupon:
    """
    Coupon paying ``fixing_rate + spread`` compounded under ``rate_definition``.

    The fixing rate is unknown until the fixing pass sets it; ``amount`` fails
    before that.
    """

    cashflow_type: ClassVar[CashflowType] = CashflowType.FLOATING_RATE_COUPON

    notional: float
    spread: float
    accrual_start: date
    accrual_end: date
    payment_date: date
    fixing_date: date
    rate_definition: RateDefinition
    forecast_curve_id: int
    currency: Currency
    side: Side
    fixing_rate: Optional[float] = None
    id: Optional[int] = field(default=None, compare=False)

    def __post_init__(self):
        _check_accrual(self.accrual_start, self.accrual_end)

    def set_fixing_rate(self, fixing_rate: float) -> None:
        self.fixing_rate = fixing_rate

    def _interest_rate(self) -> InterestRate:
        if self.fixing_rate is None:
            raise ValueNotSetError(
                f"Fixing rate not set for coupon paying on {self.payment_date}"
            )
        return InterestRate.from_rate_definition(self.fixing_rate + self.spread, self.rate_definition)

    def amount(self) -> float:
        rate = self._interest_rate()
        return self.notional * (rate.compound_factor(self.accrual_start, self.accrual_end) - 1.0)

    def accrued_amount(self, start: date, end: date) -> float:
        window = _overlap(self.accrual_start, self.accrual_end, start, end)
        if window is None:
            return 0.0
        return self.notional * (self._interest_rate().compound_factor(*window) - 1.0)

    def with_spread(self, spread: float) -> "FloatingRateCoupon":
        return replace(self, spread=spread)


Coupon = Union[FixedRateCoupon, FloatingRateCoupon]
Cashflow = Union[Disbursement, Redemption, FixedRateCoupon, FloatingRateCoupon]
