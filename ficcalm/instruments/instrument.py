"""
Fixed and floating rate instruments: a cash-flow list plus the terms it was
built from.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from typing import List, Optional

from ficcalm.cashflows.cashflow import (
    Cashflow,
    Disbursement,
    FixedRateCoupon,
    FloatingRateCoupon,
    Redemption,
)
from ficcalm.cashflows.types import Side
from ficcalm.conventions.types import Frequency
from ficcalm.currencies.currency import Currency
from ficcalm.rates.interestrate import InterestRate, RateDefinition

from .amortization import equal_payments
from .types import PositionType, RateType, Structure


@dataclass
class Instrument:
    start_date: date
    end_date: date
    notional: float
    payment_frequency: Frequency
    structure: Structure
    side: Side
    currency: Currency
    discount_curve_id: Optional[int]
    cashflows: List[Cashflow]
    id: Optional[str] = None
    position_type: PositionType = PositionType.BASE

    def disbursements(self) -> List[Disbursement]:
        return [cf for cf in self.cashflows if isinstance(cf, Disbursement)]

    def redemptions(self) -> List[Redemption]:
        return [cf for cf in self.cashflows if isinstance(cf, Redemption)]

    def coupons(self) -> list:
        return [cf for cf in self.cashflows if isinstance(cf, (FixedRateCoupon, FloatingRateCoupon))]

    def set_discount_curve_id(self, curve_id: int) -> None:
        self.discount_curve_id = curve_id

    def maturity(self) -> date:
        return max(cf.payment_date for cf in self.cashflows)


@dataclass
class FixedRateInstrument(Instrument):
    rate: InterestRate = field(default_factory=lambda: InterestRate(0.0))

    @property
    def rate_type(self) -> RateType:
        return RateType.FIXED

    def with_rate(self, rate: float) -> "FixedRateInstrument":
        """Copy of the instrument with every coupon paying ``rate``.

        For equal-payment structures the principal profile is recomputed so the
        installments stay level at the new rate.
        """
        cashflows = [
            cf.with_rate(rate) if isinstance(cf, FixedRateCoupon) else replace(cf)
            for cf in self.cashflows
        ]
        if self.structure == Structure.EQUAL_PAYMENTS:
            _relevel(cashflows, self.notional)
        return replace(self, rate=self.rate.with_rate(rate), cashflows=cashflows)


@dataclass
class FloatingRateInstrument(Instrument):
    spread: float = 0.0
    rate_definition: RateDefinition = field(default_factory=RateDefinition)
    forecast_curve_id: Optional[int] = None

    @property
    def rate_type(self) -> RateType:
        return RateType.FLOATING

    def with_spread(self, spread: float) -> "FloatingRateInstrument":
        """Copy with every coupon paying ``spread``; fixings are kept."""
        cashflows = [
            cf.with_spread(spread) if isinstance(cf, FloatingRateCoupon) else replace(cf)
            for cf in self.cashflows
        ]
        return replace(self, spread=spread, cashflows=cashflows)


def _relevel(cashflows: List[Cashflow], notional: float) -> None:
    coupons = [cf for cf in cashflows if isinstance(cf, FixedRateCoupon)]
    redemptions = [cf for cf in cashflows if isinstance(cf, Redemption)]
    factors = [c.rate.compound_factor(c.accrual_start, c.accrual_end) for c in coupons]
    outstanding = notional
    for coupon, redemption, principal in zip(coupons, redemptions, equal_payments(notional, factors)):
        coupon.notional = outstanding
        redemption.notional = principal
        outstanding -= principal
