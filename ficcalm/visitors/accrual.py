"""
Interest accrued inside a date window.
"""

from datetime import date
from typing import Dict

from ficcalm.cashflows.cashflow import FixedRateCoupon, FloatingRateCoupon
from ficcalm.errors import InvalidValueError
from ficcalm.instruments.instrument import Instrument

from .base import sorted_by_date


class AccruedAmountConstVisitor:
    """Signed interest accrued by each coupon over ``[start, end]``, keyed by
    the coupon's payment date. Floating coupons must be fixed."""

    def __init__(self, start: date, end: date):
        if end < start:
            raise InvalidValueError(f"Accrual window end {end} is before start {start}")
        self.start = start
        self.end = end
        self._by_date: Dict[date, float] = {}

    def visit(self, instrument: Instrument) -> float:
        total = 0.0
        for cashflow in instrument.cashflows:
            if not isinstance(cashflow, (FixedRateCoupon, FloatingRateCoupon)):
                continue
            accrued = cashflow.side.sign * cashflow.accrued_amount(self.start, self.end)
            if accrued == 0.0:
                continue
            self._by_date[cashflow.payment_date] = self._by_date.get(cashflow.payment_date, 0.0) + accrued
            total += accrued
        return total

    def accrued_amounts(self) -> Dict[date, float]:
        return sorted_by_date(self._by_date)
