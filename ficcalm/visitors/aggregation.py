"""
Cash-flow aggregation by payment date.
"""

import threading
from datetime import date
from typing import Dict, Optional

from ficcalm.cashflows.cashflow import Disbursement, FixedRateCoupon, FloatingRateCoupon, Redemption
from ficcalm.currencies.currency import Currency
from ficcalm.errors import InvalidValueError
from ficcalm.instruments.instrument import Instrument

from .base import sorted_by_date


class CashflowsAggregatorConstVisitor:
    """
    Accumulates signed disbursements, redemptions and interest per payment date.

    Pay flows count negative, receive flows positive. With
    ``validate_currency`` set, visiting a cash-flow in another currency fails.
    One aggregator may be shared by several threads.
    """

    def __init__(self, validate_currency: Optional[Currency] = None):
        self.validate_currency = validate_currency
        self._redemptions: Dict[date, float] = {}
        self._disbursements: Dict[date, float] = {}
        self._interest: Dict[date, float] = {}
        self._lock = threading.Lock()

    def visit(self, instrument: Instrument) -> None:
        for cashflow in instrument.cashflows:
            if self.validate_currency is not None and cashflow.currency != self.validate_currency:
                raise InvalidValueError(
                    f"Cash-flow currency {cashflow.currency} does not match {self.validate_currency}"
                )
            if isinstance(cashflow, Redemption):
                bucket = self._redemptions
            elif isinstance(cashflow, Disbursement):
                bucket = self._disbursements
            elif isinstance(cashflow, (FixedRateCoupon, FloatingRateCoupon)):
                bucket = self._interest
            else:
                continue
            amount = cashflow.side.sign * cashflow.amount()
            with self._lock:
                bucket[cashflow.payment_date] = bucket.get(cashflow.payment_date, 0.0) + amount

    def redemptions(self) -> Dict[date, float]:
        with self._lock:
            return sorted_by_date(self._redemptions)

    def disbursements(self) -> Dict[date, float]:
        with self._lock:
            return sorted_by_date(self._disbursements)

    def interest(self) -> Dict[date, float]:
        with self._lock:
            return sorted_by_date(self._interest)
