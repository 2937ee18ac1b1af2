"""
Assigns dense ids to cash-flows and collects the market requests they need.
"""

import logging
from datetime import date
from typing import List, Optional

from ficcalm.cashflows.cashflow import FloatingRateCoupon
from ficcalm.currencies.currency import Currency
from ficcalm.errors import ValueNotSetError
from ficcalm.instruments.instrument import Instrument
from ficcalm.market.requests import (
    DiscountFactorRequest,
    ExchangeRateRequest,
    ForwardRateRequest,
    MarketRequest,
)

logger = logging.getLogger(__name__)


class IndexingVisitor:
    """
    Walks instruments in order and gives every cash-flow the next id.

    Cash-flows paid before ``reference_date`` still get an id, with an empty
    request, so that ids stay dense. Live cash-flows request a discount factor
    on the instrument's discount curve, floating coupons additionally request
    a forward rate, and cash-flows in a currency other than
    ``local_currency`` request an exchange rate.
    """

    def __init__(self, reference_date: date, local_currency: Optional[Currency] = None):
        self.reference_date = reference_date
        self.local_currency = local_currency
        self._requests: List[MarketRequest] = []

    def visit(self, instrument: Instrument) -> None:
        for cashflow in instrument.cashflows:
            cashflow_id = len(self._requests)
            cashflow.id = cashflow_id
            if cashflow.payment_date < self.reference_date:
                self._requests.append(MarketRequest(cashflow_id))
                continue

            if instrument.discount_curve_id is None:
                raise ValueNotSetError(f"Instrument {instrument.id} has no discount curve id")
            df = DiscountFactorRequest(instrument.discount_curve_id, cashflow.payment_date)

            fwd = None
            if isinstance(cashflow, FloatingRateCoupon):
                definition = cashflow.rate_definition
                fwd = ForwardRateRequest(
                    cashflow.forecast_curve_id,
                    cashflow.accrual_start,
                    cashflow.accrual_end,
                    definition.compounding,
                    definition.frequency,
                )

            fx = None
            if self.local_currency is not None and cashflow.currency != self.local_currency:
                fx = ExchangeRateRequest(self.local_currency, cashflow.currency)

            self._requests.append(MarketRequest(cashflow_id, df, fwd, fx))

    def request(self) -> List[MarketRequest]:
        return list(self._requests)

    def __len__(self) -> int:
        return len(self._requests)
