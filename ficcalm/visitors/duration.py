"""
Macaulay duration.
"""

from typing import Optional, Sequence

from ficcalm.conventions.daycount import ACT_365F, DayCounter
from ficcalm.currencies.currency import Currency
from ficcalm.errors import EvaluationError
from ficcalm.instruments.instrument import Instrument
from ficcalm.market.requests import MarketData

from .base import fx_value, market_data_for


class DurationConstVisitor:
    """
    Present-value weighted average time to payment, in years under
    ``day_counter``, of the cash-flows paid after the reference date.
    """

    def __init__(
        self,
        market_data: Sequence[MarketData],
        day_counter: DayCounter = ACT_365F,
        local_currency: Optional[Currency] = None,
    ):
        self.market_data = market_data
        self.day_counter = day_counter
        self.local_currency = local_currency

    def visit(self, instrument: Instrument) -> float:
        weighted = 0.0
        total = 0.0
        for cashflow in instrument.cashflows:
            data = market_data_for(cashflow, self.market_data)
            if cashflow.payment_date <= data.reference_date:
                continue
            fx = fx_value(cashflow, data, self.local_currency)
            pv = cashflow.side.sign * cashflow.amount() * data.df / fx
            weighted += self.day_counter.year_fraction(data.reference_date, cashflow.payment_date) * pv
            total += pv
        if total == 0.0:
            raise EvaluationError(f"Duration of instrument {instrument.id} is undefined: zero present value")
        return weighted / total
