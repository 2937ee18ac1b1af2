"""
Injects realised or projected rates into floating rate coupons.
"""

from typing import Optional, Sequence

from ficcalm.cashflows.cashflow import FloatingRateCoupon
from ficcalm.instruments.instrument import Instrument
from ficcalm.market.requests import MarketData
from ficcalm.market.store import MarketStore

from .base import market_data_for


class FixingVisitor:
    """
    Sets the fixing rate of every floating coupon from its forward rate entry.

    When a market store is given, coupons whose accrual started before the
    store's reference date take the rate realised on the index over the
    accrual period, if its history covers the accrual start. Coupons paid
    before the reference date carry no forward request and are left untouched.
    """

    def __init__(self, market_data: Sequence[MarketData], market_store: Optional[MarketStore] = None):
        self.market_data = market_data
        self.market_store = market_store

    def _historical(self, coupon: FloatingRateCoupon) -> Optional[float]:
        store = self.market_store
        if store is None or coupon.accrual_start >= store.reference_date:
            return None
        definition = coupon.rate_definition
        return store.get_index(coupon.forecast_curve_id).realised_rate(
            coupon.accrual_start, coupon.accrual_end, definition.compounding, definition.frequency
        )

    def visit(self, instrument: Instrument) -> None:
        for cashflow in instrument.cashflows:
            if not isinstance(cashflow, FloatingRateCoupon):
                continue
            fixing = self._historical(cashflow)
            if fixing is None:
                data = market_data_for(cashflow, self.market_data)
                if data.fwd_value is None:
                    continue
                fixing = data.fwd_value
            cashflow.set_fixing_rate(fixing)
