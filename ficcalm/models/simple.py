"""
Resolves market requests against a market store.
"""

import logging
from datetime import date
from typing import List, Optional, Sequence

from ficcalm.market.requests import (
    DiscountFactorRequest,
    ExchangeRateRequest,
    ForwardRateRequest,
    MarketData,
    MarketRequest,
)
from ficcalm.market.store import MarketStore

logger = logging.getLogger(__name__)


class SimpleModel:
    """Deterministic model: curves for discounting and forwards, spot FX rolled
    forward by the ratio of currency discount factors."""

    def __init__(self, market_store: MarketStore):
        self.market_store = market_store

    @property
    def reference_date(self) -> date:
        return self.market_store.reference_date

    def gen_df_data(self, request: DiscountFactorRequest) -> float:
        ref = self.reference_date
        if request.date < ref:
            return 0.0
        if request.date == ref:
            return 1.0
        return self.market_store.get_index(request.provider_id).discount_factor(request.date)

    def gen_fwd_data(self, request: ForwardRateRequest) -> float:
        index = self.market_store.get_index(request.provider_id)
        return index.forward_rate(request.start, request.end, request.compounding, request.frequency)

    def gen_fx_data(self, request: ExchangeRateRequest) -> float:
        store = self.market_store
        second = request.second or store.local_currency
        spot = store.get_exchange_rate(request.first, second)
        if request.reference_date is None:
            return spot
        first_df = self._currency_discount_factor(request.first, request.reference_date)
        second_df = self._currency_discount_factor(second, request.reference_date)
        return spot * first_df / second_df

    def _currency_discount_factor(self, currency, dt: date) -> float:
        curve_id = self.market_store.get_currency_curve(currency)
        return self.gen_df_data(DiscountFactorRequest(curve_id, dt))

    def gen_node(self, request: MarketRequest) -> MarketData:
        df: Optional[float] = None
        fwd: Optional[float] = None
        fx: Optional[float] = None
        if request.df is not None:
            df = self.gen_df_data(request.df)
        if request.fwd is not None:
            fwd = self.gen_fwd_data(request.fwd)
        if request.fx is not None:
            fx = self.gen_fx_data(request.fx)
        return MarketData(request.id, self.reference_date, df, fwd, fx)

    def gen_market_data(self, requests: Sequence[MarketRequest]) -> List[MarketData]:
        """One ``MarketData`` per request, in the same order."""
        data = [self.gen_node(request) for request in requests]
        logger.debug("Generated %s market data nodes at %s", len(data), self.reference_date)
        return data
