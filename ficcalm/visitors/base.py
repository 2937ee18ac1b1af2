"""
Shared helpers for visitors that read market data by cash-flow id.
"""

from datetime import date
from typing import Dict, Mapping, Optional, Sequence

from ficcalm.cashflows.cashflow import Cashflow
from ficcalm.currencies.currency import Currency
from ficcalm.errors import NotFoundError, ValueNotSetError
from ficcalm.market.requests import MarketData


def market_data_for(cashflow: Cashflow, market_data: Sequence[MarketData]) -> MarketData:
    if cashflow.id is None:
        raise ValueNotSetError(
            f"Cash-flow paying on {cashflow.payment_date} has no id; run the indexing pass first"
        )
    try:
        return market_data[cashflow.id]
    except IndexError:
        raise NotFoundError(f"No market data for cash-flow {cashflow.id}") from None


def fx_value(cashflow: Cashflow, data: MarketData, local_currency: Optional[Currency]) -> float:
    """Exchange rate used to bring ``cashflow`` into the local currency."""
    if local_currency is not None and cashflow.currency != local_currency:
        return data.fx
    return 1.0 if data.fx_value is None else data.fx_value


def merge_by_date(target: Dict[date, float], other: Mapping[date, float]) -> Dict[date, float]:
    """Add ``other`` into ``target`` key by key; new dates are inserted."""
    for dt, value in other.items():
        target[dt] = target.get(dt, 0.0) + value
    return target


def sorted_by_date(values: Mapping[date, float]) -> Dict[date, float]:
    return dict(sorted(values.items()))
