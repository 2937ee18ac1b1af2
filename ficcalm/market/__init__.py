"""Market store and market data requests."""

from .requests import (
    DiscountFactorRequest,
    ExchangeRateRequest,
    ForwardRateRequest,
    MarketData,
    MarketRequest,
)
from .store import MarketStore

__all__ = [
    "DiscountFactorRequest",
    "ExchangeRateRequest",
    "ForwardRateRequest",
    "MarketData",
    "MarketRequest",
    "MarketStore",
]
