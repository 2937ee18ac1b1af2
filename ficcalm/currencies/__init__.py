"""
Currencies and spot FX quotes.
"""

from .currency import Currency
from .exchange_rates import ExchangeRateStore

__all__ = ["Currency", "ExchangeRateStore"]
