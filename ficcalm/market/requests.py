"""
Market data requests emitted per cash-flow and the resolved market data.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ficcalm.conventions.types import Frequency
from ficcalm.currencies.currency import Currency
from ficcalm.errors import EvaluationError
from ficcalm.rates.interestrate import Compounding


@dataclass(frozen=True)
class DiscountFactorRequest:
    provider_id: int
    date: date


@dataclass(frozen=True)
class ForwardRateRequest:
    provider_id: int
    start: date
    end: date
    compounding: Compounding
    frequency: Frequency


@dataclass(frozen=True)
class ExchangeRateRequest:
    """FX quote ``first``/``second``; ``second`` defaults to the local currency.

    Without a reference date the spot rate is returned.
    """

    first: Currency
    second: Optional[Currency] = None
    reference_date: Optional[date] = None


@dataclass(frozen=True)
class MarketRequest:
    id: int
    df: Optional[DiscountFactorRequest] = None
    fwd: Optional[ForwardRateRequest] = None
    fx: Optional[ExchangeRateRequest] = None

    def is_empty(self) -> bool:
        return self.df is None and self.fwd is None and self.fx is None


@dataclass(frozen=True)
class MarketData:
    """Resolved values for one cash-flow; the position in the vector is its id."""

    id: int
    reference_date: date
    df_value: Optional[float] = None
    fwd_value: Optional[float] = None
    fx_value: Optional[float] = None

    @property
    def df(self) -> float:
        if self.df_value is None:
            raise EvaluationError(f"Discount factor not set for cash-flow {self.id}")
        return self.df_value

    @property
    def fwd(self) -> float:
        if self.fwd_value is None:
            raise EvaluationError(f"Forward rate not set for cash-flow {self.id}")
        return self.fwd_value

    @property
    def fx(self) -> float:
        if self.fx_value is None:
            raise EvaluationError(f"Exchange rate not set for cash-flow {self.id}")
        return self.fx_value
