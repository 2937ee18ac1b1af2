"""
Market store: indices, FX spots and currency curves anchored to one date.
"""

import logging
from datetime import date
from typing import Dict, Optional

from ficcalm.conventions.period import Period
from ficcalm.currencies.currency import Currency
from ficcalm.currencies.exchange_rates import ExchangeRateStore
from ficcalm.errors import InvalidValueError, NotFoundError
from ficcalm.indices.base import InterestRateIndex
from ficcalm.indices.store import IndexStore

logger = logging.getLogger(__name__)


class MarketStore:
    """
    Everything a model needs to resolve market requests on ``reference_date``.

    Advancing never mutates the store; a new store is returned whose indices
    and curves are rolled to the later date.
    """

    def __init__(
        self,
        reference_date: date,
        local_currency: Currency,
        index_store: Optional[IndexStore] = None,
        exchange_rate_store: Optional[ExchangeRateStore] = None,
        currency_curves: Optional[Dict[Currency, int]] = None,
    ):
        self.reference_date = reference_date
        self.local_currency = local_currency
        self.index_store = index_store or IndexStore(reference_date)
        self.exchange_rate_store = exchange_rate_store or ExchangeRateStore(reference_date)
        self._currency_curves: Dict[Currency, int] = dict(currency_curves or {})

    def add_index(self, index_id: int, index: InterestRateIndex, name: Optional[str] = None) -> None:
        self.index_store.add_index(index_id, index, name)

    def get_index(self, index_id: int) -> InterestRateIndex:
        return self.index_store.get_index(index_id)

    def add_exchange_rate(self, first: Currency, second: Currency, rate: float) -> None:
        self.exchange_rate_store.add_exchange_rate(first, second, rate)

    def get_exchange_rate(self, first: Currency, second: Currency) -> float:
        return self.exchange_rate_store.get_exchange_rate(first, second)

    def add_currency_curve(self, currency: Currency, curve_id: int) -> None:
        self._currency_curves[currency] = curve_id

    def get_currency_curve(self, currency: Currency) -> int:
        try:
            return self._currency_curves[currency]
        except KeyError:
            raise NotFoundError(f"No discount curve registered for currency {currency}") from None

    @property
    def currency_curves(self) -> Dict[Currency, int]:
        return dict(self._currency_curves)

    def advance_to_date(self, dt: date) -> "MarketStore":
        if dt < self.reference_date:
            raise InvalidValueError(
                f"Cannot advance market store dated {self.reference_date} back to {dt}"
            )
        logger.debug("Advancing market store from %s to %s", self.reference_date, dt)
        return MarketStore(
            dt,
            self.local_currency,
            self.index_store.advance_to_date(dt),
            self.exchange_rate_store.copy(dt),
            self._currency_curves,
        )

    def advance_to_period(self, period: Period) -> "MarketStore":
        return self.advance_to_date(self.reference_date + period)

    def __repr__(self) -> str:
        return (
            f"MarketStore(reference_date={self.reference_date}, "
            f"local_currency={self.local_currency}, indices={len(self.index_store)})"
        )
