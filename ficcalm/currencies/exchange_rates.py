"""
Spot exchange rate store with cross-rate discovery.

A quote ``(first, second) -> rate`` means ``rate`` units of ``second`` per
one unit of ``first``.
"""

import logging
from collections import deque
from datetime import date
from threading import Lock
from typing import Dict, Optional, Tuple

from ficcalm.errors import InvalidValueError, NotFoundError

from .currency import Currency

logger = logging.getLogger(__name__)

Pair = Tuple[Currency, Currency]


class ExchangeRateStore:
    """Holds spot FX quotes anchored to a reference date."""

    def __init__(self, reference_date: date, rates: Optional[Dict[Pair, float]] = None):
        self.reference_date = reference_date
        self._rates: Dict[Pair, float] = {}
        self._cache: Dict[Pair, float] = {}
        self._cache_lock = Lock()
        for (first, second), rate in (rates or {}).items():
            self.add_exchange_rate(first, second, rate)

    def add_exchange_rate(self, first: Currency, second: Currency, rate: float) -> None:
        if rate <= 0:
            raise InvalidValueError(f"Exchange rate {first}/{second} must be positive: {rate}")
        self._rates[(first, second)] = rate
        with self._cache_lock:
            self._cache.clear()

    @property
    def exchange_rates(self) -> Dict[Pair, float]:
        return dict(self._rates)

    def get_exchange_rate(self, first: Currency, second: Currency) -> float:
        """Units of ``second`` per unit of ``first``."""
        if first == second:
            return 1.0
        if (first, second) in self._rates:
            return self._rates[(first, second)]
        if (second, first) in self._rates:
            return 1.0 / self._rates[(second, first)]
        with self._cache_lock:
            if (first, second) in self._cache:
                return self._cache[(first, second)]

        rate = self._search(first, second)
        with self._cache_lock:
            self._cache[(first, second)] = rate
            self._cache[(second, first)] = 1.0 / rate
        return rate

    def _search(self, first: Currency, second: Currency) -> float:
        """Breadth-first search through the quote graph."""
        graph: Dict[Currency, Dict[Currency, float]] = {}
        for (ccy1, ccy2), rate in self._rates.items():
            graph.setdefault(ccy1, {})[ccy2] = rate
            graph.setdefault(ccy2, {})[ccy1] = 1.0 / rate

        queue = deque([(first, 1.0)])
        visited = {first}
        while queue:
            current, acc = queue.popleft()
            for neighbour, rate in graph.get(current, {}).items():
                if neighbour in visited:
                    continue
                if neighbour == second:
                    logger.debug("Cross rate %s/%s resolved to %s", first, second, acc * rate)
                    return acc * rate
                visited.add(neighbour)
                queue.append((neighbour, acc * rate))

        raise NotFoundError(f"No exchange rate found between {first} and {second}")

    def copy(self, reference_date: Optional[date] = None) -> "ExchangeRateStore":
        return ExchangeRateStore(reference_date or self.reference_date, self._rates)
