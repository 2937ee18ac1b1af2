"""
Parallel NPV-by-date over a book of instruments.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Sequence

from ficcalm.errors import EvaluationError, FiccAlmError, InvalidValueError
from ficcalm.instruments.instrument import Instrument
from ficcalm.market.requests import MarketRequest
from ficcalm.market.store import MarketStore
from ficcalm.models.simple import SimpleModel
from ficcalm.visitors.base import merge_by_date, sorted_by_date
from ficcalm.visitors.fixing import FixingVisitor
from ficcalm.visitors.indexing import IndexingVisitor
from ficcalm.visitors.npv import NPVByDateConstVisitor

logger = logging.getLogger(__name__)


@dataclass
class NPVEngineConfig:
    chunk_size: int = 1000
    max_workers: Optional[int] = None
    include_today_cashflows: bool = False


class NPVEngine:
    """
    Prices every instrument against one market store and returns the NPV of the
    book grouped by payment date.

    Instruments are indexed one by one (ids are local to each instrument), then
    fixed and priced in chunks on a thread pool. Curves and QuantLib day
    counters are shared read-only between the workers.
    """

    def __init__(
        self,
        instruments: Sequence[Instrument],
        market_store: MarketStore,
        config: Optional[NPVEngineConfig] = None,
    ):
        self.instruments = instruments
        self.market_store = market_store
        self.config = config or NPVEngineConfig()
        if self.config.chunk_size < 1:
            raise InvalidValueError(f"Chunk size must be positive: {self.config.chunk_size}")

    @staticmethod
    def _label(instrument: Instrument, position: int) -> str:
        return instrument.id if instrument.id is not None else f"#{position}"

    def _index(self) -> List[List[MarketRequest]]:
        store = self.market_store
        requests = []
        for position, instrument in enumerate(self.instruments):
            indexer = IndexingVisitor(store.reference_date, store.local_currency)
            try:
                indexer.visit(instrument)
            except FiccAlmError as exc:
                raise EvaluationError(f"Instrument {self._label(instrument, position)}: {exc}") from exc
            requests.append(indexer.request())
        return requests

    def _price_chunk(self, first: int, requests: List[List[MarketRequest]]) -> Dict[date, float]:
        store = self.market_store
        model = SimpleModel(store)
        totals: Dict[date, float] = {}
        for offset, instrument_requests in enumerate(requests):
            position = first + offset
            instrument = self.instruments[position]
            try:
                data = model.gen_market_data(instrument_requests)
                FixingVisitor(data, store).visit(instrument)
                npv = NPVByDateConstVisitor(
                    data, self.config.include_today_cashflows, store.local_currency
                ).visit(instrument)
            except FiccAlmError as exc:
                raise EvaluationError(f"Instrument {self._label(instrument, position)}: {exc}") from exc
            merge_by_date(totals, npv)
        return totals

    def run(self) -> Dict[date, float]:
        requests = self._index()
        size = self.config.chunk_size
        starts = range(0, len(requests), size)
        result: Dict[date, float] = {}
        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            futures = [executor.submit(self._price_chunk, start, requests[start:start + size]) for start in starts]
            for chunk, future in enumerate(futures):
                merge_by_date(result, future.result())
                logger.debug("NPV engine merged chunk %s/%s", chunk + 1, len(futures))
        return sorted_by_date(result)
