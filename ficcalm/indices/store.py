"""
Registry of rate indices shared between evaluation threads.
"""

import logging
import threading
from contextlib import contextmanager
from datetime import date
from typing import Dict, Iterator, List, Optional

from ficcalm.conventions.period import Period
from ficcalm.errors import InvalidValueError, NotFoundError

from .base import InterestRateIndex

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """Many concurrent readers or a single writer."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writing:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            while self._writing or self._readers:
                self._cond.wait()
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class IndexStore:
    """Indices keyed by integer id, optionally also reachable by name."""

    def __init__(self, reference_date: date):
        self.reference_date = reference_date
        self._indices: Dict[int, InterestRateIndex] = {}
        self._names: Dict[str, int] = {}
        self._lock = ReadWriteLock()

    def add_index(self, index_id: int, index: InterestRateIndex, name: Optional[str] = None) -> None:
        with self._lock.write():
            if index_id in self._indices:
                raise InvalidValueError(f"Index {index_id} already exists")
            self._indices[index_id] = index
            if name:
                self._names[name] = index_id
        logger.debug("Registered index %s as %s", index_id, index)

    def replace_index(self, index_id: int, index: InterestRateIndex) -> None:
        with self._lock.write():
            if index_id not in self._indices:
                raise NotFoundError(f"Index {index_id} not found")
            self._indices[index_id] = index

    def get_index(self, index_id: int) -> InterestRateIndex:
        with self._lock.read():
            try:
                return self._indices[index_id]
            except KeyError:
                raise NotFoundError(f"Index {index_id} not found") from None

    def get_index_by_name(self, name: str) -> InterestRateIndex:
        with self._lock.read():
            if name not in self._names:
                raise NotFoundError(f"Index named {name!r} not found")
            return self._indices[self._names[name]]

    def index_ids(self) -> List[int]:
        with self._lock.read():
            return sorted(self._indices)

    def __contains__(self, index_id: int) -> bool:
        with self._lock.read():
            return index_id in self._indices

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._indices)

    def advance_to_date(self, dt: date) -> "IndexStore":
        if dt < self.reference_date:
            raise InvalidValueError(
                f"Cannot advance index store dated {self.reference_date} back to {dt}"
            )
        with self._lock.read():
            items = list(self._indices.items())
            names = dict(self._names)
        advanced = IndexStore(dt)
        for index_id, index in items:
            advanced._indices[index_id] = index.advance_to_date(dt)
        advanced._names = names
        return advanced

    def advance_to_period(self, period: Period) -> "IndexStore":
        return self.advance_to_date(self.reference_date + period)
