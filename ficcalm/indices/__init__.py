"""Interest rate indices and the index registry."""

from .base import InterestRateIndex
from .ibor import IborIndex
from .overnight import OvernightIndex
from .store import IndexStore, ReadWriteLock

__all__ = [
    "InterestRateIndex",
    "IborIndex",
    "OvernightIndex",
    "IndexStore",
    "ReadWriteLock",
]
