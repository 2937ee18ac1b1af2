"""Models that resolve market requests into market data."""

from .simple import SimpleModel

__all__ = ["SimpleModel"]
