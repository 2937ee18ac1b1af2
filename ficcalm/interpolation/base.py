"""
Base class for curve interpolation methods.
"""
from abc import ABC, abstractmethod
from typing import Optional, Sequence

import numpy as np

from ficcalm.errors import InvalidValueError


class Interpolator(ABC):
    """Interpolates values over increasing year-fraction pillars."""

    def __init__(
        self,
        pillars: Sequence[float],
        values: Sequence[float],
        allow_extrapolation: bool = False,
    ):
        """
        Initialize interpolator.

        Args:
            pillars: Year fractions from the curve reference date, ascending
            values: Values at the pillars (discount factors, zero rates, ...)
            allow_extrapolation: Extend the edge segments beyond the pillar range
        """
        if len(pillars) != len(values):
            raise InvalidValueError("Pillars and values must have same length")
        if len(pillars) < 2:
            raise InvalidValueError("Need at least 2 points for interpolation")

        self.pillars = np.asarray(pillars, dtype=float)
        self.values = np.asarray(values, dtype=float)
        self.allow_extrapolation = allow_extrapolation

        if np.any(np.diff(self.pillars) <= 0):
            raise InvalidValueError("Pillars must be strictly increasing")

    def __call__(self, t: float) -> float:
        return self.interpolate(t)

    def interpolate(self, t: float, allow_extrapolation: Optional[bool] = None) -> float:
        """Interpolate value at time t.

        ``allow_extrapolation`` overrides the instance flag for this query.
        """
        extrapolate = self.allow_extrapolation if allow_extrapolation is None else allow_extrapolation
        lo, hi = self.pillars[0], self.pillars[-1]
        if (t < lo or t > hi) and not extrapolate:
            raise InvalidValueError(
                f"Extrapolation is not enabled and {t:.6f} is outside [{lo:.6f}, {hi:.6f}]"
            )
        i = int(np.searchsorted(self.pillars, t))
        if i < len(self.pillars) and self.pillars[i] == t:
            return float(self.values[i])
        # edge segments serve both the interior and the extrapolated wings
        i = min(max(i, 1), len(self.pillars) - 1)
        return self._segment(i - 1, i, t)

    @abstractmethod
    def _segment(self, i: int, j: int, t: float) -> float:
        """Value at ``t`` from the segment between pillars ``i`` and ``j``."""
