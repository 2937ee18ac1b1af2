"""
Linear and log-linear interpolation.
"""
import math

import numpy as np

from ficcalm.errors import InvalidValueError

from .base import Interpolator


class LinearInterpolator(Interpolator):
    """Linear interpolation on the raw values."""

    def _segment(self, i: int, j: int, t: float) -> float:
        t1, t2 = self.pillars[i], self.pillars[j]
        v1, v2 = self.values[i], self.values[j]
        weight = (t - t1) / (t2 - t1)
        return float(v1 + weight * (v2 - v1))


class LogLinearInterpolator(Interpolator):
    """Linear interpolation on log values.

    On discount factors this gives piecewise flat continuously compounded
    forwards.
    """

    def __init__(self, pillars, values, allow_extrapolation: bool = False):
        super().__init__(pillars, values, allow_extrapolation)
        if np.any(self.values <= 0):
            raise InvalidValueError("Log-linear interpolation requires positive values")
        self._log_values = np.log(self.values)

    def _segment(self, i: int, j: int, t: float) -> float:
        t1, t2 = self.pillars[i], self.pillars[j]
        l1, l2 = self._log_values[i], self._log_values[j]
        weight = (t - t1) / (t2 - t1)
        return math.exp(l1 + weight * (l2 - l1))
