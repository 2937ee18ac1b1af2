"""
Interpolation methods for yield curves.

Curves interpolate over year fractions measured from their reference date;
the method is a pluggable strategy selected by name.
"""

from .base import Interpolator
from .factory import InterpolationMethod, create_interpolator
from .linear import LinearInterpolator, LogLinearInterpolator

__all__ = [
    "Interpolator",
    "InterpolationMethod",
    "LinearInterpolator",
    "LogLinearInterpolator",
    "create_interpolator",
]
