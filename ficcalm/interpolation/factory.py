"""
Factory for creating interpolators by method name.
"""
from enum import Enum
from typing import Sequence, Union

from ficcalm.errors import InvalidValueError

from .base import Interpolator
from .linear import LinearInterpolator, LogLinearInterpolator


class InterpolationMethod(Enum):
    LINEAR = "LINEAR"
    LOGLINEAR = "LOGLINEAR"


def create_interpolator(
    method: Union[str, InterpolationMethod],
    pillars: Sequence[float],
    values: Sequence[float],
    allow_extrapolation: bool = False,
) -> Interpolator:
    """
    Create an interpolator based on method name.

    Args:
        method: ``"LINEAR"`` or ``"LOGLINEAR"`` (or the enum member)
        pillars: Time points
        values: Values to interpolate
        allow_extrapolation: Whether queries outside the pillars are allowed

    Returns:
        Configured interpolator
    """
    if isinstance(method, InterpolationMethod):
        method_upper = method.value
    else:
        method_upper = method.upper().replace("-", "").replace("_", "")

    if method_upper == "LINEAR":
        return LinearInterpolator(pillars, values, allow_extrapolation)
    elif method_upper == "LOGLINEAR":
        return LogLinearInterpolator(pillars, values, allow_extrapolation)
    else:
        raise InvalidValueError(
            f"Unknown interpolation method: {method}. Available: LINEAR, LOGLINEAR"
        )
