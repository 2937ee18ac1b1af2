"""Tests for the interpolation strategies."""

import math

import pytest

from ficcalm.errors import InvalidValueError
from ficcalm.interpolation import (
    InterpolationMethod,
    LinearInterpolator,
    LogLinearInterpolator,
    create_interpolator,
)


def test_linear_interpolation_and_pillars():
    interp = LinearInterpolator([0.0, 1.0, 2.0], [1.0, 0.98, 0.95])
    assert interp(1.0) == 0.98
    assert interp(0.5) == pytest.approx(0.99)
    assert interp(1.5) == pytest.approx(0.965)


def test_extrapolation_is_opt_in():
    interp = LinearInterpolator([0.0, 1.0], [1.0, 0.98])
    with pytest.raises(InvalidValueError):
        interp(2.0)
    assert interp.interpolate(2.0, allow_extrapolation=True) == pytest.approx(0.96)


def test_log_linear_interpolates_in_log_space():
    interp = LogLinearInterpolator([0.0, 2.0], [1.0, math.exp(-0.1)])
    assert interp(1.0) == pytest.approx(math.exp(-0.05))


def test_factory_accepts_names():
    interp = create_interpolator("loglinear", [0.0, 1.0], [1.0, 0.9])
    assert isinstance(interp, LogLinearInterpolator)
    assert isinstance(create_interpolator(InterpolationMethod.LINEAR, [0.0, 1.0], [1.0, 0.9]), LinearInterpolator)


def test_invalid_pillars():
    with pytest.raises(InvalidValueError):
        LinearInterpolator([0.0], [1.0])
    with pytest.raises(InvalidValueError):
        LinearInterpolator([0.0, 0.0], [1.0, 1.0])
    with pytest.raises(InvalidValueError):
        LinearInterpolator([0.0, 1.0], [1.0])
