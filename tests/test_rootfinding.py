import math

import pytest

from ficcalm.errors import SolverError
from ficcalm.math import RootFindingError, bisect, brent, find_bracket, solve


def cubic(x):
    return x ** 3 - 2.0 * x - 5.0


def test_brent_cubic():
    result = brent(cubic, 2.0, 3.0, tol=1e-14)
    assert result.converged
    assert result.method == "brent"
    assert result.root == pytest.approx(2.0945514815423265, abs=1e-12)


def test_brent_reuses_endpoint_values():
    calls = []

    def f(x):
        calls.append(x)
        return math.cos(x) - x

    brent(f, 0.0, 1.0, f_lower=1.0, f_upper=math.cos(1.0) - 1.0)
    assert 0.0 not in calls
    assert 1.0 not in calls


def test_brent_root_at_endpoint():
    assert brent(lambda x: x - 1.0, 1.0, 2.0).root == 1.0


def test_brent_requires_sign_change():
    with pytest.raises(RootFindingError):
        brent(lambda x: x * x + 1.0, -1.0, 1.0)


def test_bisect():
    result = bisect(cubic, 2.0, 3.0, tol=1e-12)
    assert result.root == pytest.approx(2.0945514815423265, abs=1e-10)
    assert result.method == "bisect"


def test_find_bracket_expands():
    a, b, f_a, f_b = find_bracket(lambda x: x - 3.0, -0.1, 0.1)
    assert a < 3.0 < b
    assert f_a < 0 < f_b
    assert f_b == b - 3.0


def test_find_bracket_respects_max_abs():
    with pytest.raises(RootFindingError):
        find_bracket(lambda x: x - 3.0, -0.1, 0.1, max_abs=1.0)


def test_solve():
    result = solve(lambda y: (1.0 + y) ** 2 - 1.1025, 0.0, 0.01)
    assert result.root == pytest.approx(0.05, abs=1e-10)


def test_root_finding_error_is_solver_error():
    assert issubclass(RootFindingError, SolverError)
