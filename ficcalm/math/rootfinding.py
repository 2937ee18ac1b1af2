"""Root-finding utilities (Brent's method with bracket expansion)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from ficcalm.errors import SolverError

logger = logging.getLogger(__name__)

Func = Callable[[float], float]


@dataclass
class RootResult:
    root: float
    iterations: int
    converged: bool
    method: str


class RootFindingError(SolverError):
    """Raised when root-finding fails to bracket or converge."""


def find_bracket(
    func: Func,
    lower: float,
    upper: float,
    *,
    guess: float = 0.0,
    expansion: float = 1.6,
    max_abs: Optional[float] = None,
    max_iter: int = 50,
) -> Tuple[float, float, float, float]:
    """Widen ``[lower, upper]`` around ``guess`` until ``func`` changes sign.

    Returns the bracket and the function values at its ends. Fails once either
    end exceeds ``max_abs`` in magnitude or after ``max_iter`` expansions.
    """
    a, b = lower, upper
    f_a = func(a)
    f_b = func(b)
    for iteration in range(max_iter):
        if f_a == 0.0 or f_b == 0.0 or f_a * f_b < 0:
            return a, b, f_a, f_b
        a = guess - (guess - a) * expansion
        b = guess + (b - guess) * expansion
        if max_abs is not None and max(abs(a), abs(b)) > max_abs:
            raise RootFindingError(
                f"Failed to bracket the root within +/-{max_abs} after {iteration + 1} expansions"
            )
        logger.debug("Expanding bracket to [%s, %s]", a, b)
        f_a = func(a)
        f_b = func(b)
    raise RootFindingError("Failed to bracket the root")


def bisect(
    func: Func, lower: float, upper: float, tol: float = 1e-10, max_iter: int = 200
) -> RootResult:
    f_lower = func(lower)
    f_upper = func(upper)
    if f_lower == 0.0:
        return RootResult(lower, 0, True, "bisect")
    if f_upper == 0.0:
        return RootResult(upper, 0, True, "bisect")
    if f_lower * f_upper > 0:
        raise RootFindingError("Bisection requires a sign change in the bracket")

    for iteration in range(1, max_iter + 1):
        mid = 0.5 * (lower + upper)
        f_mid = func(mid)
        if f_mid == 0.0 or 0.5 * abs(upper - lower) <= tol:
            return RootResult(mid, iteration, True, "bisect")
        if f_lower * f_mid < 0:
            upper, f_upper = mid, f_mid
        else:
            lower, f_lower = mid, f_mid
    raise RootFindingError("Bisection failed to converge")


def brent(
    func: Func,
    lower: float,
    upper: float,
    *,
    tol: float = 1e-10,
    max_iter: int = 100,
    f_lower: Optional[float] = None,
    f_upper: Optional[float] = None,
) -> RootResult:
    """Brent's method on a bracket with a sign change.

    Combines inverse quadratic interpolation, secant steps and bisection;
    converges once the bracket half-width drops below ``tol``.
    """
    a, b = lower, upper
    fa = func(a) if f_lower is None else f_lower
    fb = func(b) if f_upper is None else f_upper
    if fa == 0.0:
        return RootResult(a, 0, True, "brent")
    if fb == 0.0:
        return RootResult(b, 0, True, "brent")
    if fa * fb > 0:
        raise RootFindingError("Brent's method requires a sign change in the bracket")

    c, fc = a, fa
    d = e = b - a
    for iteration in range(1, max_iter + 1):
        if fb * fc > 0:
            c, fc = a, fa
            d = e = b - a
        if abs(fc) < abs(fb):
            a, b, c = b, c, b
            fa, fb, fc = fb, fc, fb

        tol1 = 2.0 * 1e-16 * abs(b) + 0.5 * tol
        xm = 0.5 * (c - b)
        if abs(xm) <= tol1 or fb == 0.0:
            logger.debug("Brent converged to %s after %s iterations", b, iteration)
            return RootResult(b, iteration, True, "brent")

        if abs(e) >= tol1 and abs(fa) > abs(fb):
            s = fb / fa
            if a == c:
                p = 2.0 * xm * s
                q = 1.0 - s
            else:
                q = fa / fc
                r = fb / fc
                p = s * (2.0 * xm * q * (q - r) - (b - a) * (r - 1.0))
                q = (q - 1.0) * (r - 1.0) * (s - 1.0)
            if p > 0:
                q = -q
            p = abs(p)
            if 2.0 * p < min(3.0 * xm * q - abs(tol1 * q), abs(e * q)):
                e, d = d, p / q
            else:
                d = xm
                e = d
        else:
            d = xm
            e = d

        a, fa = b, fb
        if abs(d) > tol1:
            b += d
        else:
            b += tol1 if xm > 0 else -tol1
        fb = func(b)
    raise RootFindingError(f"Brent's method failed to converge in {max_iter} iterations")


def solve(
    func: Func,
    lower: float,
    upper: float,
    *,
    tol: float = 1e-10,
    max_iter: int = 100,
    expansion: float = 1.6,
    max_abs: Optional[float] = None,
) -> RootResult:
    """Bracket the root starting from ``[lower, upper]`` then polish with Brent."""
    a, b, f_a, f_b = find_bracket(
        func, lower, upper, guess=0.5 * (lower + upper), expansion=expansion, max_abs=max_abs
    )
    return brent(func, a, b, tol=tol, max_iter=max_iter, f_lower=f_a, f_upper=f_b)
