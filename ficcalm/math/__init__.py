"""Numerical helpers: root finding and reverse-mode AD."""

from .ad import Var, backward, exp, gradient, hessian, log, reset_tape, sqrt, tape_size
from .rootfinding import RootFindingError, RootResult, bisect, brent, find_bracket, solve

__all__ = [
    "Var",
    "backward",
    "exp",
    "gradient",
    "hessian",
    "log",
    "reset_tape",
    "sqrt",
    "tape_size",
    "RootFindingError",
    "RootResult",
    "bisect",
    "brent",
    "find_bracket",
    "solve",
]
