"""
Principal profiles for amortizing structures.
"""

from typing import List, Sequence

from ficcalm.errors import InvalidValueError


def equal_redemptions(notional: float, n_periods: int) -> List[float]:
    """Split ``notional`` into ``n_periods`` equal redemptions."""
    if n_periods <= 0:
        raise InvalidValueError("At least one period is required")
    amount = notional / n_periods
    redemptions = [amount] * (n_periods - 1)
    redemptions.append(notional - amount * (n_periods - 1))
    return redemptions


def equal_payments(notional: float, compound_factors: Sequence[float]) -> List[float]:
    """
    Redemptions that make interest plus principal constant every period.

    With ``c_i`` the period compound factors, the payment ``P`` solves
    ``N * prod(c) = P * sum_i prod_{j > i} c_j``. The last redemption absorbs
    rounding so the profile always sums to ``notional``.
    """
    n = len(compound_factors)
    if n == 0:
        raise InvalidValueError("At least one period is required")
    growth = 1.0
    annuity = 0.0
    for factor in reversed(compound_factors):
        annuity += growth
        growth *= factor
    payment = notional * growth / annuity

    redemptions = []
    outstanding = notional
    for factor in compound_factors[:-1]:
        principal = payment - outstanding * (factor - 1.0)
        redemptions.append(principal)
        outstanding -= principal
    redemptions.append(outstanding)
    return redemptions
