"""
Instrument taxonomy.
"""

from enum import Enum


class Structure(Enum):
    """How principal is disbursed and redeemed."""

    BULLET = "BULLET"
    EQUAL_REDEMPTIONS = "EQUAL_REDEMPTIONS"
    ZERO = "ZERO"
    EQUAL_PAYMENTS = "EQUAL_PAYMENTS"
    OTHER = "OTHER"


class RateType(Enum):
    FIXED = "FIXED"
    FLOATING = "FLOATING"
    FIXED_THEN_FLOATING = "FIXED_THEN_FLOATING"
    FLOATING_THEN_FIXED = "FLOATING_THEN_FIXED"
    FIXED_THEN_FIXED = "FIXED_THEN_FIXED"
    SHUFFLED = "SHUFFLED"


class PositionType(Enum):
    """Whether an instrument was part of the input book or generated by a simulation."""

    BASE = "BASE"
    SIMULATED = "SIMULATED"
