"""
Yield term structures.

Every curve exposes the same contract: ``reference_date``,
``discount_factor(date)``, ``forward_rate(start, end, compounding, frequency)``
and the roll-down operations ``advance_to_date`` / ``advance_to_period``,
which return new curves and leave the source curve untouched.
"""

from .base import YieldProvider, YieldTermStructure
from .composite import CompositeTermStructure
from .discount import DiscountTermStructure
from .flat import FlatForwardTermStructure
from .zero import TenorBasedZeroRateTermStructure, ZeroRateTermStructure

__all__ = [
    "YieldProvider",
    "YieldTermStructure",
    "FlatForwardTermStructure",
    "DiscountTermStructure",
    "ZeroRateTermStructure",
    "TenorBasedZeroRateTermStructure",
    "CompositeTermStructure",
]
