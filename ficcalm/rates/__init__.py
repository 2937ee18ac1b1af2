"""
Interest rate primitives.
"""

from .interestrate import Compounding, InterestRate, RateDefinition

__all__ = ["Compounding", "InterestRate", "RateDefinition"]
