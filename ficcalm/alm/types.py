"""
ALM configuration types.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ficcalm.cashflows.types import Side
from ficcalm.conventions.period import Period
from ficcalm.conventions.types import Frequency
from ficcalm.instruments.types import RateType, Structure
from ficcalm.rates.interestrate import RateDefinition


class GrowthMode(Enum):
    """How much is placed when the book rolls over."""

    PAID_AMOUNT = "PAID_AMOUNT"
    ANNUAL = "ANNUAL"


@dataclass(frozen=True)
class RolloverStrategy:
    """One slice of the reinvestment mix; weights of a mix usually sum to one."""

    weight: float
    structure: Structure
    payment_frequency: Frequency
    tenor: Period
    side: Side
    rate_type: RateType
    rate_definition: RateDefinition
    discount_curve_id: int
    forecast_curve_id: Optional[int] = None


@dataclass
class RolloverConfig:
    growth_mode: GrowthMode = GrowthMode.PAID_AMOUNT
    growth_rate: float = 0.0
