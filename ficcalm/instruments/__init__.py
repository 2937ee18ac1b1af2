"""Fixed and floating rate instruments."""

from .amortization import equal_payments, equal_redemptions
from .builders import make_fixed_rate_instrument, make_floating_rate_instrument
from .instrument import FixedRateInstrument, FloatingRateInstrument, Instrument
from .swap import FixFloatSwap, make_fix_float_swap
from .types import PositionType, RateType, Structure

__all__ = [
    "FixFloatSwap",
    "FixedRateInstrument",
    "FloatingRateInstrument",
    "Instrument",
    "PositionType",
    "RateType",
    "Structure",
    "equal_payments",
    "equal_redemptions",
    "make_fix_float_swap",
    "make_fixed_rate_instrument",
    "make_floating_rate_instrument",
]
