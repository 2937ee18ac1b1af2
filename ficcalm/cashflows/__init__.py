"""Cash-flow variants and their sign conventions."""

from .cashflow import (
    Cashflow,
    Coupon,
    Disbursement,
    FixedRateCoupon,
    FloatingRateCoupon,
    Redemption,
)
from .types import CashflowType, Side

__all__ = [
    "Cashflow",
    "CashflowType",
    "Coupon",
    "Disbursement",
    "FixedRateCoupon",
    "FloatingRateCoupon",
    "Redemption",
    "Side",
]
