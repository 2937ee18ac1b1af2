"""
Enums shared by cash-flows and instruments.
"""

from enum import Enum


class Side(Enum):
    """Direction of a cash-flow from the holder's point of view."""

    PAY = -1
    RECEIVE = 1

    @property
    def sign(self) -> int:
        return self.value

    def inverse(self) -> "Side":
        return Side.RECEIVE if self is Side.PAY else Side.PAY


class CashflowType(Enum):
    DISBURSEMENT = "DISBURSEMENT"
    REDEMPTION = "REDEMPTION"
    FIXED_RATE_COUPON = "FIXED_RATE_COUPON"
    FLOATING_RATE_COUPON = "FLOATING_RATE_COUPON"
