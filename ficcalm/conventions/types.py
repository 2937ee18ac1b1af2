"""
Basic enums shared by date arithmetic, schedules and rates.
"""

from enum import Enum

from ficcalm.errors import InvalidValueError


class TimeUnit(Enum):
    """Units a period length can be expressed in."""

    DAYS = "D"
    WEEKS = "W"
    MONTHS = "M"
    YEARS = "Y"


class Frequency(Enum):
    """Payment / compounding frequencies, valued as periods per year."""

    ONCE = 0
    ANNUAL = 1
    SEMIANNUAL = 2
    EVERY_FOURTH_MONTH = 3
    QUARTERLY = 4
    BIMONTHLY = 6
    MONTHLY = 12
    BIWEEKLY = 26
    WEEKLY = 52
    DAILY = 365
    OTHER = -1

    def per_year(self) -> int:
        if self in (Frequency.ONCE, Frequency.OTHER):
            raise InvalidValueError(f"{self.name} has no periods-per-year value")
        return self.value


class BusinessDayAdjustment(Enum):
    """Business day adjustment rules."""

    NO_ADJUSTMENT = "NO_ADJUSTMENT"
    FOLLOWING = "FOLLOWING"
    MODIFIED_FOLLOWING = "MODIFIED_FOLLOWING"
    PRECEDING = "PRECEDING"
    MODIFIED_PRECEDING = "MODIFIED_PRECEDING"


class DateGenerationRule(Enum):
    """Direction in which schedule dates are rolled."""

    BACKWARD = "BACKWARD"
    FORWARD = "FORWARD"
