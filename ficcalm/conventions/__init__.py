"""
Market conventions: periods, frequencies, day counters and calendars.
"""

from .calendars import (
    NULL_CALENDAR,
    TARGET,
    UNITED_STATES,
    WEEKENDS_ONLY,
    Calendar,
    get_calendar,
)
from .daycount import (
    ACT_360,
    ACT_365F,
    ACT_36525,
    ACT_ACT,
    THIRTY_360,
    THIRTY_360E,
    DayCounter,
    get_day_counter,
)
from .period import Period, advance, days_between, to_date
from .types import BusinessDayAdjustment, DateGenerationRule, Frequency, TimeUnit

__all__ = [
    # Date algebra
    "Period",
    "TimeUnit",
    "advance",
    "days_between",
    "to_date",
    # Enums
    "Frequency",
    "BusinessDayAdjustment",
    "DateGenerationRule",
    # Day counters
    "DayCounter",
    "ACT_360",
    "ACT_365F",
    "ACT_36525",
    "ACT_ACT",
    "THIRTY_360",
    "THIRTY_360E",
    "get_day_counter",
    # Calendars
    "Calendar",
    "NULL_CALENDAR",
    "TARGET",
    "UNITED_STATES",
    "WEEKENDS_ONLY",
    "get_calendar",
]
