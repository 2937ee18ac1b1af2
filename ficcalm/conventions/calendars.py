"""
QuantLib-backed business calendars and date adjustment.
"""

from datetime import date, datetime
from typing import Union

import QuantLib as ql

from ficcalm.errors import InvalidValueError

from .period import to_date
from .types import BusinessDayAdjustment


def _to_ql_date(dt: Union[date, datetime]) -> ql.Date:
    """Convert Python date/datetime to QuantLib Date."""
    dt = to_date(dt)
    return ql.Date(dt.day, dt.month, dt.year)


def _to_py_date(ql_date: ql.Date) -> date:
    """Convert QuantLib Date to Python date."""
    return date(ql_date.year(), ql_date.month(), ql_date.dayOfMonth())


_QL_ADJUSTMENTS = {
    BusinessDayAdjustment.NO_ADJUSTMENT: ql.Unadjusted,
    BusinessDayAdjustment.FOLLOWING: ql.Following,
    BusinessDayAdjustment.MODIFIED_FOLLOWING: ql.ModifiedFollowing,
    BusinessDayAdjustment.PRECEDING: ql.Preceding,
    BusinessDayAdjustment.MODIFIED_PRECEDING: ql.ModifiedPreceding,
}


class Calendar:
    """Business day calendar wrapping a ``ql.Calendar``."""

    def __init__(self, name: str, ql_calendar: ql.Calendar):
        self.name = name
        self._ql_calendar = ql_calendar

    def is_business_day(self, dt: Union[date, datetime]) -> bool:
        return self._ql_calendar.isBusinessDay(_to_ql_date(dt))

    def is_holiday(self, dt: Union[date, datetime]) -> bool:
        return self._ql_calendar.isHoliday(_to_ql_date(dt))

    def adjust(
        self,
        dt: Union[date, datetime],
        adjustment: BusinessDayAdjustment = BusinessDayAdjustment.FOLLOWING,
    ) -> date:
        """Roll ``dt`` onto a business day."""
        if adjustment == BusinessDayAdjustment.NO_ADJUSTMENT:
            return to_date(dt)
        ql_result = self._ql_calendar.adjust(_to_ql_date(dt), _QL_ADJUSTMENTS[adjustment])
        return _to_py_date(ql_result)

    def add_business_days(self, start_date: Union[date, datetime], days: int) -> date:
        ql_result = self._ql_calendar.advance(_to_ql_date(start_date), days, ql.Days)
        return _to_py_date(ql_result)

    def __str__(self) -> str:
        return self.name


class NullCalendar(Calendar):
    """Every day is a business day."""

    def __init__(self):
        super().__init__("Null", ql.NullCalendar())


class WeekendsOnlyCalendar(Calendar):
    def __init__(self):
        super().__init__("WeekendsOnly", ql.WeekendsOnly())


class TargetCalendar(Calendar):
    def __init__(self):
        super().__init__("TARGET", ql.TARGET())


class UnitedStatesCalendar(Calendar):
    def __init__(self):
        super().__init__("UnitedStates", ql.UnitedStates(ql.UnitedStates.Settlement))


class BrazilCalendar(Calendar):
    def __init__(self):
        super().__init__("Brazil", ql.Brazil())


# Pre-defined calendar instances
NULL_CALENDAR = NullCalendar()
WEEKENDS_ONLY = WeekendsOnlyCalendar()
TARGET = TargetCalendar()
UNITED_STATES = UnitedStatesCalendar()
BRAZIL = BrazilCalendar()

CALENDARS = {
    "NULL": NULL_CALENDAR,
    "WEEKEND": WEEKENDS_ONLY,
    "WEEKENDSONLY": WEEKENDS_ONLY,
    "TARGET": TARGET,
    "EUR": TARGET,
    "US": UNITED_STATES,
    "UNITEDSTATES": UNITED_STATES,
    "BRAZIL": BRAZIL,
}


def get_calendar(name: str) -> Calendar:
    """Get a calendar by name."""
    key = name.upper()
    if key not in CALENDARS:
        raise InvalidValueError(
            f"Unknown calendar: {name}. Available: {list(CALENDARS.keys())}"
        )
    return CALENDARS[key]
