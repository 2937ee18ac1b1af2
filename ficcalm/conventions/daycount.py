"""
QuantLib-backed day count conventions.

Year fractions drive every compounding, discounting and interpolation step of
the pricing pipeline, so all of them go through QuantLib's implementations.
"""

from datetime import date, datetime
from typing import Union

import QuantLib as ql

from ficcalm.errors import InvalidValueError

from .period import to_date


def _to_ql_date(dt: Union[date, datetime]) -> ql.Date:
    """Convert Python date/datetime to QuantLib Date."""
    py_date = to_date(dt)
    return ql.Date(py_date.day, py_date.month, py_date.year)


class DayCounter:
    """Base class for QuantLib-backed day count conventions."""

    def __init__(self, name: str, ql_daycount: ql.DayCounter):
        self.name = name
        self._ql_daycount = ql_daycount

    def year_fraction(
        self, start: Union[date, datetime], end: Union[date, datetime]
    ) -> float:
        """Year fraction between two dates (negative when ``end < start``)."""
        return self._ql_daycount.yearFraction(_to_ql_date(start), _to_ql_date(end))

    def day_count(
        self, start: Union[date, datetime], end: Union[date, datetime]
    ) -> int:
        """Number of days between two dates under this convention."""
        return self._ql_daycount.dayCount(_to_ql_date(start), _to_ql_date(end))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, DayCounter) and other.name == self.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class Actual360(DayCounter):
    """ACT/360: money market and most floating legs."""

    def __init__(self):
        super().__init__("ACT/360", ql.Actual360())


class Actual365Fixed(DayCounter):
    """ACT/365F."""

    def __init__(self):
        super().__init__("ACT/365F", ql.Actual365Fixed())


class Actual36525(DayCounter):
    """ACT/365.25: actual days over an average Julian year."""

    def __init__(self):
        # QuantLib supplies the day count; the denominator is applied here
        super().__init__("ACT/365.25", ql.Actual365Fixed())

    def year_fraction(
        self, start: Union[date, datetime], end: Union[date, datetime]
    ) -> float:
        return (to_date(end) - to_date(start)).days / 365.25


class Thirty360(DayCounter):
    """30/360 US bond basis."""

    def __init__(self):
        super().__init__("30/360", ql.Thirty360(ql.Thirty360.BondBasis))


class Thirty360European(DayCounter):
    """30E/360."""

    def __init__(self):
        super().__init__("30E/360", ql.Thirty360(ql.Thirty360.European))


class ActualActualISDA(DayCounter):
    """ACT/ACT ISDA."""

    def __init__(self):
        super().__init__("ACT/ACT", ql.ActualActual(ql.ActualActual.ISDA))


# Pre-defined day counter instances
ACT_360 = Actual360()
ACT_365F = Actual365Fixed()
ACT_36525 = Actual36525()
THIRTY_360 = Thirty360()
THIRTY_360E = Thirty360European()
ACT_ACT = ActualActualISDA()

# Registry
DAY_COUNTERS = {
    "ACT/360": ACT_360,
    "ACTUAL/360": ACT_360,
    "ACTUAL360": ACT_360,
    "ACT/365F": ACT_365F,
    "ACT/365": ACT_365F,
    "ACTUAL/365": ACT_365F,
    "ACTUAL365": ACT_365F,
    "ACT/365.25": ACT_36525,
    "ACTUAL/365.25": ACT_36525,
    "30/360": THIRTY_360,
    "30U/360": THIRTY_360,
    "THIRTY360": THIRTY_360,
    "30E/360": THIRTY_360E,
    "30/360E": THIRTY_360E,
    "ACT/ACT": ACT_ACT,
    "ACTUAL/ACTUAL": ACT_ACT,
}


def get_day_counter(name: str) -> DayCounter:
    """Get a day counter by name."""
    name_upper = name.upper()
    if name_upper not in DAY_COUNTERS:
        raise InvalidValueError(
            f"Unknown day count convention: {name}. "
            f"Available: {list(DAY_COUNTERS.keys())}"
        )
    return DAY_COUNTERS[name_upper]
