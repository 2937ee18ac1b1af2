"""
Schedule generation: coupon schedules and daily evaluation schedules.
"""

import logging
from datetime import date, timedelta
from typing import List, Optional

from ficcalm.conventions.calendars import NULL_CALENDAR, Calendar
from ficcalm.conventions.period import Period, to_date
from ficcalm.conventions.types import (
    BusinessDayAdjustment,
    DateGenerationRule,
    Frequency,
)
from ficcalm.errors import InvalidValueError, ValueNotSetError

from .core import Schedule, SchedulePeriod

logger = logging.getLogger(__name__)


def make_schedule(
    start_date: date,
    end_date: date,
    *,
    tenor: Optional[Period] = None,
    frequency: Optional[Frequency] = None,
    calendar: Calendar = NULL_CALENDAR,
    adjustment: BusinessDayAdjustment = BusinessDayAdjustment.NO_ADJUSTMENT,
    rule: DateGenerationRule = DateGenerationRule.BACKWARD,
    first_date: Optional[date] = None,
) -> Schedule:
    """
    Generate a payment schedule between two dates.

    Args:
        start_date: Effective (unadjusted) start date
        end_date: Maturity (unadjusted) date
        tenor: Step between dates; derived from ``frequency`` when omitted
        frequency: Payment frequency; ``Frequency.ONCE`` gives ``[start, end]``
        calendar: Calendar used to adjust every generated date
        adjustment: Business day adjustment rule
        rule: Roll backward from maturity (short initial stub) or forward
            from the start date (short final stub)
        first_date: Optional explicit first coupon date

    Returns:
        Schedule with adjusted dates and the accrual periods between them.
    """
    start_date = to_date(start_date)
    end_date = to_date(end_date)
    if start_date >= end_date:
        raise InvalidValueError(
            f"Start date {start_date} must be before end date {end_date}"
        )
    if first_date is not None and not start_date < first_date <= end_date:
        raise InvalidValueError("First coupon date must be after start date")

    if tenor is None:
        if frequency is None:
            raise ValueNotSetError("Either tenor or frequency is required")
        if frequency == Frequency.ONCE:
            unadjusted = [start_date, end_date]
            return _build(unadjusted, calendar, adjustment, None)
        tenor = Period.from_frequency(frequency)
    if tenor.length <= 0:
        raise InvalidValueError(f"Schedule tenor must be positive: {tenor}")

    if first_date is not None:
        tail = _roll(first_date, end_date, tenor, rule)
        unadjusted = [start_date] + tail
    else:
        unadjusted = _roll(start_date, end_date, tenor, rule)

    return _build(unadjusted, calendar, adjustment, tenor)


def _roll(
    start_date: date, end_date: date, tenor: Period, rule: DateGenerationRule
) -> List[date]:
    """Generate unadjusted dates; stubs land on the side opposite the roll."""
    if rule == DateGenerationRule.BACKWARD:
        dates = [end_date]
        k = 1
        while True:
            candidate = end_date - tenor * k
            if candidate <= start_date:
                break
            dates.append(candidate)
            k += 1
        dates.append(start_date)
        dates.reverse()
        return dates

    dates = [start_date]
    k = 1
    while True:
        candidate = start_date + tenor * k
        if candidate >= end_date:
            break
        dates.append(candidate)
        k += 1
    dates.append(end_date)
    return dates


def _build(
    unadjusted: List[date],
    calendar: Calendar,
    adjustment: BusinessDayAdjustment,
    tenor: Optional[Period],
) -> Schedule:
    adjusted = [calendar.adjust(d, adjustment) for d in unadjusted]
    periods = []
    for i in range(len(adjusted) - 1):
        is_stub = False
        if tenor is not None:
            is_stub = unadjusted[i] + tenor != unadjusted[i + 1]
        periods.append(
            SchedulePeriod(
                accrual_start=adjusted[i],
                accrual_end=adjusted[i + 1],
                payment_date=adjusted[i + 1],
                is_stub=is_stub,
            )
        )
    logger.debug(
        "Generated schedule %s -> %s with %s periods",
        adjusted[0],
        adjusted[-1],
        len(periods),
    )
    return Schedule(dates=adjusted, periods=periods)


def daily_schedule(start_date: date, end_date: date) -> List[date]:
    """Every calendar day from ``start_date`` to ``end_date`` inclusive."""
    start_date = to_date(start_date)
    end_date = to_date(end_date)
    n_days = (end_date - start_date).days
    return [start_date + timedelta(days=i) for i in range(n_days + 1)]


def evaluation_schedule(reference_date: date, horizon: Period) -> List[date]:
    """Unadjusted daily schedule covering ``[reference_date, reference_date + horizon]``."""
    if horizon.length < 0:
        raise InvalidValueError(f"Horizon must not be negative: {horizon}")
    return daily_schedule(reference_date, reference_date + horizon)
