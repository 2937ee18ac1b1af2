"""
Core data structures for schedule generation.
"""

from dataclasses import dataclass
from datetime import date
from typing import List


@dataclass(frozen=True)
class SchedulePeriod:
    """A single accrual period of a payment schedule."""

    accrual_start: date
    accrual_end: date
    payment_date: date
    is_stub: bool = False


@dataclass
class Schedule:
    """Ordered schedule dates plus the periods between consecutive dates."""

    dates: List[date]
    periods: List[SchedulePeriod]

    def __len__(self) -> int:
        return len(self.dates)

    def __iter__(self):
        return iter(self.dates)
