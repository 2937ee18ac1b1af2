"""
Payment schedule generation.
"""

from .core import Schedule, SchedulePeriod
from .generator import daily_schedule, evaluation_schedule, make_schedule

__all__ = [
    "Schedule",
    "SchedulePeriod",
    "daily_schedule",
    "evaluation_schedule",
    "make_schedule",
]
