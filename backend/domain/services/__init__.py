"""
Pure domain logic: calendar helpers and the counter/milestone calculators.

Nothing in this package touches storage or reads the clock.
"""

from .dates import (
    ceil_days,
    days_in_month,
    floor_days,
    parse_local_datetime,
    project_onto_year,
    start_of_day,
    try_parse_local_datetime,
)
from .elapsed_time import calculate_elapsed_time
from .milestones import MILESTONE_DAYS, next_milestone
from .zodiac import zodiac_sign

__all__ = [
    "MILESTONE_DAYS",
    "calculate_elapsed_time",
    "ceil_days",
    "days_in_month",
    "floor_days",
    "next_milestone",
    "parse_local_datetime",
    "project_onto_year",
    "start_of_day",
    "try_parse_local_datetime",
    "zodiac_sign",
]
