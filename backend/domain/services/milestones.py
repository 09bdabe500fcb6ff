"""
Milestone countdown for the home screen.
"""

from datetime import datetime, timedelta, tzinfo
from typing import Optional

from domain.value_objects.time_models import Milestone

from .dates import DateLike, ceil_days, floor_days, project_onto_year, start_of_day, try_parse_local_datetime

# Day counts worth celebrating, ascending
MILESTONE_DAYS = (100, 200, 300, 365, 730, 1000, 1095, 1460, 1825, 2000, 3000)

LOADING_LABEL = "loading"
ANNIVERSARY_LABEL = "Anniversary"


def milestone_label(day_count: int) -> str:
    return f"Milestone {day_count} days"


def next_milestone(start: DateLike, today: datetime, tz: Optional[tzinfo] = None) -> Milestone:
    """
    Find the next milestone strictly after today.

    Day-count milestones come first. Once every entry in MILESTONE_DAYS has
    passed, the next yearly anniversary of the start date is used instead.
    Comparison is date-only; the time of day is ignored on both sides.
    """
    start_dt = try_parse_local_datetime(start, tz)
    today_dt = try_parse_local_datetime(today, tz)
    if start_dt is None or today_dt is None:
        return Milestone(days_left=0, label=LOADING_LABEL, target_date="")

    start_day = start_of_day(start_dt)
    today_day = start_of_day(today_dt)
    days_passed = floor_days(today_day, start_day)

    for day_count in MILESTONE_DAYS:
        if day_count > days_passed:
            target = start_day + timedelta(days=day_count)
            return Milestone(
                days_left=ceil_days(target, today_day),
                label=milestone_label(day_count),
                target_date=target.date().isoformat(),
            )

    anniversary = project_onto_year(start_day, today_day.year)
    if anniversary <= today_day:
        anniversary = project_onto_year(start_day, today_day.year + 1)
    return Milestone(
        days_left=ceil_days(anniversary, today_day),
        label=ANNIVERSARY_LABEL,
        target_date=anniversary.date().isoformat(),
    )
