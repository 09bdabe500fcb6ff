"""
Elapsed-time breakdown for the "time together" counter.

Pure function of (start, now, count_from_day_one): no clock reads, no state.
"""

from datetime import datetime, timedelta, tzinfo
from typing import Optional

from domain.value_objects.time_models import ElapsedTime

from .dates import DateLike, days_in_month, days_in_previous_month, floor_days, try_parse_local_datetime


def calculate_elapsed_time(
    start: DateLike,
    now: datetime,
    count_from_day_one: bool,
    tz: Optional[tzinfo] = None,
) -> ElapsedTime:
    """
    Break the time between `start` and `now` into calendar units.

    The breakdown subtracts field by field with borrowing. Borrowing into days
    uses the real length of the month(s) preceding `now`'s month, so the
    result never goes negative even across short months.

    With day-one counting the start date itself is day 1: one day is added to
    the day field, and if that reaches the length of `now`'s month the days
    roll over into a month. That rollover is a display approximation (the
    borrow above used the previous month's length) and is kept as-is.

    Args:
        start: Stored start date (may be unparseable)
        now: Current local time
        count_from_day_one: Whether the start date counts as day 1
        tz: Zone used to interpret timezone-aware values

    Returns:
        ElapsedTime, all zeros for an unparseable or future start
    """
    start_dt = try_parse_local_datetime(start, tz)
    now_dt = try_parse_local_datetime(now, tz)
    if start_dt is None or now_dt is None or start_dt > now_dt:
        return ElapsedTime.zero()

    total_days = floor_days(now_dt, start_dt) + (1 if count_from_day_one else 0)

    years = now_dt.year - start_dt.year
    months = now_dt.month - start_dt.month
    days = now_dt.day - start_dt.day
    hours = now_dt.hour - start_dt.hour
    minutes = now_dt.minute - start_dt.minute
    seconds = now_dt.second - start_dt.second

    if seconds < 0:
        seconds += 60
        minutes -= 1
    if minutes < 0:
        minutes += 60
        hours -= 1
    if hours < 0:
        hours += 24
        days -= 1

    anchor = now_dt.replace(day=1)
    while days < 0:
        days += days_in_previous_month(anchor)
        months -= 1
        anchor = (anchor - timedelta(days=1)).replace(day=1)

    while months < 0:
        months += 12
        years -= 1

    if count_from_day_one:
        days += 1
        if days >= days_in_month(now_dt.year, now_dt.month):
            days = 0
            months += 1
            if months >= 12:
                months = 0
                years += 1

    weeks, days = divmod(days, 7)

    return ElapsedTime(
        years=years,
        months=months,
        weeks=weeks,
        days=days,
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        total_days=total_days,
    )
