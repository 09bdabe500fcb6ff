"""
Calendar helpers shared by the counter, milestone and reminder logic.

Stored dates are free-form strings (whatever the client saved), so parsing is
the only place that can fail. parse_local_datetime raises DateParseError;
every public calculation uses try_parse_local_datetime and degrades to a
default value instead.

All arithmetic is done on naive wall-clock datetimes in the user's zone.
Timezone-aware inputs are converted to that zone first.
"""

import calendar
import math
from datetime import date, datetime, timedelta, tzinfo
from typing import Optional, Union

from domain.exceptions import DateParseError

ONE_DAY = timedelta(days=1)

DateLike = Union[str, date, datetime, None]


def parse_local_datetime(value: DateLike, tz: Optional[tzinfo] = None) -> datetime:
    """
    Parse a stored date value into a naive local datetime.

    Accepts ISO-8601 dates ("2024-01-01"), datetimes with or without an
    offset ("2024-01-01T10:00:00.000Z") and date/datetime objects.

    Args:
        value: Value to parse
        tz: Zone that naive results are expressed in (None = system local)

    Returns:
        Naive datetime

    Raises:
        DateParseError: If the value is empty or not a valid date
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise DateParseError(value)
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as e:
            raise DateParseError(value) from e
    else:
        raise DateParseError(value)

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(tz).replace(tzinfo=None)
    return parsed


def try_parse_local_datetime(value: DateLike, tz: Optional[tzinfo] = None) -> Optional[datetime]:
    """Like parse_local_datetime, but returns None for unusable input."""
    try:
        return parse_local_datetime(value, tz)
    except DateParseError:
        return None


def start_of_day(moment: datetime) -> datetime:
    """Zero the time part of a datetime."""
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def days_in_previous_month(moment: datetime) -> int:
    """Length of the calendar month before the month of `moment`."""
    if moment.month == 1:
        return days_in_month(moment.year - 1, 12)
    return days_in_month(moment.year, moment.month - 1)


def floor_days(later: datetime, earlier: datetime) -> int:
    """Whole days from `earlier` to `later`, rounded down."""
    return (later - earlier) // ONE_DAY


def ceil_days(later: datetime, earlier: datetime) -> int:
    """Days from `earlier` to `later`, rounded up."""
    delta = (later - earlier) / ONE_DAY
    return math.ceil(delta)


def project_onto_year(moment: datetime, year: int) -> datetime:
    """
    Move a date's month/day onto another year (time is zeroed).

    February 29 rolls over to March 1 in non-leap years.
    """
    if moment.month == 2 and moment.day == 29 and not calendar.isleap(year):
        return datetime(year, 3, 1)
    return datetime(year, moment.month, moment.day)


def same_calendar_day(a: datetime, b: datetime) -> bool:
    return a.date() == b.date()
