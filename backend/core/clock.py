"""
Injectable clock.

Every "now"/"today" comparison goes through a Clock so reminder and counter
behavior can be tested at fixed dates. Clocks return naive wall-clock time in
the user's zone; that is the frame all stored dates are interpreted in.
"""

from datetime import datetime, timedelta, tzinfo
from typing import Optional, Protocol


class Clock(Protocol):
    def now(self) -> datetime: ...

    @property
    def tz(self) -> Optional[tzinfo]: ...


class SystemClock:
    """Reads the system time, optionally converted to a configured zone."""

    def __init__(self, tz: Optional[tzinfo] = None):
        self._tz = tz

    @property
    def tz(self) -> Optional[tzinfo]:
        return self._tz

    def now(self) -> datetime:
        if self._tz is None:
            return datetime.now()
        return datetime.now(self._tz).replace(tzinfo=None)


class FixedClock:
    """A clock that only moves when told to."""

    def __init__(self, moment: datetime, tz: Optional[tzinfo] = None):
        self._moment = to_local_naive(moment, tz)
        self._tz = tz

    @property
    def tz(self) -> Optional[tzinfo]:
        return self._tz

    def now(self) -> datetime:
        return self._moment

    def set(self, moment: datetime) -> None:
        self._moment = to_local_naive(moment, self._tz)

    def advance(self, **kwargs) -> datetime:
        """Move forward by a timedelta given as keyword arguments."""
        self._moment += timedelta(**kwargs)
        return self._moment


def to_local_naive(dt: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """
    Convert a datetime to naive wall-clock time in `tz`.

    Naive values are assumed to already be local and returned as-is.
    """
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(tz).replace(tzinfo=None)
