"""
Value objects returned by the calendar calculators and the reminder evaluator.

These are plain dataclasses so the rendering layer (and FastAPI) can consume
them directly without doing any date arithmetic itself.
"""

from dataclasses import dataclass, field
from typing import List

from .enums import ReminderKind


@dataclass(frozen=True)
class ElapsedTime:
    """Calendar-aware breakdown of the time since a start date."""

    years: int = 0
    months: int = 0
    weeks: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    total_days: int = 0

    @classmethod
    def zero(cls) -> "ElapsedTime":
        return cls()


@dataclass(frozen=True)
class Milestone:
    """Next notable day-count (or yearly anniversary) after today."""

    days_left: int
    label: str
    target_date: str  # ISO date, "" when the start date is unusable


@dataclass(frozen=True)
class ReminderEntry:
    """A single line of today's reminder feed."""

    title: str
    date: str
    kind: ReminderKind


@dataclass(frozen=True)
class NotificationRequest:
    """A notification handed to the NotificationDispatcher."""

    title: str
    body: str


@dataclass
class ReminderFeed:
    """Result of one evaluator pass."""

    entries: List[ReminderEntry] = field(default_factory=list)
    dispatched: List[NotificationRequest] = field(default_factory=list)

    @property
    def titles(self) -> List[str]:
        return [entry.title for entry in self.entries]
