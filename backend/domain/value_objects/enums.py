"""
Domain enums for type-safe constants.
"""

from enum import Enum


class Collection(str, Enum):
    """Durable collections owned by the persistent store."""

    SETTINGS = "settings"
    MEMORIES = "memories"
    PLANS = "plans"

    def __str__(self) -> str:
        return self.value


class Priority(str, Enum):
    """Plan priority levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    def __str__(self) -> str:
        return self.value

    @property
    def rank(self) -> int:
        """Numeric weight used for priority sorting (higher first)."""
        return {"low": 1, "medium": 2, "high": 3}[self.value]


class MemoryType(str, Enum):
    """Kind of content attached to a memory."""

    TEXT = "text"
    VOICE = "voice"
    IMAGE = "image"
    MIXED = "mixed"

    def __str__(self) -> str:
        return self.value


class ReminderKind(str, Enum):
    """Source of a reminder feed entry."""

    EVENT = "event"  # Anniversary, birthdays, yearly holidays
    PLAN = "plan"  # Plan countdowns and exact-time plan reminders
    MEMORY = "memory"  # "On this day" memories

    def __str__(self) -> str:
        return self.value


class PlanSort(str, Enum):
    """Sort orders offered by the plan list."""

    DATE = "date"
    PRIORITY = "priority"

    def __str__(self) -> str:
        return self.value


# Collections that hold many records keyed by id
RECORD_COLLECTIONS = (Collection.MEMORIES, Collection.PLANS)
