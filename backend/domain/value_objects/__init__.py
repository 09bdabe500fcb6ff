"""
Value objects: enums and immutable result types.
"""

from .enums import (
    RECORD_COLLECTIONS,
    Collection,
    MemoryType,
    PlanSort,
    Priority,
    ReminderKind,
)
from .time_models import ElapsedTime, Milestone, NotificationRequest, ReminderEntry, ReminderFeed

__all__ = [
    "RECORD_COLLECTIONS",
    "Collection",
    "ElapsedTime",
    "MemoryType",
    "Milestone",
    "NotificationRequest",
    "PlanSort",
    "Priority",
    "ReminderEntry",
    "ReminderFeed",
    "ReminderKind",
]
