"""
Domain layer for internal business logic data structures.

Structure:
- value_objects/: Enums and immutable result types (ElapsedTime, Milestone, ReminderEntry)
- services/: Pure domain logic (date parsing, counter, milestones, zodiac)
- exceptions.py: Error taxonomy shared by the store and the services
"""

from .exceptions import (
    ConfigurationError,
    DateParseError,
    ImportValidationError,
    PinError,
    RecordNotFound,
    StorageUnavailable,
    UnreadableRecord,
)
from .value_objects import (
    Collection,
    ElapsedTime,
    MemoryType,
    Milestone,
    NotificationRequest,
    PlanSort,
    Priority,
    ReminderEntry,
    ReminderFeed,
    ReminderKind,
)

__all__ = [
    # Exceptions
    "ConfigurationError",
    "DateParseError",
    "ImportValidationError",
    "PinError",
    "RecordNotFound",
    "StorageUnavailable",
    "UnreadableRecord",
    # Value objects
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
