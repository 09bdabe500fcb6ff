"""
Pydantic schemas for stored records, backups and API payloads.

Stored records use camelCase keys on the wire (the backup file format) and
snake_case attributes in Python.
"""

from schemas.backup import SNAPSHOT_FORMAT_VERSION, ImportSummary, Snapshot, SnapshotData
from schemas.common import CamelSchema, RecordModel
from schemas.dashboard import DashboardOverview, ElapsedTimeOut, MilestoneOut, PartnerSummary, ReminderEntryOut
from schemas.memories import MAX_MEDIA_PER_MEMORY, GalleryItem, Memory, MemoryCreate
from schemas.plans import Plan, PlanCompletion, PlanCountdown, PlanCreate
from schemas.settings import (
    SETTINGS_KEY,
    CoupleSettings,
    DisplayPreferences,
    NotificationToggles,
    PartnerProfile,
    SettingsView,
)

__all__ = [
    # Common
    "CamelSchema",
    "RecordModel",
    # Settings
    "SETTINGS_KEY",
    "CoupleSettings",
    "DisplayPreferences",
    "NotificationToggles",
    "PartnerProfile",
    "SettingsView",
    # Memories
    "MAX_MEDIA_PER_MEMORY",
    "GalleryItem",
    "Memory",
    "MemoryCreate",
    # Plans
    "Plan",
    "PlanCompletion",
    "PlanCountdown",
    "PlanCreate",
    # Backup
    "SNAPSHOT_FORMAT_VERSION",
    "ImportSummary",
    "Snapshot",
    "SnapshotData",
    # Dashboard
    "DashboardOverview",
    "ElapsedTimeOut",
    "MilestoneOut",
    "PartnerSummary",
    "ReminderEntryOut",
]
