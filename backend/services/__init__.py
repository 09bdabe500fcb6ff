"""
Services layer for business logic.

This package contains service classes that handle business logic
and coordinate between the store and the HTTP layer.
"""

from .backup_service import BackupCodec
from .dashboard_service import DashboardService
from .memory_service import MemoryService
from .persistent_store import PersistentStore
from .plan_service import PlanService
from .reminder_service import ReminderEvaluator
from .security_service import SecurityService
from .settings_service import SettingsService

__all__ = [
    "BackupCodec",
    "DashboardService",
    "MemoryService",
    "PersistentStore",
    "PlanService",
    "ReminderEvaluator",
    "SecurityService",
    "SettingsService",
]
