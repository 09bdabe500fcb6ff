"""
Database infrastructure package.

Re-exports commonly used database components for convenient imports.
"""

from .connection import (
    Base,
    create_engine,
    create_session_maker,
    get_database_type,
    init_db,
    is_memory_database,
    retry_on_db_lock,
)
from .models import MemoryRow, PlanRow, SettingsRow
from .write_queue import WriteQueue

__all__ = [
    # Connection
    "Base",
    "create_engine",
    "create_session_maker",
    "get_database_type",
    "init_db",
    "is_memory_database",
    "retry_on_db_lock",
    # Models
    "MemoryRow",
    "PlanRow",
    "SettingsRow",
    # Queue
    "WriteQueue",
]
