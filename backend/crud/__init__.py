"""
CRUD operations module.

This module provides database operations organized by collection.
All CRUD functions are exported at the package level.
"""

from .records import (
    clear_all,
    delete_record,
    get_record,
    list_records,
    row_model,
    upsert_record,
)
from .settings import get_settings_document, save_settings_document

__all__ = [
    # Settings
    "get_settings_document",
    "save_settings_document",
    # Records
    "list_records",
    "get_record",
    "upsert_record",
    "delete_record",
    "clear_all",
    "row_model",
]
