"""
CRUD operations for the settings singleton.
"""

import logging
from typing import Any, Dict, Optional

from infrastructure.database import SettingsRow
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger("CRUD")


async def get_settings_document(db: AsyncSession, key: str) -> Optional[Dict[str, Any]]:
    """Return the stored settings document, or None when nothing was saved yet."""
    row = await db.get(SettingsRow, key)
    if row is None:
        return None
    return dict(row.payload)


async def save_settings_document(db: AsyncSession, key: str, payload: Dict[str, Any]) -> None:
    """Insert or fully replace the settings document."""
    row = await db.get(SettingsRow, key)
    if row is None:
        db.add(SettingsRow(id=key, payload=payload))
    else:
        row.payload = payload
    await db.commit()
