"""
CRUD operations for the keyed record collections (memories, plans).

Records are stored as whole JSON documents; `position` keeps insertion order.
"""

import logging
from typing import Any, Dict, List, Optional, Type

from domain.value_objects.enums import Collection
from infrastructure.database import MemoryRow, PlanRow, SettingsRow
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger("CRUD")

ROW_MODELS: Dict[Collection, Type] = {
    Collection.MEMORIES: MemoryRow,
    Collection.PLANS: PlanRow,
}


def row_model(collection: Collection) -> Type:
    try:
        return ROW_MODELS[Collection(collection)]
    except (KeyError, ValueError):
        raise ValueError(f"{collection!r} is not a record collection") from None


async def list_records(db: AsyncSession, collection: Collection) -> List[Dict[str, Any]]:
    """All documents of a collection in insertion order."""
    model = row_model(collection)
    result = await db.execute(select(model).order_by(model.position))
    return [dict(row.payload) for row in result.scalars().all()]


async def get_record(db: AsyncSession, collection: Collection, record_id: str) -> Optional[Dict[str, Any]]:
    row = await db.get(row_model(collection), record_id)
    if row is None:
        return None
    return dict(row.payload)


async def _next_position(db: AsyncSession, model: Type) -> int:
    result = await db.execute(select(func.max(model.position)))
    current = result.scalar()
    return 0 if current is None else current + 1


async def upsert_record(db: AsyncSession, collection: Collection, record_id: str, payload: Dict[str, Any]) -> bool:
    """
    Insert a record, or fully replace the existing one with the same id.

    Returns:
        True if a new record was inserted
    """
    model = row_model(collection)
    row = await db.get(model, record_id)
    created = row is None
    if created:
        db.add(model(id=record_id, position=await _next_position(db, model), payload=payload))
    else:
        row.payload = payload
    await db.commit()
    return created


async def delete_record(db: AsyncSession, collection: Collection, record_id: str) -> bool:
    """Delete a record by id. Returns False when there was nothing to delete."""
    model = row_model(collection)
    result = await db.execute(delete(model).where(model.id == record_id))
    await db.commit()
    return result.rowcount > 0


async def clear_all(db: AsyncSession) -> None:
    """Empty the settings, memories and plans tables in one transaction."""
    for model in (SettingsRow, MemoryRow, PlanRow):
        await db.execute(delete(model))
    await db.commit()
    logger.info("Cleared all collections")
