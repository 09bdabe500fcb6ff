"""
Memory timeline and gallery workflows.
"""

import logging
import uuid
from datetime import datetime
from typing import List

from core.clock import Clock
from domain.exceptions import RecordNotFound
from domain.services.dates import try_parse_local_datetime
from domain.value_objects.enums import Collection
from schemas import GalleryItem, Memory, MemoryCreate

from services.persistent_store import PersistentStore

logger = logging.getLogger("MemoryService")


class MemoryService:
    def __init__(self, store: PersistentStore, clock: Clock):
        self.store = store
        self.clock = clock

    async def timeline(self) -> List[Memory]:
        """All memories, newest first. Undated memories go last."""
        memories = await self.store.get_all(Collection.MEMORIES)

        def sort_key(memory: Memory):
            happened = try_parse_local_datetime(memory.date, self.clock.tz)
            return (happened is not None, happened or datetime.min)

        return sorted(memories, key=sort_key, reverse=True)

    async def gallery(self) -> List[GalleryItem]:
        """Every media reference, in timeline order."""
        return [
            GalleryItem(memory_id=memory.id, index=index, media=media)
            for memory in await self.timeline()
            for index, media in enumerate(memory.media)
        ]

    async def create(self, data: MemoryCreate) -> Memory:
        memory = Memory.model_validate({**data.model_dump(), "id": data.id or uuid.uuid4().hex})
        await self.store.put(Collection.MEMORIES, memory)
        logger.info(f"Created memory {memory.id}: {memory.title}")
        return memory

    async def update(self, memory_id: str, data: MemoryCreate) -> Memory:
        """
        Replace a memory.

        Raises:
            RecordNotFound: If the memory does not exist
        """
        await self.store.require(Collection.MEMORIES, memory_id)
        memory = Memory.model_validate({**data.model_dump(), "id": memory_id})
        return await self.store.put(Collection.MEMORIES, memory)

    async def delete(self, memory_id: str) -> bool:
        return await self.store.delete(Collection.MEMORIES, memory_id)

    async def remove_media(self, memory_id: str, index: int) -> Memory:
        """
        Drop one media reference. The memory itself is kept even when it
        has no media left.

        Raises:
            RecordNotFound: If the memory or the media index does not exist
        """
        memory = await self.store.require(Collection.MEMORIES, memory_id)
        media = memory.media
        if not 0 <= index < len(media):
            raise RecordNotFound("media", f"{memory_id}[{index}]")

        removed = media[index]
        if memory.images:
            images = [image for position, image in enumerate(memory.images) if position != index]
            media_url = None if memory.media_url == removed else memory.media_url
        else:
            images = []
            media_url = None
        updated = memory.model_copy(update={"images": images, "media_url": media_url})
        await self.store.put(Collection.MEMORIES, updated)
        logger.info(f"Removed media {index} from memory {memory_id}")
        return updated
