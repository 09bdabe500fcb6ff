"""Memory timeline, gallery and CRUD routes."""

from typing import List

from core.dependencies import get_memory_service
from domain.exceptions import RecordNotFound
from fastapi import APIRouter, Depends
from schemas import GalleryItem, Memory, MemoryCreate
from services import MemoryService

router = APIRouter()


@router.get("", response_model=List[Memory])
async def list_memories(service: MemoryService = Depends(get_memory_service)):
    """All memories, newest first."""
    return await service.timeline()


@router.post("", response_model=Memory, status_code=201)
async def create_memory(memory: MemoryCreate, service: MemoryService = Depends(get_memory_service)):
    return await service.create(memory)


@router.get("/gallery", response_model=List[GalleryItem])
async def get_gallery(service: MemoryService = Depends(get_memory_service)):
    """Every photo/voice reference across all memories."""
    return await service.gallery()


@router.put("/{memory_id}", response_model=Memory)
async def update_memory(memory_id: str, memory: MemoryCreate, service: MemoryService = Depends(get_memory_service)):
    return await service.update(memory_id, memory)


@router.delete("/{memory_id}")
async def delete_memory(memory_id: str, service: MemoryService = Depends(get_memory_service)):
    if not await service.delete(memory_id):
        raise RecordNotFound("memories", memory_id)
    return {"message": "Memory deleted successfully"}


@router.delete("/{memory_id}/media/{index}", response_model=Memory)
async def remove_media(memory_id: str, index: int, service: MemoryService = Depends(get_memory_service)):
    """Remove one media reference; the memory itself is kept."""
    return await service.remove_media(memory_id, index)
