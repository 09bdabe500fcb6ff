"""Memory-related schemas."""

from typing import Any, List, Optional

from domain.value_objects.enums import MemoryType
from pydantic import Field, field_validator

from schemas.common import CamelSchema, RecordModel, none_to_empty_list

MAX_MEDIA_PER_MEMORY = 9


class MemoryBase(RecordModel):
    date: str
    title: str
    type: MemoryType = MemoryType.TEXT
    content: str = ""
    images: List[str] = Field(default_factory=list, max_length=MAX_MEDIA_PER_MEMORY)
    media_url: Optional[str] = None  # Legacy single-media field
    tags: List[str] = Field(default_factory=list)

    @field_validator("images", "tags", mode="before")
    @classmethod
    def null_list(cls, v: Any) -> Any:
        return none_to_empty_list(v)

    @property
    def media(self) -> List[str]:
        """Media references, falling back to the legacy single-media field."""
        if self.images:
            return list(self.images)
        if self.media_url:
            return [self.media_url]
        return []


class MemoryCreate(MemoryBase):
    id: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("title must not be blank")
        return v


class Memory(MemoryBase):
    id: str


class GalleryItem(CamelSchema):
    memory_id: str
    index: int
    media: str


__all__ = [
    "MAX_MEDIA_PER_MEMORY",
    "MemoryBase",
    "MemoryCreate",
    "Memory",
    "GalleryItem",
]
