"""Backup snapshot schemas."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from schemas.common import CamelSchema, none_to_empty_list
from schemas.memories import Memory
from schemas.plans import Plan
from schemas.settings import CoupleSettings

SNAPSHOT_FORMAT_VERSION = 1


class SnapshotData(BaseModel):
    settings: Optional[CoupleSettings] = None
    memories: List[Memory] = Field(default_factory=list)
    plans: List[Plan] = Field(default_factory=list)

    @field_validator("memories", "plans", mode="before")
    @classmethod
    def null_collection(cls, v: Any) -> Any:
        return none_to_empty_list(v)

    @model_validator(mode="after")
    def unique_ids(self) -> "SnapshotData":
        for name, records in (("memories", self.memories), ("plans", self.plans)):
            ids = [record.id for record in records]
            if len(ids) != len(set(ids)):
                raise ValueError(f"duplicate ids in {name}")
        return self


class Snapshot(BaseModel):
    """
    Complete exported state of the store.

    Wire form: {"version": 1, "timestamp": "<ISO-8601>", "data": {...}}
    """

    model_config = ConfigDict(populate_by_name=True)

    format_version: int = Field(default=SNAPSHOT_FORMAT_VERSION, alias="version")
    exported_at: str = Field(default="", alias="timestamp")
    data: SnapshotData

    @field_validator("format_version")
    @classmethod
    def supported_version(cls, v: int) -> int:
        if v < 1 or v > SNAPSHOT_FORMAT_VERSION:
            raise ValueError(f"unsupported snapshot version {v}")
        return v

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class ImportSummary(CamelSchema):
    settings_restored: bool
    memories: int
    plans: int


__all__ = [
    "SNAPSHOT_FORMAT_VERSION",
    "SnapshotData",
    "Snapshot",
    "ImportSummary",
]
