"""Plan-related schemas."""

from typing import Any, Optional

from domain.value_objects.enums import Priority
from pydantic import field_validator

from schemas.common import CamelSchema, RecordModel

_PRIORITY_VALUES = {p.value for p in Priority}


class PlanBase(RecordModel):
    title: str
    description: Optional[str] = None
    priority: Priority = Priority.MEDIUM
    target_date: str
    is_pinned: bool = False
    completed: bool = False
    reminder_enabled: bool = False
    reminder_time: Optional[str] = None  # Exact local timestamp, e.g. "2024-05-01T07:00"

    @field_validator("priority", mode="before")
    @classmethod
    def unknown_priority_is_medium(cls, v: Any) -> Any:
        if isinstance(v, Priority) or (isinstance(v, str) and v in _PRIORITY_VALUES):
            return v
        return Priority.MEDIUM

    @field_validator("reminder_time", mode="before")
    @classmethod
    def blank_reminder_time(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class PlanCreate(PlanBase):
    id: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("title must not be blank")
        return v


class Plan(PlanBase):
    id: str


class PlanCompletion(CamelSchema):
    """Body of the complete-plan request."""

    save_as_memory: bool = False


class PlanCountdown(CamelSchema):
    plan: Plan
    days_left: Optional[int]  # None when the target date is unusable


__all__ = [
    "PlanBase",
    "PlanCreate",
    "Plan",
    "PlanCompletion",
    "PlanCountdown",
]
