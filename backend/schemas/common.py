"""Common schema utilities and base classes."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelSchema(BaseModel):
    """API schema with camelCase wire names and snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class RecordModel(CamelSchema):
    """
    Base class for stored records (settings, memories, plans).

    Unknown keys are kept so a document written by another client version
    survives a save/export/import cycle unchanged.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    def to_document(self) -> Dict[str, Any]:
        """Serialize to the JSON document that is stored and exported."""
        return self.model_dump(mode="json", by_alias=True)


def none_to_empty_list(value: Any) -> Any:
    """Treat an explicit null list as empty (older backups omit or null them)."""
    return [] if value is None else value


__all__ = [
    "CamelSchema",
    "RecordModel",
    "none_to_empty_list",
]
