"""Settings singleton schemas."""

import re
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from schemas.common import CamelSchema, RecordModel

SETTINGS_KEY = "settings"
DEFAULT_REMINDER_DAYS = [0, 1]  # On the day and one day before
PIN_PATTERN = re.compile(r"[0-9]{4}")

# Flat keys written by the original single-page app, mapped into the nested structs
_LEGACY_PARTNER_KEYS = {"Name": "name", "Dob": "dob", "Avatar": "avatar"}
_LEGACY_DISPLAY_KEYS = (
    "themeColor",
    "fontStyle",
    "themeEffect",
    "bgImage",
    "bgOpacity",
    "cardOpacity",
    "showTimeDetails",
    "globalBackground",
)


def _key(name: str) -> str:
    # themeColor and theme_color name the same field
    return name.replace("_", "").lower()


def _merge_legacy(nested: Any, legacy: Dict[str, Any]) -> Any:
    """
    Fold flat legacy values into the nested object.

    Values already present in the nested object win. A nested value that is
    not a mapping or model is returned unchanged so validation rejects it.
    """
    if nested is None:
        return legacy
    if isinstance(nested, BaseModel):
        nested = nested.model_dump(by_alias=True, exclude_unset=True)
    if not isinstance(nested, dict):
        return nested
    present = {_key(name) for name in nested}
    merged = {name: value for name, value in legacy.items() if _key(name) not in present}
    merged.update(nested)
    return merged


class NotificationToggles(RecordModel):
    """Per-category reminder switches."""

    anniversary: bool = True
    valentine: bool = True
    holidays: bool = True
    on_this_day: bool = True


class PartnerProfile(RecordModel):
    name: str = ""
    dob: Optional[str] = None
    avatar: Optional[str] = None

    @field_validator("dob", "avatar", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class DisplayPreferences(RecordModel):
    """Theme and layout preferences. Not interpreted by the backend."""

    theme_color: str = "#fa3452"
    font_style: str = "sans"
    theme_effect: str = "hearts"
    bg_image: Optional[str] = None
    bg_opacity: float = 0.6
    card_opacity: float = 0.6
    show_time_details: bool = False
    global_background: bool = False


class CoupleSettings(RecordModel):
    """The settings singleton. Absence in the store means "use defaults"."""

    start_date: str
    count_from_day_one: bool = True
    reminder_days: List[int] = Field(default_factory=lambda: list(DEFAULT_REMINDER_DAYS))
    notifications: NotificationToggles = Field(default_factory=NotificationToggles)
    partner1: PartnerProfile = Field(default_factory=lambda: PartnerProfile(name="Anh"))
    partner2: PartnerProfile = Field(default_factory=lambda: PartnerProfile(name="Em"))
    security_pin: Optional[str] = None
    display: DisplayPreferences = Field(default_factory=DisplayPreferences)

    @model_validator(mode="before")
    @classmethod
    def lift_legacy_fields(cls, data: Any) -> Any:
        """Accept the original app's flat document layout."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        # Old builds stored the singleton with its key inside the document
        if data.get("id") == SETTINGS_KEY:
            data.pop("id")

        for index in (1, 2):
            nested_key = f"partner{index}"
            legacy = {
                field: data.pop(f"{nested_key}{suffix}")
                for suffix, field in _LEGACY_PARTNER_KEYS.items()
                if f"{nested_key}{suffix}" in data
            }
            if legacy:
                data[nested_key] = _merge_legacy(data.get(nested_key), legacy)

        legacy_display = {key: data.pop(key) for key in _LEGACY_DISPLAY_KEYS if key in data}
        if legacy_display:
            data["display"] = _merge_legacy(data.get("display"), legacy_display)

        for key in ("reminderDays", "reminder_days", "notifications"):
            if key in data and data[key] is None:
                data.pop(key)
        return data

    @field_validator("reminder_days")
    @classmethod
    def normalize_reminder_days(cls, v: List[int]) -> List[int]:
        """Reminder offsets form a set of non-negative day counts."""
        if any(day < 0 for day in v):
            raise ValueError("reminder days must be non-negative")
        return sorted(set(v))

    @field_validator("security_pin", mode="before")
    @classmethod
    def validate_security_pin(cls, v: Any) -> Any:
        if v is None or v == "":
            return None
        if not isinstance(v, str) or not PIN_PATTERN.fullmatch(v):
            raise ValueError("security PIN must be exactly 4 digits")
        return v

    @classmethod
    def defaults(cls, today: datetime) -> "CoupleSettings":
        """Settings used before the user has saved anything."""
        return cls(start_date=today.isoformat(timespec="seconds"))

    @property
    def pin_enabled(self) -> bool:
        return self.security_pin is not None


class SettingsView(CamelSchema):
    """Settings as returned by the API, flagged when they are defaults."""

    settings: CoupleSettings
    is_default: bool = False


__all__ = [
    "SETTINGS_KEY",
    "DEFAULT_REMINDER_DAYS",
    "NotificationToggles",
    "PartnerProfile",
    "DisplayPreferences",
    "CoupleSettings",
    "SettingsView",
]
