"""
Centralized application settings using Pydantic BaseSettings.

This module provides type-safe access to environment variables with validation.
All settings are loaded once at application startup.
"""

from datetime import tzinfo
from pathlib import Path
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from domain.exceptions import ConfigurationError
from pydantic import field_validator
from pydantic_settings import BaseSettings


def _get_base_path() -> Path:
    """Project root (parent of backend/)."""
    return Path(__file__).parent.parent.parent


def _parse_bool(v, default: bool) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        return v.strip().lower() in ("1", "true", "yes", "on")
    return default


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults and are validated on startup.
    """

    # Storage
    database_url: str = "sqlite+aiosqlite:///./lovesync.db"
    storage_open_timeout: float = 5.0  # Seconds before an open is reported as StorageUnavailable
    sqlite_busy_timeout: float = 5.0

    # Clock
    timezone: Optional[str] = None  # IANA zone name; unset = system local time

    # Background ticks
    enable_scheduler: bool = True
    counter_tick_seconds: float = 1.0
    reminder_check_seconds: int = 60
    daily_reminder_hour: int = 0

    # Backup
    backup_filename_prefix: str = "lovesync_backup"

    # CORS configuration
    frontend_url: Optional[str] = None

    # Debug configuration
    debug: bool = False

    @field_validator("enable_scheduler", mode="before")
    @classmethod
    def validate_enable_scheduler(cls, v) -> bool:
        """Parse enable_scheduler from string to bool."""
        return _parse_bool(v, True)

    @field_validator("debug", mode="before")
    @classmethod
    def validate_debug(cls, v) -> bool:
        """Parse debug from string to bool."""
        return _parse_bool(v, False)

    @field_validator("storage_open_timeout", "counter_tick_seconds")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be positive")
        return v

    @field_validator("daily_reminder_hour")
    @classmethod
    def validate_hour(cls, v: int) -> int:
        if not 0 <= v <= 23:
            raise ValueError("must be between 0 and 23")
        return v

    def get_tzinfo(self) -> Optional[tzinfo]:
        """
        Resolve the configured zone.

        Returns:
            ZoneInfo for the configured name, or None for system local time

        Raises:
            ConfigurationError: If the zone name is unknown
        """
        if not self.timezone:
            return None
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigurationError(f"unknown timezone {self.timezone!r}") from e

    def get_cors_origins(self) -> List[str]:
        """
        Get the list of allowed CORS origins.

        Returns:
            List of allowed origin URLs
        """
        origins = [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ]

        # Add custom frontend URL if provided
        if self.frontend_url:
            origins.append(self.frontend_url)

        return origins

    @property
    def project_root(self) -> Path:
        return _get_base_path()

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        # Allow extra fields for forward compatibility
        extra = "ignore"


# Singleton instance - load settings once
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()

        # Prefer the .env in the project root when running from elsewhere
        env_path = _settings.project_root / ".env"
        if env_path.exists():
            _settings = Settings(_env_file=str(env_path))

    return _settings


def reset_settings() -> None:
    """
    Reset the settings singleton (useful for testing).
    """
    global _settings
    _settings = None
