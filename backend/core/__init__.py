"""
Core application modules.

This package contains core functionality like settings, logging configuration
and the injectable clock.
"""

from .clock import Clock, FixedClock, SystemClock
from .logging import get_logger, setup_logging
from .settings import Settings, get_settings, reset_settings

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "Settings",
    "get_settings",
    "reset_settings",
    "setup_logging",
    "get_logger",
]
