"""FastAPI routers for modular endpoint organization."""

from . import backup, dashboard, memories, plans, settings

__all__ = [
    "settings",
    "memories",
    "plans",
    "backup",
    "dashboard",
]
