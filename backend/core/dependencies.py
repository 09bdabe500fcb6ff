"""Shared dependencies for FastAPI endpoints.

Every service instance is created during application startup and stored on
app.state; these helpers hand them to route handlers.
"""

from core.clock import Clock
from fastapi import Request
from services import (
    BackupCodec,
    DashboardService,
    MemoryService,
    PersistentStore,
    PlanService,
    SecurityService,
    SettingsService,
)


def get_store(request: Request) -> PersistentStore:
    return request.app.state.store


def get_clock(request: Request) -> Clock:
    return request.app.state.clock


def get_settings_service(request: Request) -> SettingsService:
    return request.app.state.settings_service


def get_security_service(request: Request) -> SecurityService:
    return request.app.state.security_service


def get_memory_service(request: Request) -> MemoryService:
    return request.app.state.memory_service


def get_plan_service(request: Request) -> PlanService:
    return request.app.state.plan_service


def get_backup_codec(request: Request) -> BackupCodec:
    return request.app.state.backup_codec


def get_dashboard(request: Request) -> DashboardService:
    """
    Dependency to get the dashboard service instance from app state.

    The instance is created during application startup in the lifespan context.
    """
    return request.app.state.dashboard
