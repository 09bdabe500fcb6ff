"""
Application factory for creating FastAPI app instances.

This module provides functions for creating and configuring the FastAPI application
with all necessary middleware, routers, and dependencies.
"""

from contextlib import asynccontextmanager
from typing import Optional

from domain.exceptions import ImportValidationError, PinError, RecordNotFound, StorageUnavailable, UnreadableRecord
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from infrastructure.notifications import LoggingNotificationDispatcher, NotificationDispatcher
from infrastructure.scheduler import BackgroundScheduler
from services import (
    BackupCodec,
    DashboardService,
    MemoryService,
    PersistentStore,
    PlanService,
    ReminderEvaluator,
    SecurityService,
    SettingsService,
)

from core import Settings, get_logger, get_settings
from core.clock import Clock, SystemClock

logger = get_logger("AppFactory")


def attach_services(
    app: FastAPI,
    settings: Settings,
    store: PersistentStore,
    clock: Clock,
    dispatcher: NotificationDispatcher,
) -> None:
    """Build the service graph and store it in app state for dependency injection."""
    settings_service = SettingsService(store, clock)
    plan_service = PlanService(store, clock)
    reminder_evaluator = ReminderEvaluator(store, dispatcher, clock)

    app.state.settings = settings
    app.state.store = store
    app.state.clock = clock
    app.state.dispatcher = dispatcher
    app.state.settings_service = settings_service
    app.state.security_service = SecurityService(settings_service)
    app.state.memory_service = MemoryService(store, clock)
    app.state.plan_service = plan_service
    app.state.reminder_evaluator = reminder_evaluator
    app.state.backup_codec = BackupCodec(store, clock, filename_prefix=settings.backup_filename_prefix)
    app.state.dashboard = DashboardService(settings_service, plan_service, reminder_evaluator, clock)


def register_exception_handlers(app: FastAPI) -> None:
    """Map the domain error taxonomy onto HTTP status codes."""

    @app.exception_handler(StorageUnavailable)
    async def storage_unavailable_handler(request: Request, exc: StorageUnavailable):
        logger.error(f"{request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    @app.exception_handler(RecordNotFound)
    async def record_not_found_handler(request: Request, exc: RecordNotFound):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ImportValidationError)
    async def import_validation_handler(request: Request, exc: ImportValidationError):
        logger.warning(f"Rejected backup import: {exc}")
        return JSONResponse(status_code=422, content={"detail": str(exc), "errors": exc.errors})

    @app.exception_handler(UnreadableRecord)
    async def unreadable_record_handler(request: Request, exc: UnreadableRecord):
        logger.error(f"{request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=409, content={"detail": str(exc), "errors": exc.errors})

    @app.exception_handler(PinError)
    async def pin_error_handler(request: Request, exc: PinError):
        return JSONResponse(status_code=403 if exc.mismatch else 400, content={"detail": str(exc)})


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[PersistentStore] = None,
    clock: Optional[Clock] = None,
    dispatcher: Optional[NotificationDispatcher] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Collaborators default to the production ones built from settings; tests
    pass their own.

    Returns:
        Configured FastAPI application instance

    Raises:
        ConfigurationError: If the settings are invalid (e.g. unknown timezone)
    """
    from fastapi.middleware.cors import CORSMiddleware
    from routers import backup, dashboard, memories, plans
    from routers import settings as settings_router

    settings = settings or get_settings()
    tz = settings.get_tzinfo()
    clock = clock or SystemClock(tz)
    store = store or PersistentStore.from_settings(settings)
    dispatcher = dispatcher or LoggingNotificationDispatcher()

    # Create lifespan context manager
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for application startup and shutdown."""
        # Startup
        logger.info("🚀 Application startup...")

        # Fails startup with StorageUnavailable if the database cannot be opened in time
        await store.open()

        background_scheduler = None
        if settings.enable_scheduler:
            background_scheduler = BackgroundScheduler(
                dashboard=app.state.dashboard,
                counter_tick_seconds=settings.counter_tick_seconds,
                reminder_check_seconds=settings.reminder_check_seconds,
                daily_reminder_hour=settings.daily_reminder_hour,
                timezone=tz,
            )
            background_scheduler.start()
        app.state.background_scheduler = background_scheduler

        logger.info("✅ Application startup complete")

        yield

        # Shutdown
        logger.info("🛑 Application shutdown...")
        if background_scheduler is not None:
            background_scheduler.stop()
        await store.close()
        logger.info("✅ Application shutdown complete")

    # Create app with lifespan
    app = FastAPI(title="LoveSync API", lifespan=lifespan)
    attach_services(app, settings, store, clock, dispatcher)
    register_exception_handlers(app)

    # CORS middleware
    allowed_origins = settings.get_cors_origins()
    logger.info(f"🔒 CORS allowed origins: {allowed_origins}")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    # /memories/gallery is declared before /memories/{memory_id} inside the router
    app.include_router(settings_router.router, prefix="/settings", tags=["Settings"])
    app.include_router(memories.router, prefix="/memories", tags=["Memories"])
    app.include_router(plans.router, prefix="/plans", tags=["Plans"])
    app.include_router(backup.router, prefix="/backup", tags=["Backup"])
    app.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])

    @app.get("/health", tags=["Health"])
    async def health():
        """Liveness plus storage state."""
        return {
            "status": "ok" if store.is_open else "degraded",
            "storage": "open" if store.is_open else "unavailable",
            "restoring": store.is_restoring,
        }

    return app
