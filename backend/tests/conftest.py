"""
Pytest configuration and shared fixtures for backend tests.

This module provides fixtures for a fixed clock, a store backed by a
temporary SQLite file, the wired-up services and an HTTP test client.

NOTE: Heavy imports (app factory, services) are done lazily inside fixtures
to avoid loading the entire app for tests that don't need it.
"""

import gc
import sys
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

# Add backend directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Type hints only - not imported at runtime
if TYPE_CHECKING:
    from typing import AsyncGenerator

    from httpx import AsyncClient
    from services.persistent_store import PersistentStore


# Files that open a real database (slower)
DB_FIXTURE_FILES = {
    "test_crud.py",
    "test_database.py",
    "test_persistent_store.py",
    "test_backup_codec.py",
    "test_reminder_evaluator.py",
    "test_services.py",
}

# A fixed "now" used across tests: a Wednesday afternoon
FIXED_NOW = datetime(2024, 6, 12, 15, 30, 0)


def pytest_collection_modifyitems(items):
    """Auto-apply markers based on test directory and fixtures used."""
    for item in items:
        filepath = str(item.fspath)
        filename = Path(filepath).name

        # Apply 'unit' marker to tests in unit directory
        if "/tests/unit/" in filepath:
            item.add_marker(pytest.mark.unit)
            # Mark database-using tests
            if filename in DB_FIXTURE_FILES:
                item.add_marker(pytest.mark.db)
        # Apply 'integration' marker to tests in integration directory
        elif "/tests/integration/" in filepath:
            item.add_marker(pytest.mark.integration)
            item.add_marker(pytest.mark.db)  # All integration tests use db


@pytest.fixture(autouse=True)
def cleanup_after_test():
    """Run garbage collection after each test to free memory."""
    yield
    gc.collect()


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep a developer's .env and environment out of the tests."""
    from core.settings import reset_settings

    for name in ("DATABASE_URL", "TIMEZONE", "ENABLE_SCHEDULER", "DEBUG"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


# ============================================================================
# Clock fixtures
# ============================================================================


@pytest.fixture
def fixed_clock():
    """A clock frozen at FIXED_NOW."""
    from core.clock import FixedClock

    return FixedClock(FIXED_NOW)


# ============================================================================
# Database fixtures (only loaded when needed)
# ============================================================================


@pytest.fixture
def database_url(tmp_path) -> str:
    """URL of a fresh SQLite file for this test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'lovesync_test.db'}"


@pytest.fixture
async def store(database_url) -> "AsyncGenerator[PersistentStore, None]":
    """An opened store on a temporary database file."""
    from services.persistent_store import PersistentStore

    store = PersistentStore(database_url, open_timeout=5.0, busy_timeout=1.0)
    await store.open()
    yield store
    await store.close()


@pytest.fixture
def write_raw(database_url):
    """
    Write a document straight into the test database, bypassing validation.

    Usage: await write_raw(crud.upsert_record, Collection.PLANS, "id", {...})
    """
    from infrastructure.database import create_engine, create_session_maker

    async def _write(operation, *args):
        engine = create_engine(database_url)
        try:
            async with create_session_maker(engine)() as db:
                return await operation(db, *args)
        finally:
            await engine.dispose()

    return _write


@pytest.fixture
def dispatcher():
    """Notification dispatcher that records what was sent."""
    from infrastructure.notifications import RecordingDispatcher

    return RecordingDispatcher()


# ============================================================================
# App/Client fixtures (only loaded when needed)
# ============================================================================


@pytest.fixture
def app_settings(database_url):
    from core.settings import Settings

    return Settings(_env_file=None, database_url=database_url, enable_scheduler=False)


@pytest.fixture
async def app(app_settings, store, fixed_clock, dispatcher):
    """The FastAPI app wired to the test store, clock and dispatcher."""
    from core.app_factory import create_app

    return create_app(settings=app_settings, store=store, clock=fixed_clock, dispatcher=dispatcher)


@pytest.fixture
async def client(app) -> "AsyncGenerator[AsyncClient, None]":
    """HTTP client talking to the app in-process (lifespan not run; the store fixture is already open)."""
    from httpx import ASGITransport, AsyncClient

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ============================================================================
# Sample data fixtures
# ============================================================================


@pytest.fixture
def sample_settings():
    from schemas import CoupleSettings

    return CoupleSettings.model_validate(
        {
            "startDate": "2023-02-14",
            "countFromDayOne": True,
            "reminderDays": [0, 1, 3],
            "partner1": {"name": "Minh", "dob": "1998-06-13"},
            "partner2": {"name": "Lan", "dob": "1999-11-02"},
        }
    )


@pytest.fixture
def make_plan():
    from schemas import Plan

    def _make(plan_id: str = "p1", title: str = "Trip", target_date: str = "2024-06-13", **kwargs):
        return Plan(id=plan_id, title=title, target_date=target_date, **kwargs)

    return _make


@pytest.fixture
def make_memory():
    from schemas import Memory

    def _make(memory_id: str = "m1", title: str = "First date", date: str = "2023-02-14", **kwargs):
        return Memory(id=memory_id, title=title, date=date, **kwargs)

    return _make
