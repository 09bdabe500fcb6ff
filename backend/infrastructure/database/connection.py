import asyncio
import functools
import logging

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool, StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()


def get_database_type(url: str) -> str:
    """
    Extract database type from connection URL.

    Args:
        url: Database connection URL

    Returns:
        "sqlite" or "postgresql" or "unknown"
    """
    if url.startswith("sqlite"):
        return "sqlite"
    elif url.startswith("postgresql"):
        return "postgresql"
    return "unknown"


def is_memory_database(url: str) -> bool:
    """True for sqlite URLs without a file path (``sqlite+aiosqlite://`` or ``:memory:``)."""
    return get_database_type(url) == "sqlite" and (url.endswith("://") or ":memory:" in url)


def create_engine(database_url: str, busy_timeout: float = 5.0) -> AsyncEngine:
    """
    Create an async engine for the store.

    File-backed SQLite gets no connection pooling; in-memory SQLite shares a
    single connection so every session sees the same database.
    """
    if get_database_type(database_url) != "sqlite":
        engine = create_async_engine(database_url, echo=False, pool_pre_ping=True)
        logger.info("Database configured: non-SQLite backend")
        return engine

    memory = is_memory_database(database_url)
    engine = create_async_engine(
        database_url,
        echo=False,
        connect_args={"check_same_thread": False, "timeout": busy_timeout},
        poolclass=StaticPool if memory else NullPool,
    )

    if not memory:

        @event.listens_for(engine.sync_engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            """Use WAL so readers are not blocked by the single writer."""
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.close()

    logger.info(f"Database configured: SQLite ({'in-memory' if memory else 'file-based'}, serialized writes)")
    return engine


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker:
    """Session factory with sensible defaults."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """Create all tables if they don't exist."""
    # Import models so their tables are registered on Base.metadata
    from infrastructure.database import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def is_lock_error(exc: BaseException) -> bool:
    return "database is locked" in str(exc).lower()


def retry_on_db_lock(max_retries=5, initial_delay=0.1, backoff_factor=2):
    """Retry on SQLite 'database is locked' errors with exponential backoff."""

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            delay = initial_delay
            last_exc = None
            for attempt in range(max_retries):
                try:
                    return await func(*args, **kwargs)
                except Exception as exc:
                    if not is_lock_error(exc):
                        raise
                    last_exc = exc
                    if attempt < max_retries - 1:
                        logger.warning(
                            f"SQLite locked (attempt {attempt + 1}/{max_retries}), retrying in {delay:.2f}s"
                        )
                        await asyncio.sleep(delay)
                        delay *= backoff_factor
            raise last_exc  # type: ignore[misc]

        return wrapper

    return decorator
