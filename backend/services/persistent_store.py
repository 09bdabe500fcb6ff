"""
Durable store for the settings singleton and the memory/plan collections.

The store is the single source of truth. Every mutation goes through its
put/delete/save contract; reads always go to the database.

Concurrency:
- Writes to one collection are serialized by that collection's WriteQueue.
- A restore holds ``exclusive()``; everyone else (reads included) waits until
  it is released. Calls made from inside the exclusive section pass through.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, List, Optional, Type, TypeVar, Union

import crud
from core.settings import Settings
from domain.exceptions import RecordNotFound, StorageUnavailable, UnreadableRecord
from domain.value_objects.enums import RECORD_COLLECTIONS, Collection
from infrastructure.database import WriteQueue, create_engine, create_session_maker, init_db, retry_on_db_lock
from infrastructure.locking import StoreLock
from pydantic import ValidationError
from schemas import SETTINGS_KEY, CoupleSettings, Memory, Plan
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

logger = logging.getLogger("PersistentStore")

T = TypeVar("T")

Record = Union[Memory, Plan]

RECORD_TYPES: Dict[Collection, Type[Record]] = {
    Collection.MEMORIES: Memory,
    Collection.PLANS: Plan,
}


def _error_list(error: ValidationError) -> List[Dict[str, Any]]:
    # JSON-safe; returned as-is in the 409 body
    return error.errors(include_url=False, include_context=False, include_input=False)


class PersistentStore:
    def __init__(self, database_url: str, open_timeout: float = 5.0, busy_timeout: float = 5.0):
        self.database_url = database_url
        self.open_timeout = open_timeout
        self.busy_timeout = busy_timeout
        self._engine: Optional[AsyncEngine] = None
        self._session_maker: Optional[async_sessionmaker] = None
        self._lock = StoreLock()
        self._queues: Dict[Collection, WriteQueue] = {collection: WriteQueue(str(collection)) for collection in Collection}

    @classmethod
    def from_settings(cls, settings: Settings) -> "PersistentStore":
        return cls(
            settings.database_url,
            open_timeout=settings.storage_open_timeout,
            busy_timeout=settings.sqlite_busy_timeout,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self._session_maker is not None

    @property
    def is_restoring(self) -> bool:
        """True while a restore holds the store exclusively."""
        return self._lock.held_exclusively

    async def open(self) -> None:
        """
        Open the storage medium and create missing tables.

        Raises:
            StorageUnavailable: If the medium cannot be opened within open_timeout
        """
        if self.is_open:
            return

        try:
            await asyncio.wait_for(self._open(), timeout=self.open_timeout)
        except asyncio.TimeoutError as e:
            await self._dispose_engine()
            raise StorageUnavailable(f"opening the store timed out after {self.open_timeout}s", e) from e
        except (SQLAlchemyError, OSError) as e:
            await self._dispose_engine()
            raise StorageUnavailable(f"cannot open the store: {e}", e) from e

        for queue in self._queues.values():
            await queue.start()
        logger.info("Persistent store opened")

    async def _open(self) -> None:
        self._engine = create_engine(self.database_url, busy_timeout=self.busy_timeout)
        await init_db(self._engine)
        self._session_maker = create_session_maker(self._engine)

    async def close(self) -> None:
        """Flush pending writes and release the storage medium."""
        if not self.is_open:
            return
        for queue in self._queues.values():
            await queue.stop()
        self._session_maker = None
        await self._dispose_engine()
        logger.info("Persistent store closed")

    async def _dispose_engine(self) -> None:
        engine, self._engine = self._engine, None
        self._session_maker = None
        if engine is not None:
            await engine.dispose()

    # ------------------------------------------------------------------
    # Execution helpers
    # ------------------------------------------------------------------

    async def _run(self, operation: Callable[..., Awaitable[T]], *args: Any) -> T:
        """Run a crud operation in its own session, mapping medium failures."""
        if self._session_maker is None:
            raise StorageUnavailable("the store is not open")
        try:
            return await self._run_in_session(self._session_maker, operation, *args)
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Storage operation {operation.__name__} failed: {e}")
            raise StorageUnavailable(str(e), e) from e

    @retry_on_db_lock(max_retries=5, initial_delay=0.1, backoff_factor=2)
    async def _run_in_session(self, session_maker: async_sessionmaker, operation, *args):
        async with session_maker() as db:
            return await operation(db, *args)

    async def _write(self, collection: Collection, operation: Callable[..., Awaitable[T]], *args: Any) -> T:
        if self._session_maker is None:
            raise StorageUnavailable("the store is not open")
        async with self._lock.shared():
            return await self._queues[collection].submit(self._run(operation, *args))

    async def _read(self, operation: Callable[..., Awaitable[T]], *args: Any) -> T:
        async with self._lock.shared():
            return await self._run(operation, *args)

    @staticmethod
    def _check_record_collection(collection: Collection) -> Collection:
        collection = Collection(collection)
        if collection not in RECORD_COLLECTIONS:
            raise ValueError(f"{collection} is not a record collection")
        return collection

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    async def get_settings(self, strict: bool = False) -> Optional[CoupleSettings]:
        """
        The saved settings, or None when the defaults are in effect.

        An unreadable document falls back to the defaults, unless strict is
        set, in which case UnreadableRecord is raised.
        """
        document = await self._read(crud.get_settings_document, SETTINGS_KEY)
        if document is None:
            return None
        try:
            return CoupleSettings.model_validate(document)
        except ValidationError as e:
            if strict:
                raise UnreadableRecord(str(Collection.SETTINGS), SETTINGS_KEY, _error_list(e)) from e
            logger.warning(f"Stored settings are unreadable, falling back to defaults: {e}")
            return None

    async def save_settings(self, settings: CoupleSettings) -> CoupleSettings:
        await self._write(Collection.SETTINGS, crud.save_settings_document, SETTINGS_KEY, settings.to_document())
        return settings

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------

    def _to_record(self, collection: Collection, document: Dict[str, Any], strict: bool = False) -> Optional[Record]:
        try:
            return RECORD_TYPES[collection].model_validate(document)
        except ValidationError as e:
            if strict:
                raise UnreadableRecord(str(collection), document.get("id"), _error_list(e)) from e
            logger.warning(f"Skipping unreadable {collection} record {document.get('id')!r}: {e}")
            return None

    async def get_all(self, collection: Collection, strict: bool = False) -> List[Record]:
        """
        All records of a collection in insertion order.

        Unreadable documents are skipped with a warning; with strict set the
        first one raises UnreadableRecord instead.
        """
        collection = self._check_record_collection(collection)
        documents = await self._read(crud.list_records, collection)
        records = (self._to_record(collection, document, strict) for document in documents)
        return [record for record in records if record is not None]

    async def get(self, collection: Collection, record_id: str) -> Optional[Record]:
        collection = self._check_record_collection(collection)
        document = await self._read(crud.get_record, collection, record_id)
        if document is None:
            return None
        return self._to_record(collection, document)

    async def require(self, collection: Collection, record_id: str) -> Record:
        """
        Like get, for callers that need the record to exist.

        Raises:
            RecordNotFound: If no record has this id
        """
        record = await self.get(collection, record_id)
        if record is None:
            raise RecordNotFound(str(collection), record_id)
        return record

    async def put(self, collection: Collection, record: Record) -> Record:
        """Insert the record, or fully replace the stored record with the same id."""
        collection = self._check_record_collection(collection)
        if not isinstance(record, RECORD_TYPES[collection]):
            raise TypeError(f"{collection} stores {RECORD_TYPES[collection].__name__}, not {type(record).__name__}")
        created = await self._write(collection, crud.upsert_record, collection, record.id, record.to_document())
        logger.debug(f"{'Inserted' if created else 'Replaced'} {collection} record {record.id}")
        return record

    async def delete(self, collection: Collection, record_id: str) -> bool:
        """Delete by id. Deleting a missing id is a no-op that returns False."""
        collection = self._check_record_collection(collection)
        return await self._write(collection, crud.delete_record, collection, record_id)

    async def clear_all(self) -> None:
        """Empty all three collections in one transaction."""
        async with self._lock.exclusive():
            await self._queues[Collection.SETTINGS].submit(self._run(crud.clear_all))

    # ------------------------------------------------------------------
    # Restore fencing
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def exclusive(self) -> AsyncIterator["PersistentStore"]:
        """
        Hold the store exclusively for the duration of a restore.

        Raises:
            StorageUnavailable: If the store is not open
        """
        if not self.is_open:
            raise StorageUnavailable("the store is not open")
        async with self._lock.exclusive():
            yield self
