"""
Readers-writer lock for the persistent store.

Ordinary reads and writes take the lock shared; a restore takes it exclusively
so no other caller can observe the store between the wipe and the re-insert.
Calls made from inside the exclusive section (same task context) pass straight
through instead of deadlocking on themselves.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from contextvars import ContextVar
from typing import AsyncIterator, FrozenSet

logger = logging.getLogger("StoreLock")

# ids of the StoreLocks held exclusively by the current task context
_exclusive_holders: ContextVar[FrozenSet[int]] = ContextVar("exclusive_store_locks", default=frozenset())


class StoreLock:
    """
    Writer-preferring async readers-writer lock.

    Once an exclusive acquisition is waiting, new shared acquisitions queue
    behind it.
    """

    def __init__(self):
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @property
    def held_exclusively(self) -> bool:
        """True while any task holds the lock exclusively."""
        return self._writer

    @property
    def held_here(self) -> bool:
        """True when the current task context is the exclusive holder."""
        return id(self) in _exclusive_holders.get()

    @asynccontextmanager
    async def shared(self) -> AsyncIterator[None]:
        if self.held_here:
            yield
            return

        async with self._cond:
            await self._cond.wait_for(lambda: not self._writer and self._writers_waiting == 0)
            self._readers += 1
        try:
            yield
        finally:
            async with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @asynccontextmanager
    async def exclusive(self) -> AsyncIterator[None]:
        if self.held_here:
            yield
            return

        async with self._cond:
            self._writers_waiting += 1
            try:
                await self._cond.wait_for(lambda: not self._writer and self._readers == 0)
            finally:
                self._writers_waiting -= 1
                # Readers parked behind a cancelled writer must re-check
                self._cond.notify_all()
            self._writer = True

        logger.debug("Exclusive store lock acquired")
        token = _exclusive_holders.set(_exclusive_holders.get() | {id(self)})
        try:
            yield
        finally:
            _exclusive_holders.reset(token)
            async with self._cond:
                self._writer = False
                self._cond.notify_all()
            logger.debug("Exclusive store lock released")
