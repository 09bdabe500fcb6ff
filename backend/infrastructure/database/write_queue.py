"""
Single Writer Pattern for SQLite.

Each collection owns a WriteQueue whose background task runs queued writes one
at a time, so writes to the same collection are applied in submission order
and never interleave.

Usage:
    queue = WriteQueue("plans")
    await queue.start()
    result = await queue.submit(my_write_coroutine())
    await queue.stop()
"""

import asyncio
import logging
from typing import Any, Awaitable, Optional, TypeVar

logger = logging.getLogger("WriteQueue")

T = TypeVar("T")

_STOP = object()


class WriteOperation:
    """Wrapper for a write operation with its result future."""

    def __init__(self, coro: Awaitable[Any]):
        self.coro = coro
        self.future: asyncio.Future = asyncio.get_running_loop().create_future()

    async def run(self, queue_name: str) -> None:
        try:
            result = await self.coro
        except Exception as e:
            logger.error(f"Write operation on '{queue_name}' failed: {e}")
            if not self.future.done():
                self.future.set_exception(e)
            return
        if not self.future.done():
            self.future.set_result(result)


class WriteQueue:
    def __init__(self, name: str):
        self.name = name
        self._queue: Optional[asyncio.Queue] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def size(self) -> int:
        """Number of pending writes."""
        if self._queue is None:
            return 0
        return self._queue.qsize()

    async def _writer_loop(self) -> None:
        logger.debug(f"Write queue '{self.name}' started")
        while True:
            op = await self._queue.get()
            try:
                if op is _STOP:
                    logger.debug(f"Write queue '{self.name}' shut down gracefully")
                    return
                await op.run(self.name)
            finally:
                self._queue.task_done()

    async def start(self) -> None:
        """Start the background writer task."""
        if self.is_running:
            logger.warning(f"Write queue '{self.name}' already running")
            return
        self._queue = asyncio.Queue()
        self._task = asyncio.create_task(self._writer_loop(), name=f"write-queue-{self.name}")

    async def stop(self, timeout: float = 10.0) -> None:
        """
        Drain pending writes and stop the writer task.

        Args:
            timeout: Maximum time to wait for pending writes to complete
        """
        if self._task is None:
            return

        if not self._task.done():
            # Everything queued before the sentinel still runs
            await self._queue.put(_STOP)
            try:
                await asyncio.wait_for(asyncio.shield(self._task), timeout=timeout)
            except asyncio.TimeoutError:
                logger.warning(f"Write queue '{self.name}' didn't stop within {timeout}s, cancelling...")
                self._task.cancel()
                try:
                    await self._task
                except asyncio.CancelledError:
                    pass

        self._fail_pending(RuntimeError(f"write queue '{self.name}' stopped"))
        self._task = None
        self._queue = None

    def _fail_pending(self, exc: Exception) -> None:
        while self._queue is not None and not self._queue.empty():
            op = self._queue.get_nowait()
            if op is _STOP:
                continue
            op.coro.close()
            if not op.future.done():
                op.future.set_exception(exc)

    async def submit(self, coro: Awaitable[T]) -> T:
        """
        Enqueue a write operation and wait for its result.

        Falls back to running the coroutine directly when the queue is not
        running.

        Returns:
            The result of the coroutine

        Raises:
            Any exception raised by the coroutine
        """
        if not self.is_running:
            return await coro

        op = WriteOperation(coro)
        await self._queue.put(op)
        return await op.future
