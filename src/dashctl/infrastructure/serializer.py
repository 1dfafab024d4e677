"""WriteSerializer: process-wide FIFO queue for store jobs.

INVARIANT: At most one job runs at a time, in submission order.

A single consumer task drains an ``asyncio.Queue`` of ``(job, future)``
pairs. Each job's result or exception is delivered only to the future of
the caller that submitted it; a failing job never stops the consumer.

Callers await a shielded future: a caller that gives up (timeout,
cancellation) does not cancel its job, which still runs to completion.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

Job = Callable[[], Awaitable[Any]]


class StoreBusyError(RuntimeError):
    """Raised by :meth:`WriteSerializer.submit` when the queue is full."""

    def __init__(self, pending: int, limit: int) -> None:
        super().__init__(f"Store is busy: {pending} jobs pending (limit {limit})")
        self.pending = pending
        self.limit = limit


class WriteSerializer:
    """Run submitted coroutine jobs one at a time, first in first out.

    Args:
        max_pending: Reject new jobs with :class:`StoreBusyError` once this
            many are queued or running. ``0`` (the default) never rejects.

    The consumer task is started lazily on the running event loop. If the
    serializer is later used from a different loop (each ``asyncio.run``
    creates one), it re-binds to that loop with a fresh queue.
    """

    def __init__(self, *, max_pending: int = 0) -> None:
        self._max_pending = max_pending
        self._loop: asyncio.AbstractEventLoop | None = None
        self._queue: asyncio.Queue[tuple[Job, asyncio.Future[Any]]] | None = None
        self._worker: asyncio.Task[None] | None = None
        self._pending = 0

    @property
    def pending(self) -> int:
        """Jobs queued or running."""
        return self._pending

    async def submit(self, job: Callable[[], Awaitable[_T]]) -> _T:
        """Enqueue *job* and wait for its outcome.

        Returns whatever the job returns; re-raises whatever it raises.
        """
        queue = self._bind()
        if self._max_pending and self._pending >= self._max_pending:
            raise StoreBusyError(self._pending, self._max_pending)

        future: asyncio.Future[_T] = asyncio.get_running_loop().create_future()
        self._pending += 1
        queue.put_nowait((job, future))
        logger.debug("Job queued (%d pending)", self._pending)
        return await asyncio.shield(future)

    async def aclose(self) -> None:
        """Wait for queued jobs to finish, then stop the consumer."""
        if self._worker is None or self._queue is None:
            return
        if self._loop is asyncio.get_running_loop() and not self._worker.done():
            await self._queue.join()
            self._worker.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._worker
        self._reset()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _bind(self) -> asyncio.Queue[tuple[Job, asyncio.Future[Any]]]:
        loop = asyncio.get_running_loop()
        if (
            self._queue is None
            or self._worker is None
            or self._loop is not loop
            or self._worker.done()
        ):
            if self._loop is not None and self._loop is not loop:
                logger.debug("Re-binding write serializer to a new event loop")
            self._reset()
            self._loop = loop
            self._queue = asyncio.Queue()
            self._worker = loop.create_task(self._drain(self._queue), name="dashctl-writes")
        return self._queue

    def _reset(self) -> None:
        self._loop = None
        self._queue = None
        self._worker = None
        self._pending = 0

    async def _drain(self, queue: asyncio.Queue[tuple[Job, asyncio.Future[Any]]]) -> None:
        while True:
            job, future = await queue.get()
            try:
                result = await job()
            except asyncio.CancelledError:
                future.cancel()
                raise
            except Exception as exc:
                logger.debug("Job failed: %r", exc)
                if not future.done():
                    future.set_exception(exc)
            else:
                if not future.done():
                    future.set_result(result)
            finally:
                self._pending = max(0, self._pending - 1)
                queue.task_done()
