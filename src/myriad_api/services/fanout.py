"""Best-effort execution of side effects launched after a primary write.

Notifications, metric recomputation and activity logs must never delay or
fail the request that triggered them. Each effect is submitted to a
:class:`FanoutQueue`, runs as an asyncio task inside its own session scope
and is bounded by a concurrency limit. Failures are logged and dropped; they
are never retried.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from contextlib import AbstractContextManager
from typing import Any

from sqlalchemy.orm import Session

from myriad_api.core.settings import settings
from myriad_api.db.session import session_scope

# Configure logger for this module
logger = logging.getLogger(__name__)

SideEffect = Callable[[Session], Any]
SessionFactory = Callable[[], AbstractContextManager[Session]]


class FanoutQueue:
    """Run fire-and-forget side effects with bounded concurrency."""

    def __init__(
        self,
        session_factory: SessionFactory = session_scope,
        concurrency: int | None = None,
    ) -> None:
        """Initialize the queue.

        Args:
            session_factory: Context manager factory yielding the session each
                effect runs in. Defaults to a committing session scope.
            concurrency: Maximum number of effects running at once.
        """
        self._session_factory = session_factory
        self._limit = max(1, concurrency or settings.fanout_concurrency)
        self._semaphore: asyncio.Semaphore | None = None
        self._tasks: set[asyncio.Task[None]] = set()
        self.failures = 0

    @property
    def pending(self) -> int:
        """Number of effects submitted and not yet finished."""
        return len(self._tasks)

    def submit(self, name: str, effect: SideEffect) -> asyncio.Task[None]:
        """Schedule ``effect`` without waiting for it.

        Must be called from a running event loop.
        """
        task = asyncio.get_running_loop().create_task(
            self._run(name, effect), name=f"fanout:{name}"
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(self, name: str, effect: SideEffect) -> None:
        if self._semaphore is None:
            self._semaphore = asyncio.Semaphore(self._limit)

        async with self._semaphore:
            try:
                with self._session_factory() as db:
                    outcome = effect(db)
                    if inspect.isawaitable(outcome):
                        await outcome
            except Exception:
                self.failures += 1
                logger.warning("Side effect %s failed", name, exc_info=True)
            else:
                logger.debug("Side effect %s completed", name)

    async def drain(self) -> None:
        """Wait until every submitted effect, including ones they submit, finishes."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


_queue: FanoutQueue | None = None


def get_fanout_queue() -> FanoutQueue:
    """Return the process-wide fan-out queue."""
    global _queue
    if _queue is None:
        _queue = FanoutQueue()
    return _queue
