"""Cancellable, ordered delivery of delayed replies.

Hidden design decisions:
- Each reply is an asyncio task tagged with the scheduler generation
- Delays run concurrently but deliveries are chained, so replies appear in send order
- ``cancel_all`` bumps the generation; a task from an older generation never delivers
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

Deliver = Callable[[], Awaitable[None]]


class ReplyScheduler:
    """Schedules reply deliveries after a delay, preserving send order."""

    def __init__(self) -> None:
        self._generation = 0
        self._tasks: set[asyncio.Task[None]] = set()
        self._tail: asyncio.Task[None] | None = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def pending(self) -> int:
        """Number of replies not yet delivered."""
        return len(self._tasks)

    def schedule(
        self, delay: float, deliver: Deliver, *, name: str | None = None
    ) -> asyncio.Task[None]:
        """Run ``deliver`` after ``delay`` seconds and after every earlier reply.

        Must be called from a running event loop.
        """
        task = asyncio.create_task(
            self._run(self._generation, delay, self._tail, deliver), name=name
        )
        self._tail = task
        self._tasks.add(task)
        task.add_done_callback(self._finished)
        return task

    def cancel_all(self) -> int:
        """Cancel every pending reply. Returns how many were cancelled."""
        self._generation += 1
        cancelled = 0
        for task in list(self._tasks):
            if task.cancel():
                cancelled += 1
        self._tail = None
        if cancelled:
            logger.info("Cancelled %d pending replies", cancelled)
        return cancelled

    async def wait_idle(self) -> None:
        """Wait until no reply is pending, including ones scheduled meanwhile."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _run(
        self,
        generation: int,
        delay: float,
        previous: asyncio.Task[None] | None,
        deliver: Deliver,
    ) -> None:
        await asyncio.sleep(delay)
        if previous is not None and not previous.done():
            await asyncio.wait({previous})
        if generation != self._generation:
            return
        await deliver()

    def _finished(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if task is self._tail:
            self._tail = None
        if not task.cancelled() and task.exception() is not None:
            logger.error("Reply delivery failed", exc_info=task.exception())
