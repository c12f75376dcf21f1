"""Serialized asynchronous work queue."""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Callable, Optional, Set

from .utils.logging import get_logger

LOGGER = get_logger(__name__)


class SequentialTaskQueue:
    """Run deferred units of work one at a time, in submission order.

    A unit may return an awaitable; the queue waits for it before starting
    the next unit. A failing unit does not stop the queue: its exception is
    delivered through the task returned by :meth:`defer` only.
    """

    def __init__(self, name: str = "queue") -> None:
        self.name = name
        self._tail: Optional[asyncio.Task] = None
        self._tasks: Set[asyncio.Task] = set()

    def __repr__(self) -> str:
        return f"SequentialTaskQueue(name={self.name!r}, pending={self.pending})"

    @property
    def pending(self) -> int:
        """Number of deferred units that have not finished yet."""
        return len(self._tasks)

    @property
    def busy(self) -> bool:
        return bool(self._tasks)

    def defer(self, work: Callable[..., Any], *args: Any, **kwargs: Any) -> asyncio.Task:
        """Schedule *work* after everything deferred before it.

        Must be called while an event loop is running.
        """

        loop = asyncio.get_running_loop()
        previous = self._tail
        task = loop.create_task(self._run(previous, work, args, kwargs))
        self._tail = task
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        LOGGER.debug("%s: deferred %r (%d pending)", self.name, work, self.pending)
        return task

    async def join(self) -> None:
        """Wait until every unit deferred so far has finished."""

        if self._tasks:
            await asyncio.wait(list(self._tasks))

    async def _run(
        self,
        previous: Optional[asyncio.Task],
        work: Callable[..., Any],
        args: tuple,
        kwargs: dict,
    ) -> Any:
        if previous is not None and not previous.done():
            # ``wait`` never raises the previous unit's exception.
            await asyncio.wait([previous])
        result = work(*args, **kwargs)
        if inspect.isawaitable(result):
            result = await result
        return result

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if self._tail is task:
            self._tail = None
        if not task.cancelled() and task.exception() is not None:
            LOGGER.debug("%s: unit failed: %r", self.name, task.exception())
