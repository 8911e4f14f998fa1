"""Fixed-interval background polling.

A tick fires every ``interval`` seconds regardless of whether the previous
fetch has finished: slow responses overlap, and there is no backoff. The
first tick fires immediately on start().
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RealtimePoller(Generic[T]):
    def __init__(
        self,
        fetch: Callable[[], Awaitable[T]],
        on_result: Callable[[T], None],
        interval: float,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._fetch = fetch
        self._on_result = on_result
        self._interval = interval
        self._loop_task: asyncio.Task | None = None
        self._in_flight: set[asyncio.Task] = set()

    @property
    def running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    def start(self) -> None:
        if self.running:
            return
        self._loop_task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Cancel the loop and any fetches still in flight."""
        tasks = list(self._in_flight)
        if self._loop_task is not None:
            tasks.append(self._loop_task)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._loop_task = None
        self._in_flight.clear()

    async def _run(self) -> None:
        while True:
            task = asyncio.create_task(self._tick())
            self._in_flight.add(task)
            task.add_done_callback(self._in_flight.discard)
            await asyncio.sleep(self._interval)

    async def _tick(self) -> None:
        try:
            result = await self._fetch()
        except Exception:
            logger.exception("Realtime poll failed")
            return
        self._on_result(result)
