"""Single-concurrency task scheduler for rate-limited external calls."""

import asyncio
import time
from collections.abc import Awaitable, Callable
from typing import TypeVar

from news_aggregator.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class RateLimitedScheduler:
    """Runs one task at a time with a minimum spacing between task starts.

    Callers queue on an asyncio lock in arrival order. Before a task starts
    the scheduler waits until ``min_interval`` seconds have passed since the
    previous task finished.
    """

    def __init__(
        self,
        min_interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if min_interval < 0:
            raise ValueError("min_interval must be >= 0")
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._last_finished: float | None = None
        self.calls = 0

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    async def run(self, task: Callable[[], Awaitable[T]]) -> T:
        """
        Run ``task`` once the scheduler is free and the spacing has elapsed.

        Args:
            task: Zero-argument coroutine function

        Returns:
            Whatever the task returns; its exceptions propagate unchanged
        """
        async with self._lock:
            if self._last_finished is not None:
                remaining = self.min_interval - (self._clock() - self._last_finished)
                if remaining > 0:
                    logger.debug(f"Rate limit: waiting {remaining:.3f}s before next call")
                    await self._sleep(remaining)
            try:
                self.calls += 1
                return await task()
            finally:
                self._last_finished = self._clock()
