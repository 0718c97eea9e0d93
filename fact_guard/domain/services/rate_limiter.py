"""Single-slot throttle for outbound web-search calls."""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RateLimiter:
    """Spaces calls at least ``min_interval`` seconds apart.

    One instance is shared by every request in the process. The lock spans
    check, wait and update, so concurrent callers queue behind each other.
    """

    def __init__(
        self,
        min_interval: float = 0.25,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initialize the limiter.

        Args:
            min_interval: Minimum seconds between two permitted calls
            clock: Monotonic clock in seconds
            sleep: Coroutine used to wait
        """
        if min_interval < 0:
            raise ValueError("Minimum interval cannot be negative")
        self._min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_call: Optional[float] = None
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        """Wait until the next call is permitted and claim the slot."""
        async with self._lock:
            if self._last_call is not None:
                while (wait := self._min_interval - (self._clock() - self._last_call)) > 0:
                    logger.debug(f"⏳ Rate limit: waiting {wait * 1000:.0f}ms")
                    await self._sleep(wait)
            self._last_call = self._clock()

    async def call(self, func: Callable[[], Awaitable[T]]) -> T:
        """Run ``func`` once the rate limit permits it."""
        await self.acquire()
        return await func()

    @property
    def min_interval(self) -> float:
        """Minimum seconds between calls."""
        return self._min_interval

    @property
    def last_call(self) -> Optional[float]:
        """Clock reading of the last permitted call."""
        return self._last_call
