from __future__ import annotations
import asyncio
import time
from typing import Callable, Awaitable


class RateLimiter:
    """
    Spaces outbound calls at least `min_interval` seconds apart.

    One instance is shared by every search the agent makes, across all
    conversations. Callers queue on an asyncio.Lock, so concurrent envelopes
    cannot both pass the check before either one has recorded its call.
    """

    def __init__(
        self,
        min_interval: float = 2.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Args:
            min_interval: Minimum spacing between two calls, in seconds.
            clock: Monotonic time source (seconds).
            sleep: Coroutine used to suspend while waiting.
        """
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self.last_call: float | None = None  # None = never called

    async def wait(self) -> None:
        """Suspend until a call slot is free, then claim it."""
        async with self._lock:
            if self.last_call is not None:
                wait_s = self.min_interval - (self._clock() - self.last_call)
                if wait_s > 0:
                    await self._sleep(wait_s)
            self.last_call = self._clock()
