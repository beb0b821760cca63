"""
Randomized politeness pauses between requests.

This is a fixed pacing mechanism, not backoff: the delay doesn't react to
errors or response codes.
"""

import asyncio
import random
from typing import Awaitable, Callable, Optional

from ..core.constants import DOWNLOAD_DELAY_MS, PAGE_DELAY_MS


class RateLimiter:
    """
    Sleeps for a uniformly random number of milliseconds.

    Args:
        page_delay_ms: (min, max) pause between feed pages
        download_delay_ms: (min, max) pause between game downloads
        sleep: Coroutine function taking seconds (asyncio.sleep by default)
        rng: Random source (module-level random by default)
    """

    def __init__(
        self,
        page_delay_ms: tuple[int, int] = PAGE_DELAY_MS,
        download_delay_ms: tuple[int, int] = DOWNLOAD_DELAY_MS,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.page_delay_ms = page_delay_ms
        self.download_delay_ms = download_delay_ms
        self._sleep = sleep or asyncio.sleep
        self._rng = rng or random
        self.total_slept_ms = 0

    def pick_delay(self, min_ms: int, max_ms: int) -> int:
        """Random whole number of milliseconds in [min_ms, max_ms]."""
        if min_ms < 0 or max_ms < min_ms:
            raise ValueError(f"Invalid delay bounds: {min_ms}..{max_ms}")
        return self._rng.randint(min_ms, max_ms)

    async def delay(self, min_ms: int = PAGE_DELAY_MS[0], max_ms: int = PAGE_DELAY_MS[1]) -> int:
        """Sleep for a random duration and return it in milliseconds."""
        delay_ms = self.pick_delay(min_ms, max_ms)
        self.total_slept_ms += delay_ms
        await self._sleep(delay_ms / 1000)
        return delay_ms

    async def pause_between_pages(self) -> int:
        return await self.delay(*self.page_delay_ms)

    async def pause_between_downloads(self) -> int:
        return await self.delay(*self.download_delay_ms)
