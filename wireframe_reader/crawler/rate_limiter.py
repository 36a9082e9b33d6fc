"""
Rate limiting for polite crawling.

Keeps a fixed minimum spacing between consecutive requests, shared by
all crawl workers.
"""

import asyncio
import time


class RateLimiter:
    """
    Enforces a constant delay between requests.

    The first request goes through immediately. This is a fixed delay,
    not an adaptive backoff.
    """

    def __init__(self, delay_seconds: float = 0.5):
        """
        Initialize rate limiter.

        Args:
            delay_seconds: Minimum seconds between two requests
        """
        self.delay_seconds = max(0.0, delay_seconds)
        self.request_count = 0
        self._last_request_time = None
        self._lock = asyncio.Lock()

    async def acquire(self) -> float:
        """
        Wait until the next request is allowed.

        Returns:
            Time waited in seconds
        """
        async with self._lock:
            waited = 0.0
            now = time.monotonic()

            if self._last_request_time is not None:
                elapsed = now - self._last_request_time
                if elapsed < self.delay_seconds:
                    waited = self.delay_seconds - elapsed
                    await asyncio.sleep(waited)

            self._last_request_time = time.monotonic()
            self.request_count += 1
            return waited
