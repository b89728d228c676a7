"""
Rate limiting utilities for the open-data adapters.

Sliding-window limiter shared by every request a crawl fans out, so one
crawl cannot exceed the SODA throttle however many tasks run at once.
"""

import asyncio
import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


@dataclass
class RateLimitConfig:
    """Configuration for rate limiting."""

    requests_per_window: int = 10
    window_seconds: float = 10.0
    max_retry_attempts: int = 3
    retry_backoff_base: float = 1.0


class RateLimitExhausted(Exception):
    """The server kept answering 429 after every retry."""


class RateLimiter:
    """
    Sliding-window rate limiter for API requests.

    Async-safe: all bookkeeping happens under an asyncio lock.
    """

    def __init__(self, config: Optional[RateLimitConfig] = None):
        self.config = config or RateLimitConfig()
        self._timestamps: deque = deque()
        self._lock = asyncio.Lock()

    def _evict(self, now: float) -> None:
        window_start = now - self.config.window_seconds
        while self._timestamps and self._timestamps[0] <= window_start:
            self._timestamps.popleft()

    async def acquire(self) -> None:
        """Wait until a request slot is free, then take it."""
        async with self._lock:
            now = time.monotonic()
            self._evict(now)

            if len(self._timestamps) >= self.config.requests_per_window:
                wait_time = self._timestamps[0] + self.config.window_seconds - now
                if wait_time > 0:
                    logger.debug(f"Rate limit reached, waiting {wait_time:.2f}s")
                    await asyncio.sleep(wait_time)
                now = time.monotonic()
                self._evict(now)

            self._timestamps.append(now)

    async def acquire_with_retry(self, func, *args, **kwargs):
        """
        Acquire a slot and execute ``func``, retrying on HTTP 429.

        Any other error propagates after a single attempt.

        Raises:
            RateLimitExhausted: if every attempt was throttled
        """
        for attempt in range(self.config.max_retry_attempts):
            await self.acquire()

            try:
                response = await func(*args, **kwargs)
                response.raise_for_status()
                return response
            except httpx.HTTPStatusError as e:
                if e.response.status_code != 429:
                    raise
                retry_after = e.response.headers.get("Retry-After")
                try:
                    wait_time = float(retry_after)
                except (TypeError, ValueError):
                    wait_time = self.config.retry_backoff_base * (2 ** attempt)

                logger.warning(
                    f"Rate limited by server, waiting {wait_time}s "
                    f"(attempt {attempt + 1}/{self.config.max_retry_attempts})"
                )
                await asyncio.sleep(wait_time)

        raise RateLimitExhausted(
            f"Rate limit exceeded after {self.config.max_retry_attempts} attempts"
        )


class RateLimitedClient:
    """
    HTTP client wrapper with built-in rate limiting.

    Wraps httpx.AsyncClient; responses are status-checked.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        rate_limiter: Optional[RateLimiter] = None,
    ):
        self._client = client
        self._limiter = rate_limiter or RateLimiter()

    async def get(self, url: str, **kwargs) -> httpx.Response:
        """Rate-limited GET request."""
        return await self._limiter.acquire_with_retry(self._client.get, url, **kwargs)

    async def aclose(self) -> None:
        """Close the underlying client."""
        await self._client.aclose()
