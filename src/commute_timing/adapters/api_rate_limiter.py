"""Spacing of outgoing calls to rate-limited upstream APIs.

The public Seoul open data endpoints throttle per key, so every adapter that
talks to the same API shares one limiter instance.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import ClassVar

logger = logging.getLogger(__name__)


class ApiRateLimiter:
    """Enforces a minimum interval between calls to one API.

    Callers queue on an asyncio.Lock, so concurrent station lookups are
    released one at a time.
    """

    _instances: ClassVar[dict[str, ApiRateLimiter]] = {}
    _registry_lock: ClassVar[asyncio.Lock | None] = None

    def __init__(self, api_name: str, min_interval_seconds: float = 0.1) -> None:
        """Initialize the limiter.

        Args:
            api_name: Upstream API the limiter guards, used in log messages.
            min_interval_seconds: Minimum time between two calls.
        """
        self.api_name = api_name
        self.min_interval_seconds = min_interval_seconds
        self._last_call: float | None = None
        self._lock = asyncio.Lock()

    @classmethod
    async def get_instance(
        cls, api_name: str, min_interval_seconds: float = 0.1
    ) -> ApiRateLimiter:
        """Return the limiter shared by all callers of an API, creating it on first use.

        The interval of an existing limiter is kept; later arguments are ignored.
        """
        if cls._registry_lock is None:
            cls._registry_lock = asyncio.Lock()

        async with cls._registry_lock:
            limiter = cls._instances.get(api_name)
            if limiter is None:
                limiter = cls(api_name, min_interval_seconds)
                cls._instances[api_name] = limiter
                logger.info(
                    f"Rate limiting {api_name} to one call every {min_interval_seconds}s"
                )
            return limiter

    @classmethod
    def reset(cls) -> None:
        """Forget all shared limiters."""
        cls._instances.clear()
        cls._registry_lock = None

    async def acquire(self) -> None:
        """Wait until the next call to the API is allowed."""
        async with self._lock:
            if self._last_call is not None:
                remaining = self.min_interval_seconds - (time.monotonic() - self._last_call)
                if remaining > 0:
                    logger.debug(f"{self.api_name}: delaying call by {remaining:.2f}s")
                    await asyncio.sleep(remaining)

            self._last_call = time.monotonic()

    async def __aenter__(self) -> ApiRateLimiter:
        await self.acquire()
        return self

    async def __aexit__(
        self, _exc_type: type | None, _exc_val: BaseException | None, _exc_tb: object
    ) -> None:
        return None
