"""Minimum-spacing gate for outbound Wikipedia requests."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


@dataclass
class RateLimiter:
    """Holds the time the last request finished and delays the next one.

    One instance is shared by every operation of a client. Callers await
    `wait()` before a request and call `mark()` once it has resolved, whether
    it succeeded or not.

    Usage:
        limiter = RateLimiter(delay_ms=1000)
        await limiter.wait()
        try:
            ...
        finally:
            limiter.mark()
    """

    delay_ms: float
    clock: Callable[[], float] = field(default=_monotonic_ms, repr=False)
    sleep: Callable[[float], Awaitable[None]] = field(default=asyncio.sleep, repr=False)
    last_request_ms: float | None = field(default=None, init=False)

    def remaining_ms(self) -> float:
        """Milliseconds left before the next request may start."""
        if self.last_request_ms is None:
            return 0.0
        elapsed = self.clock() - self.last_request_ms
        if elapsed < 0:
            # Clock went backwards
            return 0.0
        return max(self.delay_ms - elapsed, 0.0)

    async def wait(self) -> None:
        delay = self.remaining_ms()
        if delay > 0:
            logger.debug(f"Rate limit: sleeping {delay:.0f}ms")
            await self.sleep(delay / 1000)

    def mark(self) -> None:
        self.last_request_ms = self.clock()
