"""Token-bucket rate limiter shared by all catalog requests."""

import asyncio
import time


class TokenBucket:
    """Async token bucket.

    Holds up to *burst* tokens and refills at *rate* tokens per second. Each
    request takes one token; when the bucket is empty, ``acquire`` sleeps
    until a token is available. Waiters are served one at a time.
    """

    def __init__(self, rate: float, burst: int) -> None:
        """Initialize a full bucket.

        Raises:
            ValueError: If *rate* is not positive or *burst* is below 1.
        """
        if rate <= 0:
            raise ValueError(f"rate must be positive, got {rate}")
        if burst < 1:
            raise ValueError(f"burst must be at least 1, got {burst}")
        self.rate = float(rate)
        self.burst = burst
        self._tokens = float(burst)
        self._updated = time.monotonic()
        self._lock = asyncio.Lock()

    def _refill(self) -> None:
        now = time.monotonic()
        self._tokens = min(self.burst, self._tokens + (now - self._updated) * self.rate)
        self._updated = now

    @property
    def available(self) -> float:
        """Tokens currently available (refilled as of now)."""
        self._refill()
        return self._tokens

    async def acquire(self) -> None:
        """Take one token, waiting for the bucket to refill if needed."""
        async with self._lock:
            self._refill()
            if self._tokens < 1:
                await asyncio.sleep((1 - self._tokens) / self.rate)
                self._refill()
            self._tokens -= 1
