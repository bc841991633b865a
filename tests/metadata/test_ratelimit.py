"""Tests for the TokenBucket rate limiter."""

import asyncio
import time

import pytest

from linkgnome.metadata.ratelimit import TokenBucket


@pytest.mark.parametrize(("rate", "burst"), [(0, 1), (-1, 1), (1, 0)])
def test_invalid_arguments(rate: float, burst: int) -> None:
    with pytest.raises(ValueError):
        TokenBucket(rate, burst)


@pytest.mark.asyncio
async def test_burst_is_served_immediately() -> None:
    bucket = TokenBucket(rate=1, burst=5)
    start = time.monotonic()
    for _ in range(5):
        await bucket.acquire()
    assert time.monotonic() - start < 0.5
    assert bucket.available < 1


@pytest.mark.asyncio
async def test_acquire_waits_when_empty() -> None:
    bucket = TokenBucket(rate=20, burst=1)
    await bucket.acquire()
    start = time.monotonic()
    await bucket.acquire()
    # One token at 20/s takes roughly 50ms to refill.
    assert time.monotonic() - start >= 0.03


@pytest.mark.asyncio
async def test_sustained_rate_is_bounded() -> None:
    bucket = TokenBucket(rate=50, burst=2)
    start = time.monotonic()
    await asyncio.gather(*(bucket.acquire() for _ in range(7)))
    # Two from the burst, then five more at 50/s.
    assert time.monotonic() - start >= 0.08


@pytest.mark.asyncio
async def test_bucket_never_exceeds_burst() -> None:
    bucket = TokenBucket(rate=1000, burst=3)
    await asyncio.sleep(0.01)
    assert bucket.available <= 3
