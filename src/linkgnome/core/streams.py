"""Fan-in helper shared by the discovery and linking stages.

A producer coroutine fans work out into tasks which push finished items onto
a single asyncio.Queue; ``merge`` turns that queue into an async iterator and
ends it once the producer (and every task it awaited) has finished.
"""

import asyncio
import contextlib
from typing import AsyncIterator, Awaitable, Callable, Generic, TypeVar

T = TypeVar("T")


class _Done:
    """Marker placed on the queue when the producer has finished."""


_DONE = _Done()


class Emitter(Generic[T]):
    """Write side of a merged stream, handed to the producer."""

    def __init__(self, queue: "asyncio.Queue[T | _Done]") -> None:
        self._queue = queue

    async def emit(self, item: T) -> None:
        """Push *item* to the consumer."""
        await self._queue.put(item)


async def merge(producer: Callable[[Emitter[T]], Awaitable[None]]) -> AsyncIterator[T]:
    """Run *producer* in the background and yield whatever it emits.

    Items are yielded in completion order. If the consumer stops early the
    producer is cancelled; if the producer fails, its exception is raised
    after the items emitted before the failure.

    Args:
        producer: Coroutine function receiving an Emitter. It must only
            return once all the work it spawned has completed.

    Yields:
        Items in the order they were emitted.
    """
    queue: "asyncio.Queue[T | _Done]" = asyncio.Queue()
    task = asyncio.create_task(producer(Emitter(queue)))
    task.add_done_callback(lambda _: queue.put_nowait(_DONE))
    try:
        while True:
            item = await queue.get()
            if isinstance(item, _Done):
                break
            yield item
        await task
    finally:
        if not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
