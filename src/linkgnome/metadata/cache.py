"""In-memory cache of resolved catalog lookups.

The cache lives for one run. Entries are never evicted or replaced, so once a
raw title has been resolved every later lookup of it returns the same answer.
"""

import asyncio
import contextlib
from typing import AsyncIterator, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from linkgnome.models.core import MediaType

CacheKey = Tuple[MediaType, str]


class LookupResult(BaseModel):
    """Canonical record for one resolved title."""

    model_config = ConfigDict(frozen=True)

    title: str
    tmdb_id: int
    countries: List[str] = Field(default_factory=list)
    year: Optional[int] = None


class _ReadWriteLock:
    """Asyncio lock admitting many readers or a single writer."""

    def __init__(self) -> None:
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writing = False

    @contextlib.asynccontextmanager
    async def read(self) -> AsyncIterator[None]:
        async with self._cond:
            await self._cond.wait_for(lambda: not self._writing)
            self._readers += 1
        try:
            yield
        finally:
            async with self._cond:
                self._readers -= 1
                self._cond.notify_all()

    @contextlib.asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        async with self._cond:
            await self._cond.wait_for(lambda: not self._writing and self._readers == 0)
            self._writing = True
        try:
            yield
        finally:
            async with self._cond:
                self._writing = False
                self._cond.notify_all()


class LookupCache:
    """Process-lifetime lookup cache keyed by ``(media type, raw title)``.

    Keys are the titles as parsed from file names, before any resolution.
    ``put`` keeps the first value written for a key, so two tasks racing on
    the same title may both hit the network but always agree on the result.
    """

    def __init__(self) -> None:
        self._entries: Dict[CacheKey, LookupResult] = {}
        self._lock = _ReadWriteLock()

    async def get(self, key: CacheKey) -> Optional[LookupResult]:
        """Return the cached result for *key*, or None."""
        async with self._lock.read():
            return self._entries.get(key)

    async def put(self, key: CacheKey, value: LookupResult) -> LookupResult:
        """Store *value* unless *key* is already cached; return the stored value."""
        async with self._lock.write():
            return self._entries.setdefault(key, value)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
