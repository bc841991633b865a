"""Directory discovery for media files.

This module walks one source root, prunes excluded directories, and
classifies every remaining regular file into a Movie or Episode.

Design:
- Traversal is sequential so a directory is pruned before anything below it
  is visited.
- Each regular file becomes its own task (bounded by a semaphore) which stats,
  filters and classifies it in a worker thread.
- Finished entities are merged into one async stream with no ordering
  guarantee; the stream ends only after every in-flight file task completes.
- Files that are filtered out, fail to stat or fail classification are
  dropped silently. Only a root that cannot be stat'ed is an error.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import AsyncIterator, List, Optional, Sequence, Union

from linkgnome.core.classifier import ClassificationError, classify
from linkgnome.core.filters import FileFilter, FileInfo, excluded_by
from linkgnome.core.streams import Emitter, merge
from linkgnome.models.core import MediaEntity
from linkgnome.models.options import DEFAULT_WORKERS

logger = logging.getLogger(__name__)


class DiscoveryError(Exception):
    """Raised when a source root cannot be walked at all."""


def _scan(directory: Path) -> List[os.DirEntry[str]]:
    with os.scandir(directory) as it:
        return sorted(it, key=lambda e: e.name)


class _Walker:
    """Walk state for a single discovery run."""

    def __init__(
        self,
        filters: Sequence[FileFilter],
        *,
        title_case: bool,
        workers: int,
        cancel: Optional[asyncio.Event],
    ) -> None:
        self.filters = list(filters)
        self.title_case = title_case
        self.cancel = cancel
        self._slots = asyncio.Semaphore(workers)

    @property
    def cancelled(self) -> bool:
        return self.cancel is not None and self.cancel.is_set()

    async def run(self, root: Path, out: Emitter[MediaEntity]) -> None:
        async with asyncio.TaskGroup() as tg:
            if root.is_dir():
                await self._walk(root, out, tg)
            else:
                tg.create_task(self._process(root, out))

    async def _walk(self, directory: Path, out: Emitter[MediaEntity], tg: asyncio.TaskGroup) -> None:
        try:
            entries = await asyncio.to_thread(_scan, directory)
        except OSError as e:
            logger.warning("cannot read directory %s: %s", directory, e)
            return

        for entry in entries:
            if self.cancelled:
                logger.debug("discovery cancelled, not descending further")
                return
            path = Path(entry.path)
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError as e:
                logger.debug("cannot inspect %s: %s", path, e)
                continue
            if is_dir:
                if await self._prune(path, entry):
                    continue
                await self._walk(path, out, tg)
            elif entry.is_file(follow_symlinks=False):
                tg.create_task(self._process(path, out))

    async def _prune(self, path: Path, entry: os.DirEntry[str]) -> bool:
        try:
            st = await asyncio.to_thread(entry.stat, follow_symlinks=False)
        except OSError as e:
            logger.debug("cannot stat directory %s: %s", path, e)
            return True
        info = FileInfo.from_stat(path, st, is_dir=True)
        rejected = excluded_by(self.filters, info)
        if rejected is not None:
            logger.debug("skipping directory %s (%r)", path, rejected)
            return True
        return False

    async def _process(self, path: Path, out: Emitter[MediaEntity]) -> None:
        async with self._slots:
            media = await asyncio.to_thread(self._classify_file, path)
        if media is not None:
            await out.emit(media)

    def _classify_file(self, path: Path) -> Optional[MediaEntity]:
        try:
            st = path.stat(follow_symlinks=False)
        except OSError as e:
            logger.debug("cannot stat %s: %s", path, e)
            return None
        info = FileInfo.from_stat(path, st, is_dir=False)
        if excluded_by(self.filters, info) is not None:
            return None
        try:
            return classify(path, title_case=self.title_case)
        except ClassificationError as e:
            logger.debug("skipping %s: %s", path, e)
            return None


async def discover(
    root: Union[str, Path],
    filters: Sequence[FileFilter] = (),
    *,
    title_case: bool = True,
    workers: int = DEFAULT_WORKERS,
    cancel: Optional[asyncio.Event] = None,
) -> AsyncIterator[MediaEntity]:
    """Discover and classify media files under *root*.

    Args:
        root: Directory (or single file) to walk. It is not filtered itself.
        filters: File filters; a directory excluded by any of them is pruned.
        title_case: Whether the classifier title-cases parsed titles.
        workers: Maximum number of files classified concurrently.
        cancel: Once set, no new files are queued; in-flight ones finish.

    Yields:
        Movies and Episodes, in no particular order.

    Raises:
        DiscoveryError: If *root* cannot be stat'ed.
    """
    root = Path(root)
    try:
        await asyncio.to_thread(root.stat)
    except OSError as e:
        raise DiscoveryError(f"failed to stat {root}: {e}") from e

    walker = _Walker(filters, title_case=title_case, workers=workers, cancel=cancel)
    async for media in merge(lambda out: walker.run(root, out)):
        yield media
