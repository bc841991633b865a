"""Filters used to prune discovery and drop resolved media.

File filters look at a FileInfo snapshot of a directory entry and decide
whether to exclude it. A directory excluded by any filter is pruned together
with everything beneath it. Media filters look at a classified (and possibly
resolved) entity.

All filters in a chain must pass; their order never changes the outcome.
"""

import os
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional, Self

from linkgnome.models.core import MediaEntity, MediaType
from linkgnome.models.options import LinkOptions

# Sample clips shipped alongside releases are never worth linking.
SAMPLE_PATTERN = r"(?i)\bsample\b"


@dataclass(frozen=True)
class FileInfo:
    """Snapshot of the metadata filters need about a directory entry."""

    path: Path
    name: str
    is_dir: bool
    mtime: datetime

    @classmethod
    def from_stat(cls, path: Path, st: os.stat_result, *, is_dir: bool) -> Self:
        """Build a FileInfo from an ``os.stat_result``."""
        return cls(
            path=path,
            name=path.name,
            is_dir=is_dir,
            mtime=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
        )


class FileFilter(ABC):
    """Predicate excluding files or directories during discovery."""

    @abstractmethod
    def exclude(self, info: FileInfo) -> bool:
        """Return True if *info* should be skipped."""


class MediaFilter(ABC):
    """Predicate excluding classified media entities."""

    @abstractmethod
    def exclude(self, media: MediaEntity) -> bool:
        """Return True if *media* should be dropped."""


class ExtensionFilter(FileFilter):
    """Exclude files whose extension is not in the allow-list.

    Directories are never excluded by this filter.
    """

    def __init__(self, extensions: Iterable[str]) -> None:
        self.extensions = {ext.lower().lstrip(".") for ext in extensions}

    def exclude(self, info: FileInfo) -> bool:
        if info.is_dir:
            return False
        ext = info.name.rsplit(".", 1)[-1].lower()
        return ext not in self.extensions

    def __repr__(self) -> str:
        return f"ExtensionFilter({sorted(self.extensions)!r})"


class PatternFilter(FileFilter):
    """Exclude entries whose name matches any of the given regular expressions."""

    def __init__(self, patterns: Iterable[str]) -> None:
        self.patterns = [re.compile(p) for p in patterns]

    def exclude(self, info: FileInfo) -> bool:
        return any(p.search(info.name) for p in self.patterns)

    def __repr__(self) -> str:
        return f"PatternFilter({[p.pattern for p in self.patterns]!r})"


class ModifiedTimeFilter(FileFilter):
    """Exclude files not modified strictly after *after* / before *before*.

    Naive datetimes are taken as local time. Directory modification times
    say nothing about the files below them, so directories always pass.
    """

    def __init__(
        self, after: Optional[datetime] = None, before: Optional[datetime] = None
    ) -> None:
        self.after = _aware(after)
        self.before = _aware(before)

    def exclude(self, info: FileInfo) -> bool:
        if info.is_dir:
            return False
        if self.after is not None and not info.mtime > self.after:
            return True
        if self.before is not None and not info.mtime < self.before:
            return True
        return False

    def __repr__(self) -> str:
        return f"ModifiedTimeFilter(after={self.after}, before={self.before})"


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is not None:
        return value
    return value.astimezone()


class CountryFilter(MediaFilter):
    """Exclude media produced in any of the given origin countries."""

    def __init__(self, codes: Iterable[str]) -> None:
        self.countries = {code.lower() for code in codes}

    def exclude(self, media: MediaEntity) -> bool:
        return any(country.lower() in self.countries for country in media.countries)


class MediaTypeFilter(MediaFilter):
    """Exclude whole media types.

    The type is known right after classification, so this runs before any
    network lookup.
    """

    def __init__(self, *, exclude_movies: bool = False, exclude_tv: bool = False) -> None:
        self.excluded: set[MediaType] = set()
        if exclude_movies:
            self.excluded.add(MediaType.MOVIE)
        if exclude_tv:
            self.excluded.add(MediaType.EPISODE)

    def exclude(self, media: MediaEntity) -> bool:
        return media.kind in self.excluded


def excluded_by(filters: Iterable[FileFilter], info: FileInfo) -> Optional[FileFilter]:
    """Return the first filter excluding *info*, or None when all pass."""
    for f in filters:
        if f.exclude(info):
            return f
    return None


def build_file_filters(options: LinkOptions) -> List[FileFilter]:
    """Assemble the discovery filter chain for *options*.

    The sample-clip filter is always installed.
    """
    filters: List[FileFilter] = [PatternFilter([SAMPLE_PATTERN])]
    if options.extensions:
        filters.append(ExtensionFilter(options.extensions))
    if options.excludes:
        filters.append(PatternFilter(options.excludes))
    if options.modified_after is not None or options.modified_before is not None:
        filters.append(
            ModifiedTimeFilter(after=options.modified_after, before=options.modified_before)
        )
    return filters


def build_media_filters(options: LinkOptions) -> List[MediaFilter]:
    """Assemble the post-resolution media filter chain for *options*."""
    filters: List[MediaFilter] = []
    if options.exclude_countries:
        filters.append(CountryFilter(options.exclude_countries))
    return filters
