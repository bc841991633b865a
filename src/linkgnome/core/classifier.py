"""Filename classifier for media files.

This module turns a file path into a Movie or Episode using only the path
text; no filesystem access happens here.

Markers are located in the file's base name (extension stripped):
- episode marker: ``S01E02``, optionally followed by more episodes
  (``S01E02E03``, ``S01E02-E03``). Its presence makes the file an Episode.
- year marker: a plausible 4-digit year, optionally followed by a full date.
- sentinel marker: a release tag (resolution, source, codec, ``limited``,
  ``aka``...) that ends the meaningful title region.

Titles are carved out with span arithmetic: a title span runs from its start
to just before the earliest marker that falls inside it; a marker at the very
start of a span is ignored. Movies additionally fall back to the
parent directory name when the base name does not yield a title and a year.
"""

import logging
import re
from datetime import date
from pathlib import Path
from typing import List, Optional, Tuple, Union

from linkgnome.models.core import (
    INVALID_NUMBER,
    MIN_MOVIE_YEAR,
    Episode,
    MediaEntity,
    Movie,
)

logger = logging.getLogger(__name__)

EPISODE_MARKER = re.compile(
    r"(?<![a-z0-9])s(?P<season>\d+)e(?P<episode>\d+)(?P<more>(?:-?e\d+)*)",
    re.IGNORECASE,
)
EPISODE_NUMBER = re.compile(r"e(\d+)", re.IGNORECASE)

# Episodes accept any 19xx/20xx year; movies extend the floor to 1888.
EPISODE_YEAR_MARKER = re.compile(r"\b(?P<year>(?:19|20)\d{2})\b(?:-\d{1,2}-\d{1,2})?")
MOVIE_YEAR_MARKER = re.compile(
    r"\b(?P<year>18[89]\d|19\d{2}|20\d{2})\b(?:-\d{1,2}-\d{1,2})?"
)

SENTINEL_MARKER = re.compile(
    r"\b(?:\d{3,4}[ip]|4k|uhd|limited|unrated|web-?dl|webrip|blu-?ray|bdrip|brrip"
    r"|dvdrip|hdtv|hdrip|10bit|x26[45]|h\.?26[45]|hevc|xvid|pal|ntsc"
    r"|re-?rip|repack|a\.k\.a\.?|aka)\b",
    re.IGNORECASE,
)

# Letters that start a word: not preceded by a word character or apostrophe.
_WORD_START = re.compile(r"(?<![\w'’])[^\W\d_]")


class ClassificationError(ValueError):
    """Raised when a path cannot be classified as a movie or an episode."""


def make_title(text: str, *, title_case: bool = True) -> str:
    """Normalise a raw title span.

    Dots and underscores become spaces, surrounding dashes and spaces are
    trimmed, and the first letter of every word is upper-cased unless
    *title_case* is False. Letters after the first are left alone, so
    acronyms survive.

    Args:
        text: Raw span cut from a file or directory name.
        title_case: Whether to upper-case word starts.

    Returns:
        The normalised title (possibly empty).
    """
    title = text.replace(".", " ").replace("_", " ").strip("- ")
    if not title_case:
        return title
    return _WORD_START.sub(lambda m: m.group(0).upper(), title)


def _cut(span: Tuple[int, int], marker_start: Optional[int]) -> Tuple[int, int]:
    """Shorten *span* to end just before *marker_start* when it falls inside.

    The character before the marker is a separator and is dropped too, so a
    marker right after the span start leaves it empty. A marker at the span
    start itself is ignored.
    """
    start, end = span
    if marker_start is None or marker_start <= start:
        return span
    cut = marker_start - 1
    if cut < end:
        return start, max(cut, start)
    return span


def _parse_number(text: str, what: str, path: str) -> int:
    try:
        return int(text)
    except ValueError:
        logger.warning("could not parse %s number %r in %s", what, text, path)
        return INVALID_NUMBER


def _split_name(path: Path) -> str:
    return path.name[: len(path.name) - len(path.suffix)]


def episode_from_path(path: Union[str, Path], *, title_case: bool = True) -> Episode:
    """Classify *path* as an Episode.

    Args:
        path: Path of the media file.
        title_case: Whether to title-case the parsed series and episode title.

    Returns:
        The parsed Episode.

    Raises:
        ClassificationError: If the base name carries no episode marker.
    """
    path = Path(path)
    basename = _split_name(path)
    marker = EPISODE_MARKER.search(basename)
    if marker is None:
        raise ClassificationError(f"no episode marker in {basename!r}")

    season = _parse_number(marker.group("season"), "season", str(path))
    numbers: List[int] = [_parse_number(marker.group("episode"), "episode", str(path))]
    numbers.extend(
        _parse_number(n, "episode", str(path))
        for n in EPISODE_NUMBER.findall(marker.group("more"))
    )

    series_span = (0, marker.start() - 1 if marker.start() > 0 else 0)
    title_start = marker.end() + 1
    title_end = len(basename)

    year: Optional[int] = None
    for year_match in EPISODE_YEAR_MARKER.finditer(basename):
        if year_match.start() < marker.start():
            # A year before the marker belongs to the series name.
            if year is None:
                year = int(year_match.group("year"))
                series_span = _cut(series_span, year_match.start())
        elif year_match.start() >= marker.end():
            title_end = min(title_end, year_match.start() - 1)
            break

    series_sentinel = SENTINEL_MARKER.search(basename, 0, max(marker.start(), 0))
    if series_sentinel is not None:
        series_span = _cut(series_span, series_sentinel.start())

    title_sentinel = SENTINEL_MARKER.search(basename, marker.end())
    if title_sentinel is not None:
        title_end = min(title_end, title_sentinel.start() - 1)

    title: Optional[str] = None
    if title_start < title_end:
        title = make_title(basename[title_start:title_end], title_case=title_case)

    return Episode(
        source=path,
        series=make_title(basename[series_span[0] : series_span[1]], title_case=title_case),
        title=title or None,
        episode_id=marker.group(0),
        season=season,
        episode=numbers[0],
        episodes=numbers,
        year=year,
    )


def _movie_year(name: str) -> Tuple[Optional[int], Optional[int]]:
    """Locate the release year in *name*.

    Returns:
        Tuple of (year, start index), or (None, None).
    """
    latest = date.today().year + 1
    sentinel = SENTINEL_MARKER.search(name, 1)
    limit = sentinel.start() if sentinel is not None else len(name)
    candidates = [
        m
        for m in MOVIE_YEAR_MARKER.finditer(name)
        if MIN_MOVIE_YEAR <= int(m.group("year")) <= latest
    ]
    if not candidates:
        return None, None
    # Prefer the last year that is not the whole title and precedes the
    # release tags, so titles such as "2001 A Space Odyssey 1968" keep their
    # leading number.
    inside = [m for m in candidates if 0 < m.start() < limit]
    chosen = inside[-1] if inside else candidates[0]
    return int(chosen.group("year")), chosen.start()


def _movie_candidate(name: str, title_case: bool) -> Tuple[str, Optional[int]]:
    year, year_start = _movie_year(name)
    span = _cut((0, len(name)), year_start)
    sentinel = SENTINEL_MARKER.search(name, 1)
    if sentinel is not None:
        span = _cut(span, sentinel.start())
    return make_title(name[span[0] : span[1]], title_case=title_case), year


def movie_from_path(path: Union[str, Path], *, title_case: bool = True) -> Movie:
    """Classify *path* as a Movie.

    The base name is tried first, then the parent directory name. The first
    candidate yielding both a title and a year wins.

    Args:
        path: Path of the media file.
        title_case: Whether to title-case the parsed title.

    Returns:
        The parsed Movie.

    Raises:
        ClassificationError: If neither name yields a title and a year.
    """
    path = Path(path)
    for name in (_split_name(path), path.parent.name):
        title, year = _movie_candidate(name, title_case)
        if title and year is not None:
            return Movie(source=path, title=title, year=year)
    raise ClassificationError(f"no movie title and year in {str(path)!r}")


def classify(path: Union[str, Path], *, title_case: bool = True) -> MediaEntity:
    """Classify a media file path as a Movie or an Episode.

    Args:
        path: Path of the media file. It is never opened.
        title_case: Whether to title-case parsed titles.

    Returns:
        An Episode when the base name carries an episode marker, else a Movie.

    Raises:
        ClassificationError: If a movie title and year cannot be extracted.
    """
    path = Path(path)
    if EPISODE_MARKER.search(_split_name(path)):
        return episode_from_path(path, title_case=title_case)
    return movie_from_path(path, title_case=title_case)
