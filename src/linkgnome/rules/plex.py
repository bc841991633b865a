"""Plex-style library layout.

Follows the Plex naming guide:
https://support.plex.tv/articles/naming-and-organizing-your-tv-show-files/

Movie format:
    movies/Movie Name (Year)/<original file name>
TV Show format:
    tv/Show Name (Year)/Season N/Show Name (Year) - S01E02 - Episode Title.ext

The year suffix is only written when a year is known, the season folder of
season 0 is ``Specials``, and multi-episode files are named ``S01E02-E04``.
"""

from pathlib import Path, PurePosixPath
from typing import List, Optional, Self

from linkgnome.models.core import Episode, Link, MediaEntity, MediaType, Movie
from linkgnome.rules.base import RuleSet

# Used when the classifier found an episode marker but no series name.
UNKNOWN_SHOW = "Unknown Show"


def _component(text: str) -> str:
    # A title must never introduce an extra directory level.
    return text.replace("/", "-").strip()


def _with_year(name: str, year: Optional[int]) -> str:
    return f"{name} ({year})" if year else name


def format_episode_id(raw: str) -> str:
    """Render a raw episode marker the way Plex expects.

    >>> format_episode_id("s01e02")
    'S01E02'
    >>> format_episode_id("S00E10E11E12")
    'S00E10-E12'
    """
    parts = raw.lower().replace("-", "").split("e")
    if len(parts) > 2:
        return f"{parts[0]}e{parts[1]}-e{parts[-1]}".upper()
    return raw.upper()


def season_folder(season: int) -> str:
    """Return the folder name for *season*."""
    return "Specials" if season == 0 else f"Season {season}"


class PlexRuleSet(RuleSet):
    """Rule set for Plex Media Server naming conventions."""

    def __init__(self: Self) -> None:
        """Initialize the Plex rule set."""
        super().__init__("plex")

    def supported_media_types(self: Self) -> List[MediaType]:
        """Plex libraries hold both movies and TV shows."""
        return [MediaType.MOVIE, MediaType.EPISODE]

    def target_path(self: Self, media: MediaEntity) -> PurePosixPath:
        """Return the library-relative path for *media*."""
        match media:
            case Movie():
                return self._movie_path(media)
            case Episode():
                return self._episode_path(media)
        raise TypeError(f"unsupported media: {type(media).__name__}")

    def _movie_path(self: Self, movie: Movie) -> PurePosixPath:
        folder = _with_year(_component(movie.title), movie.year)
        return PurePosixPath("movies", folder, movie.source.name)

    def _episode_path(self: Self, episode: Episode) -> PurePosixPath:
        series = _with_year(_component(episode.series) or UNKNOWN_SHOW, episode.year)
        name = f"{series} - {format_episode_id(episode.episode_id)}"
        if episode.title:
            name = f"{name} - {_component(episode.title)}"
        return PurePosixPath(
            "tv", series, season_folder(episode.season), f"{name}{episode.source.suffix}"
        )


def plan_link(media: MediaEntity, destination: Path) -> Link:
    """Plan the Plex-style link for *media* under *destination*."""
    return PlexRuleSet().plan(media, destination)
