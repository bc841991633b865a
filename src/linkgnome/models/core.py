"""Core domain models for linkgnome.

This module defines the media entities produced by the filename classifier,
enriched by the metadata resolver and consumed by the link planner.
- Movie and Episode form a closed, tagged variant (``MediaEntity``) so callers
  dispatch with ``match`` instead of probing attributes.
- The source path of an entity is frozen once constructed; titles, years, ids
  and countries may be rewritten by the resolver.
- Link pairs a source file with its absolute target inside the destination
  root.

Design:
- MediaType and LinkStatus enums mirror the classification and link outcomes
  reported by the CLI.
- Entities never persist beyond a single pipeline run.
"""

from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Earliest year a film release is considered plausible (Roundhay Garden Scene).
MIN_MOVIE_YEAR = 1888

# Numeric sentinel for season/episode values that failed to parse.
INVALID_NUMBER = -1


class MediaType(str, Enum):
    """Type of media entity recognised from a path."""

    MOVIE = "movie"
    EPISODE = "episode"


class LinkStatus(str, Enum):
    """Outcome of creating a single link.

    Used by the CLI to summarise a run without treating per-link problems as
    fatal.
    """

    CREATED = "created"
    EXISTS = "exists"
    FAILED = "failed"
    PLANNED = "planned"


class _Media(BaseModel):
    """Fields and capabilities shared by movies and episodes."""

    model_config = ConfigDict(validate_assignment=True)

    source: Path = Field(frozen=True)
    """Path of the file the entity was classified from."""

    tmdb_id: Optional[int] = None
    """TMDB id of the movie or series, set after resolution."""

    countries: List[str] = Field(default_factory=list)
    """Origin country codes reported by the provider."""

    @property
    def source_path(self) -> str:
        """Return the source path as a string."""
        return str(self.source)

    def target_relative_path(self) -> PurePosixPath:
        """Return the library path of this entity relative to the destination."""
        from linkgnome.rules.plex import PlexRuleSet

        return PlexRuleSet().target_path(self)  # type: ignore[arg-type]


class Movie(_Media):
    """A feature film recognised from a path."""

    kind: Literal[MediaType.MOVIE] = MediaType.MOVIE

    title: str = ""
    """Movie title (parsed, then canonical after resolution)."""

    year: Optional[int] = None
    """Release year; ``None`` when no plausible year is known."""

    @field_validator("year")
    @classmethod
    def _plausible_year(cls, value: Optional[int]) -> Optional[int]:
        # Years before the first film are treated as unset.
        if value is not None and value < MIN_MOVIE_YEAR:
            return None
        return value


class Episode(_Media):
    """A TV episode (or multi-episode file) recognised from a path."""

    kind: Literal[MediaType.EPISODE] = MediaType.EPISODE

    series: str = ""
    """Series title (parsed, then canonical after resolution)."""

    title: Optional[str] = None
    """Episode title, if present in the file name or resolved."""

    episode_id: str
    """Raw episode marker as it appeared in the file name, e.g. ``s01e02e03``."""

    season: int = INVALID_NUMBER
    """Season number; 0 holds specials."""

    episode: int = INVALID_NUMBER
    """First episode number of the marker."""

    episodes: List[int] = Field(default_factory=list)
    """Every episode number in the marker, in order."""

    year: Optional[int] = None
    """Series year, when the file name carries one."""

    @property
    def is_special(self) -> bool:
        """Return True when the episode belongs to the specials season."""
        return self.season == 0


MediaEntity = Annotated[Union[Movie, Episode], Field(discriminator="kind")]


class Link(BaseModel):
    """A hardlink to create from ``source`` to ``target``."""

    model_config = ConfigDict(frozen=True)

    source: Path
    target: Path
