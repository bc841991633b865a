"""Data models for TMDB responses.

Only the fields the resolver relies on are modelled; unknown fields are
ignored. Responses that do not fit these models are reported as malformed by
the client.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


def _blank_date(value: object) -> object:
    # TMDB sends "" for unknown dates.
    if value == "":
        return None
    return value


class MovieSearchResult(BaseModel):
    """A single movie returned by ``/search/movie``."""

    id: int
    title: str
    original_title: Optional[str] = None
    original_language: Optional[str] = None
    overview: Optional[str] = None
    release_date: Optional[date] = None
    popularity: Optional[float] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None

    _blank_release_date = field_validator("release_date", mode="before")(_blank_date)

    @property
    def year(self) -> Optional[int]:
        """Release year, if TMDB knows the release date."""
        return self.release_date.year if self.release_date else None


class TVSearchResult(BaseModel):
    """A single series returned by ``/search/tv``."""

    id: int
    name: str
    original_name: Optional[str] = None
    origin_country: List[str] = Field(default_factory=list)
    overview: Optional[str] = None
    first_air_date: Optional[date] = None
    popularity: Optional[float] = None

    _blank_first_air_date = field_validator("first_air_date", mode="before")(
        _blank_date
    )

    @property
    def year(self) -> Optional[int]:
        """Year the series first aired, if known."""
        return self.first_air_date.year if self.first_air_date else None


class MovieSearchPage(BaseModel):
    """One page of movie search results."""

    page: int = 1
    total_pages: int = 1
    total_results: int = 0
    results: List[MovieSearchResult] = Field(default_factory=list)


class TVSearchPage(BaseModel):
    """One page of series search results."""

    page: int = 1
    total_pages: int = 1
    total_results: int = 0
    results: List[TVSearchResult] = Field(default_factory=list)


class EpisodeDetails(BaseModel):
    """Details of one episode from ``/tv/{id}/season/{s}/episode/{e}``."""

    id: Optional[int] = None
    name: str = ""
    overview: Optional[str] = None
    air_date: Optional[date] = None
    runtime: Optional[int] = None
    season_number: Optional[int] = None
    episode_number: Optional[int] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None

    _blank_air_date = field_validator("air_date", mode="before")(_blank_date)
