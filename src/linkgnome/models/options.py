"""Run options consumed by the linking pipeline.

This module defines the configuration the core needs for one run. The CLI and
configuration layer build a LinkOptions; everything below it only reads it.
"""

from datetime import datetime
from pathlib import Path
from typing import List, Optional, Set

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_EXTENSIONS = {"avi", "mkv", "mp4"}

# Sustained TMDB requests per second and burst size.
DEFAULT_RATE_LIMIT = 40.0
DEFAULT_BURST = 40

DEFAULT_WORKERS = 8


class LinkOptions(BaseModel):
    """Options for a single linking run."""

    destination: Path
    """Library root every link target is joined under."""

    sources: List[Path] = Field(default_factory=lambda: [Path("./")])
    """Directories to discover media in."""

    extensions: Set[str] = Field(default_factory=lambda: set(DEFAULT_EXTENSIONS))
    """File extensions to consider (case-insensitive, without the dot)."""

    excludes: List[str] = Field(default_factory=list)
    """Regular expressions; matching files and directories are skipped."""

    modified_after: Optional[datetime] = None
    """Only consider files modified after this time."""

    modified_before: Optional[datetime] = None
    """Only consider files modified before this time."""

    api_key: Optional[str] = None
    """TMDB API key. Metadata resolution is skipped when unset."""

    keep_title_case: bool = False
    """Leave parsed titles as written instead of title-casing them."""

    exclude_movies: bool = False
    exclude_tv: bool = False

    exclude_countries: Set[str] = Field(default_factory=set)
    """Origin country codes whose media is skipped after resolution."""

    rate_limit: float = Field(default=DEFAULT_RATE_LIMIT, gt=0)
    burst: int = Field(default=DEFAULT_BURST, ge=1)
    workers: int = Field(default=DEFAULT_WORKERS, ge=1)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @field_validator("extensions")
    @classmethod
    def _normalise_extensions(cls, value: Set[str]) -> Set[str]:
        return {ext.lower().lstrip(".") for ext in value if ext}

    @field_validator("exclude_countries")
    @classmethod
    def _normalise_countries(cls, value: Set[str]) -> Set[str]:
        return {code.lower() for code in value if code}
