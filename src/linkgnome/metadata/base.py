"""Base abstraction for metadata catalog clients.

Defines the three catalog operations the resolver depends on and the errors
every client reports. Clients surface failures as exceptions; deciding what
to do about them is the resolver's job.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from linkgnome.metadata.models import EpisodeDetails, MovieSearchResult, TVSearchResult


class CatalogError(Exception):
    """Base class for every catalog lookup failure."""


class TransportError(CatalogError):
    """Raised when the request could not be completed (network or HTTP error)."""


class RateLimitError(CatalogError):
    """Raised when the provider rejects a request with HTTP 429."""


class NotFoundError(CatalogError):
    """Raised when a query returns no results."""


class MalformedResponseError(CatalogError):
    """Raised when a response body cannot be decoded into the expected shape."""


class CatalogClient(ABC):
    """Abstract base class for catalog clients.

    Used for dependency injection so the resolver can be tested without a
    network.
    """

    @abstractmethod
    async def search_movies(
        self, title: str, year: Optional[int] = None
    ) -> List[MovieSearchResult]:
        """Search movies by free-text title and optional release year.

        Raises:
            NotFoundError: If nothing matches.
            CatalogError: For transport, rate-limit or decoding failures.
        """
        raise NotImplementedError

    @abstractmethod
    async def search_tv(
        self, title: str, year: Optional[int] = None
    ) -> List[TVSearchResult]:
        """Search series by free-text title and optional first-air year.

        Raises:
            NotFoundError: If nothing matches.
            CatalogError: For transport, rate-limit or decoding failures.
        """
        raise NotImplementedError

    @abstractmethod
    async def episode_details(
        self, series_id: int, season: int, episode: int
    ) -> EpisodeDetails:
        """Fetch details of one episode of a series.

        Raises:
            NotFoundError: If the episode does not exist.
            CatalogError: For transport, rate-limit or decoding failures.
        """
        raise NotImplementedError
