"""TMDB metadata provider client.

Implements the CatalogClient interface for The Movie Database (TMDB) API.
Every request first takes a token from the shared rate limiter. Failures are
mapped onto the CatalogError hierarchy; nothing is retried here.
"""

import logging
from types import TracebackType
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from linkgnome.metadata.base import (
    CatalogClient,
    MalformedResponseError,
    NotFoundError,
    RateLimitError,
    TransportError,
)
from linkgnome.metadata.models import (
    EpisodeDetails,
    MovieSearchPage,
    MovieSearchResult,
    TVSearchPage,
    TVSearchResult,
)
from linkgnome.metadata.ratelimit import TokenBucket
from linkgnome.metadata.settings import MissingAPIKeyError

logger = logging.getLogger(__name__)

TMDB_BASE_URL = "https://api.themoviedb.org/3"
HTTP_NOT_FOUND = 404
HTTP_TOO_MANY_REQUESTS = 429
DEFAULT_TIMEOUT = 10.0

M = TypeVar("M", bound=BaseModel)


class TMDBClient(CatalogClient):
    """Client for The Movie Database (TMDB) API.

    Args:
        api_key: TMDB v3 API key, sent as the ``api_key`` query parameter.
        limiter: Token bucket shared by every request of the run.
        http_client: Optional preconfigured httpx client. When omitted the
            client creates (and closes) its own.
        base_url: API root, overridable for tests.
        pages: Number of result pages to fetch per search.
    """

    def __init__(
        self,
        api_key: str,
        *,
        limiter: TokenBucket,
        http_client: Optional[httpx.AsyncClient] = None,
        base_url: str = TMDB_BASE_URL,
        pages: int = 1,
    ) -> None:
        if not api_key:
            raise MissingAPIKeyError()
        self.api_key = api_key
        self.limiter = limiter
        self.base_url = base_url.rstrip("/")
        self.pages = max(1, pages)
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=DEFAULT_TIMEOUT)

    async def __aenter__(self) -> "TMDBClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def _get(self, path: str, params: Dict[str, Any], model: Type[M]) -> M:
        await self.limiter.acquire()
        url = f"{self.base_url}{path}"
        query = {"api_key": self.api_key, **params}
        logger.debug("TMDB GET %s %s", path, params)
        try:
            resp = await self._client.get(url, params=query)
        except httpx.HTTPError as e:
            raise TransportError(f"request to {path} failed: {e}") from e

        if resp.status_code == HTTP_TOO_MANY_REQUESTS:
            raise RateLimitError(f"TMDB rate limit exceeded on {path}")
        if resp.status_code == HTTP_NOT_FOUND:
            raise NotFoundError(f"TMDB returned 404 for {path}")
        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"TMDB returned HTTP {resp.status_code} for {path}"
            ) from e

        try:
            return model.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise MalformedResponseError(f"unexpected TMDB response for {path}: {e}") from e

    async def search_movies(
        self, title: str, year: Optional[int] = None
    ) -> List[MovieSearchResult]:
        """Search movies by title and optional release year."""
        params: Dict[str, Any] = {"query": title, "include_adult": "true"}
        if year:
            params["year"] = year
        results: List[MovieSearchResult] = []
        page = 1
        while True:
            data = await self._get(
                "/search/movie", {**params, "page": page}, MovieSearchPage
            )
            results.extend(data.results)
            if page >= min(self.pages, data.total_pages):
                break
            page += 1
        if not results:
            raise NotFoundError(f"no movie found for {title!r}")
        return results

    async def search_tv(
        self, title: str, year: Optional[int] = None
    ) -> List[TVSearchResult]:
        """Search series by title and optional first-air year."""
        params: Dict[str, Any] = {"query": title}
        if year:
            params["first_air_date_year"] = year
        results: List[TVSearchResult] = []
        page = 1
        while True:
            data = await self._get("/search/tv", {**params, "page": page}, TVSearchPage)
            results.extend(data.results)
            if page >= min(self.pages, data.total_pages):
                break
            page += 1
        if not results:
            raise NotFoundError(f"no series found for {title!r}")
        return results

    async def episode_details(
        self, series_id: int, season: int, episode: int
    ) -> EpisodeDetails:
        """Fetch the details of one episode."""
        return await self._get(
            f"/tv/{series_id}/season/{season}/episode/{episode}", {}, EpisodeDetails
        )
