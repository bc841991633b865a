"""Metadata resolution for classified media.

The resolver looks a Movie or Episode up in a catalog and rewrites its title,
id and countries with the canonical values. Resolution is best-effort: any
catalog failure is logged and the entity keeps what the classifier parsed.

Design:
- Lookups go through a LookupCache keyed by the raw parsed title, so a title
  shared by many files (every episode of a series) costs one search.
- Movie searches are narrowed by dropping trailing words when a query finds
  nothing.
- When several candidates come back they are filtered by year, then the one
  with the smallest edit distance to the parsed title wins. Several
  candidates with none in the year window count as not found.
"""

import logging
from typing import Callable, List, Optional, Sequence, TypeVar

from linkgnome.core.matcher import best_match_index, filter_by_year, trailing_word_variants
from linkgnome.metadata.base import CatalogClient, CatalogError, NotFoundError
from linkgnome.metadata.cache import LookupCache, LookupResult
from linkgnome.metadata.models import MovieSearchResult, TVSearchResult
from linkgnome.models.core import Episode, MediaEntity, MediaType, Movie

logger = logging.getLogger(__name__)

C = TypeVar("C", MovieSearchResult, TVSearchResult)


class MetadataResolver:
    """Enrich media entities from a catalog.

    Args:
        client: Catalog to query.
        cache: Cache shared by every resolution of the run.
        variants: Produces the queries tried for a movie title, most specific
            first.
        year_tolerance: How many years a candidate's release may trail the
            parsed year.
    """

    def __init__(
        self,
        client: CatalogClient,
        cache: LookupCache,
        *,
        variants: Callable[[str], List[str]] = trailing_word_variants,
        year_tolerance: int = 1,
    ) -> None:
        self.client = client
        self.cache = cache
        self.variants = variants
        self.year_tolerance = year_tolerance

    async def resolve(self, entity: MediaEntity) -> MediaEntity:
        """Resolve *entity* in place and return it.

        Never raises for catalog failures; they are logged at WARNING and the
        entity is returned with its parsed values.
        """
        try:
            match entity:
                case Movie():
                    await self._resolve_movie(entity)
                case Episode():
                    await self._resolve_episode(entity)
        except CatalogError as e:
            logger.warning("could not resolve %s: %s", entity.source_path, e)
        return entity

    def _select(self, query: str, year: Optional[int], candidates: Sequence[C]) -> C:
        """Pick one candidate for *query*.

        Raises:
            NotFoundError: If several candidates came back and none was
                released within the year window.
        """
        if len(candidates) == 1:
            return candidates[0]
        narrowed = filter_by_year(candidates, year, self.year_tolerance)
        if not narrowed:
            raise NotFoundError(
                f"{len(candidates)} candidates for {query!r}, none released around {year}"
            )
        if len(narrowed) == 1:
            return narrowed[0]
        names = [c.title if isinstance(c, MovieSearchResult) else c.name for c in narrowed]
        return narrowed[best_match_index(query, names)]

    async def _resolve_movie(self, movie: Movie) -> None:
        key = (MediaType.MOVIE, movie.title)
        result = await self.cache.get(key)
        if result is None:
            result = await self.cache.put(key, await self._lookup_movie(movie))
        else:
            logger.debug("cache hit for movie %r", movie.title)

        movie.title = result.title
        movie.tmdb_id = result.tmdb_id
        movie.countries = list(result.countries)
        if movie.year is None:
            movie.year = result.year

    async def _lookup_movie(self, movie: Movie) -> LookupResult:
        for query in self.variants(movie.title):
            try:
                candidates = await self.client.search_movies(query)
            except NotFoundError:
                logger.debug("no movie results for %r, narrowing", query)
                continue
            chosen = self._select(movie.title, movie.year, candidates)
            logger.debug("resolved movie %r to %r (%d)", movie.title, chosen.title, chosen.id)
            return LookupResult(title=chosen.title, tmdb_id=chosen.id, year=chosen.year)
        raise NotFoundError(f"no movie found for {movie.title!r}")

    async def _resolve_episode(self, episode: Episode) -> None:
        if not episode.series:
            logger.debug("no series title in %s, skipping lookup", episode.source_path)
            return

        key = (MediaType.EPISODE, episode.series)
        series = await self.cache.get(key)
        if series is None:
            candidates = await self.client.search_tv(episode.series, episode.year)
            chosen = self._select(episode.series, episode.year, candidates)
            logger.debug("resolved series %r to %r (%d)", episode.series, chosen.name, chosen.id)
            series = await self.cache.put(
                key,
                LookupResult(
                    title=chosen.name,
                    tmdb_id=chosen.id,
                    countries=chosen.origin_country,
                    year=chosen.year,
                ),
            )
        else:
            logger.debug("cache hit for series %r", episode.series)

        episode.series = series.title
        episode.tmdb_id = series.tmdb_id
        episode.countries = list(series.countries)

        if episode.season < 0 or episode.episode < 1:
            return
        try:
            details = await self.client.episode_details(
                series.tmdb_id, episode.season, episode.episode
            )
        except CatalogError as e:
            logger.warning(
                "could not fetch episode %s of %r: %s", episode.episode_id, series.title, e
            )
            return
        if details.name:
            episode.title = details.name
