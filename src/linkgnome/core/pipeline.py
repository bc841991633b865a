"""Linking pipeline tying discovery, resolution and planning together.

For every configured source root the pipeline discovers media, drops excluded
media types, resolves the rest against the catalog (when a resolver is
given), applies the media filters and plans a Plex-style link. Links stream
out as soon as they are planned, in no particular order.

A root that cannot be walked is logged and skipped; the other roots are still
processed.
"""

import asyncio
import contextlib
import logging
from typing import AsyncIterator, Optional

from linkgnome.core.filters import (
    MediaTypeFilter,
    build_file_filters,
    build_media_filters,
)
from linkgnome.core.resolver import MetadataResolver
from linkgnome.core.scanner import DiscoveryError, discover
from linkgnome.core.streams import Emitter, merge
from linkgnome.metadata.cache import LookupCache
from linkgnome.metadata.clients.tmdb import TMDBClient
from linkgnome.metadata.ratelimit import TokenBucket
from linkgnome.models.core import Link, MediaEntity
from linkgnome.models.options import LinkOptions
from linkgnome.rules.plex import PlexRuleSet

logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def open_resolver(options: LinkOptions) -> AsyncIterator[Optional[MetadataResolver]]:
    """Build the resolver for one run, or yield None without an API key.

    The rate limiter, cache and HTTP client live exactly as long as the
    context.
    """
    if not options.api_key:
        logger.info("No TMDB API key configured; using titles parsed from file names")
        yield None
        return
    limiter = TokenBucket(options.rate_limit, options.burst)
    async with TMDBClient(options.api_key, limiter=limiter) as client:
        yield MetadataResolver(client, LookupCache())


async def link_media(
    options: LinkOptions,
    *,
    resolver: Optional[MetadataResolver] = None,
    cancel: Optional[asyncio.Event] = None,
) -> AsyncIterator[Link]:
    """Plan links for every media file under the configured sources.

    Args:
        options: Run options.
        resolver: Resolver enriching entities before planning; skipped when None.
        cancel: Once set, discovery stops queueing files. Entities already
            discovered are still resolved and planned.

    Yields:
        Planned links, in no particular order.
    """
    file_filters = build_file_filters(options)
    media_filters = build_media_filters(options)
    type_filter = MediaTypeFilter(
        exclude_movies=options.exclude_movies, exclude_tv=options.exclude_tv
    )
    rules = PlexRuleSet()
    slots = asyncio.Semaphore(options.workers)

    async def finish(media: MediaEntity, out: Emitter[Link]) -> None:
        if resolver is not None:
            async with slots:
                media = await resolver.resolve(media)
        for f in media_filters:
            if f.exclude(media):
                logger.debug("filtered %s (%r)", media.source_path, f)
                return
        await out.emit(rules.plan(media, options.destination))

    async def produce(out: Emitter[Link]) -> None:
        async with asyncio.TaskGroup() as tg:
            for root in options.sources:
                if cancel is not None and cancel.is_set():
                    break
                logger.info("Scanning %s", root)
                try:
                    async for media in discover(
                        root,
                        file_filters,
                        title_case=not options.keep_title_case,
                        workers=options.workers,
                        cancel=cancel,
                    ):
                        if type_filter.exclude(media):
                            logger.debug("skipping %s %s", media.kind.value, media.source_path)
                            continue
                        tg.create_task(finish(media, out))
                except DiscoveryError as e:
                    logger.error("Skipping source %s: %s", root, e)

    async for link in merge(produce):
        yield link
