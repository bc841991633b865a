"""Metadata lookup against remote catalogs."""

from linkgnome.metadata.base import (
    CatalogClient,
    CatalogError,
    MalformedResponseError,
    NotFoundError,
    RateLimitError,
    TransportError,
)
from linkgnome.metadata.cache import LookupCache, LookupResult
from linkgnome.metadata.ratelimit import TokenBucket

__all__ = [
    "CatalogClient",
    "CatalogError",
    "LookupCache",
    "LookupResult",
    "MalformedResponseError",
    "NotFoundError",
    "RateLimitError",
    "TokenBucket",
    "TransportError",
]
