"""Domain models for the linkgnome application."""

from linkgnome.models.core import (
    Episode,
    Link,
    LinkStatus,
    MediaEntity,
    MediaType,
    Movie,
)
from linkgnome.models.options import LinkOptions

__all__ = [
    "Episode",
    "Link",
    "LinkOptions",
    "LinkStatus",
    "MediaEntity",
    "MediaType",
    "Movie",
]
