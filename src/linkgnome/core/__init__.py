"""Core functionality for linkgnome.

This package exposes the discovery and classification entry points used by
the linking pipeline and the CLI.
- classify: Turn a file path into a Movie or Episode.
- discover: Walk a source root and stream classified media.
- link_media: Discover, resolve and plan links for a whole run.
"""

from linkgnome.core.classifier import ClassificationError, classify
from linkgnome.core.pipeline import link_media, open_resolver
from linkgnome.core.scanner import DiscoveryError, discover

__all__ = [
    "ClassificationError",
    "DiscoveryError",
    "classify",
    "discover",
    "link_media",
    "open_resolver",
]
