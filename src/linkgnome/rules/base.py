"""Base abstract class for library layout rule sets.

This module defines the interface every media-server layout implements.
- RuleSet: maps a classified (and possibly resolved) entity to a path relative
  to the library root, and pairs it with its source as a Link.

Design:
- Target paths are PurePosixPath so planning never touches the filesystem and
  renders identically on every platform.
- Platform-specific rule sets inherit from RuleSet and implement its abstract
  methods; the pipeline only ever calls ``plan``.
"""

from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath
from typing import List, Self

from linkgnome.models.core import Link, MediaEntity, MediaType


class RuleSet(ABC):
    """Abstract base class for library layout rule sets."""

    def __init__(self: Self, platform_name: str) -> None:
        """Initialize a rule set.

        Args:
            platform_name: The name of the platform this rule set is for.
        """
        self.platform_name = platform_name

    @abstractmethod
    def target_path(self: Self, media: MediaEntity) -> PurePosixPath:
        """Return the path of *media* relative to the library root."""

    @abstractmethod
    def supported_media_types(self: Self) -> List[MediaType]:
        """Return the media types this rule set can place."""

    def supports_media_type(self: Self, media_type: MediaType) -> bool:
        """Return True if this rule set can place *media_type*."""
        return media_type in self.supported_media_types()

    def plan(self: Self, media: MediaEntity, destination: Path) -> Link:
        """Pair *media* with its target under *destination*.

        Pure path arithmetic; nothing is created.

        Raises:
            ValueError: If this rule set cannot place the kind of *media*.
        """
        if not self.supports_media_type(media.kind):
            raise ValueError(f"{self.platform_name} cannot place {media.kind.value} files")
        return Link(source=media.source, target=destination / self.target_path(media))
