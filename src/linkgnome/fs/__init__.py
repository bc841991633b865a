"""Filesystem operations for linkgnome."""

from linkgnome.fs.operations import create_link

__all__ = ["create_link"]
