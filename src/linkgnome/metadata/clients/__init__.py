"""Client implementations for metadata providers."""

from linkgnome.metadata.clients.tmdb import TMDBClient

__all__ = ["TMDBClient"]
