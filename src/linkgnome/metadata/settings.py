# WARNING: API key loading from .env is for LOCAL DEVELOPMENT ONLY.
# Never commit your .env file or share your API key.

"""Settings loader for the TMDB credential.

Reads ``TMDB_API_KEY`` from the environment or a ``.env`` file. The key is
optional: without it, files are linked using the titles parsed from their
names.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class MissingAPIKeyError(Exception):
    """Raised when the TMDB API key is required but not configured."""

    def __init__(self, key: str = "TMDB_API_KEY") -> None:
        """Initialize the error with the missing key name."""
        super().__init__(
            f"Missing required API key: {key}\n"
            "Pass --api-key or set it in the environment or a .env file."
        )
        self.key = key


class Settings(BaseSettings):
    """Provider credentials loaded from the environment or ``.env``."""

    TMDB_API_KEY: Optional[str] = None

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
