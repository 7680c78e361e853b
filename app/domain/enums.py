"""Domain enumerations for the user service."""

from enum import Enum


class DataSource(str, Enum):
    """Provenance of a read result: served from the cache or the persistent store."""

    CACHE = "cache"
    DATABASE = "database"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid provenance values as strings."""
        return [source.value for source in cls]


class LoginOutcome(str, Enum):
    """Outcome label for the login counter."""

    SUCCESS = "success"
    FAILURE = "failure"
