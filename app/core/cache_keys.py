"""Cache key builders. Single place for key format (DRY).

Keys are derived deterministically from the operation and its parameters:
users:all, user:<id>, users:page:<page>:<limit>.
"""

from app.core.constants import (
    CACHE_KEY_SEP,
    CACHE_PREFIX_USER,
    CACHE_PREFIX_USERS,
    CACHE_USERS_ALL,
    CACHE_USERS_PAGE,
)


def users_all_key() -> str:
    """Cache key for the full user list."""
    return f"{CACHE_PREFIX_USERS}{CACHE_KEY_SEP}{CACHE_USERS_ALL}"


def user_key(user_id: int) -> str:
    """Cache key for a single user by ID."""
    return f"{CACHE_PREFIX_USER}{CACHE_KEY_SEP}{int(user_id)}"


def users_page_key(page: int, limit: int) -> str:
    """Cache key for one page of the user list."""
    return (
        f"{CACHE_PREFIX_USERS}{CACHE_KEY_SEP}{CACHE_USERS_PAGE}"
        f"{CACHE_KEY_SEP}{int(page)}{CACHE_KEY_SEP}{int(limit)}"
    )


def users_page_pattern() -> str:
    """SCAN pattern matching every cached page (invalidated on any write)."""
    return f"{CACHE_PREFIX_USERS}{CACHE_KEY_SEP}{CACHE_USERS_PAGE}{CACHE_KEY_SEP}*"
