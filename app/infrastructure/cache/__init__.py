"""Cache: Redis service and cache key utilities.

Used by the cache-aside user service. Key format is in app.core.cache_keys (DRY).
"""

from app.core.cache_keys import (
    user_key,
    users_all_key,
    users_page_key,
    users_page_pattern,
)
from app.infrastructure.cache.redis_cache import CacheService

__all__ = [
    "CacheService",
    "user_key",
    "users_all_key",
    "users_page_key",
    "users_page_pattern",
]
