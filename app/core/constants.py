"""Core constants: cache key prefixes and shared literal values."""

# Cache key prefixes (users:all, user:<id>, users:page:<page>:<limit>)
CACHE_PREFIX_USERS = "users"
CACHE_PREFIX_USER = "user"
CACHE_USERS_ALL = "all"
CACHE_USERS_PAGE = "page"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Pagination bounds for GET /api/users
DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100

# Retry-After (seconds) sent with 503 when the store pool is exhausted
STORE_RETRY_AFTER_SECONDS = 1

# User ids are BIGINT in the users table; larger path ids are rejected as invalid
MAX_USER_ID = 2**63 - 1
