"""Redis-based cache service for the user read path.

Provides async Redis caching with TTL support over a bounded
BlockingConnectionPool: acquiring a connection waits at most
redis_pool_timeout seconds. Every failure (connection, timeout, pool
exhaustion, bad JSON) is logged and reported as a miss or no-op; the
cache is an optimization, never a correctness dependency.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import redis.asyncio as redis

from app.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


class CacheService:
    """Async Redis cache service with TTL support.

    Call connect() at startup and disconnect() at shutdown. When Redis is
    unreachable at startup the service stays disabled and every call is a
    miss / no-op.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI; treated as connected.
            settings: Optional settings; defaults to get_settings().
        """
        self.redis = redis_client
        self.settings = settings or get_settings()
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Create the bounded pool and ping Redis. Call on app startup."""
        if self.redis is not None:
            return
        pool = redis.BlockingConnectionPool.from_url(
            self.settings.redis_url,
            max_connections=self.settings.redis_max_connections,
            timeout=self.settings.redis_pool_timeout,
            socket_connect_timeout=self.settings.redis_socket_timeout,
            socket_timeout=self.settings.redis_socket_timeout,
            decode_responses=True,
        )
        client = redis.Redis.from_pool(pool)
        try:
            await client.ping()
        except redis.RedisError as e:
            logger.warning("Redis connection failed: %s. Cache disabled.", e)
            await client.aclose()
            self._connected = False
            return
        self.redis = client
        self._connected = True
        logger.info("Redis cache connected (max_connections=%s)", self.settings.redis_max_connections)

    async def disconnect(self) -> None:
        """Close Redis connection pool. Call on app shutdown."""
        if self.redis is not None:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def ping(self) -> bool:
        """Return True if Redis answers PING."""
        if not self.is_available():
            return False
        try:
            return bool(await self.redis.ping())
        except redis.RedisError as e:
            logger.warning("Redis ping failed: %s", e)
            return False

    async def get(self, key: str) -> str | None:
        """Return the raw cached string or None if missing/unavailable."""
        if not self.is_available():
            return None
        try:
            value = await self.redis.get(key)
        except redis.RedisError as e:
            logger.warning("Cache get error for key %s: %s", key, e)
            return None
        logger.debug("Cache %s: %s", "HIT" if value is not None else "MISS", key)
        return value

    async def set(self, key: str, value: str, ttl: int | None = None) -> bool:
        """Store a raw string; with a positive ttl the key expires after ttl seconds."""
        if not self.is_available():
            return False
        try:
            if ttl is not None and ttl > 0:
                await self.redis.setex(key, ttl, value)
            else:
                await self.redis.set(key, value)
        except redis.RedisError as e:
            logger.warning("Cache set error for key %s: %s", key, e)
            return False
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
        return True

    async def get_json(self, key: str) -> Any | None:
        """Return the JSON-decoded value; undecodable entries count as a miss."""
        raw = await self.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, TypeError):
            logger.warning("Cache entry for key %s is not valid JSON; treating as miss", key)
            return None

    async def set_json(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Serialize value as JSON and store it with ttl."""
        try:
            serialized = json.dumps(value)
        except (TypeError, ValueError):
            logger.exception("Cache value for key %s is not JSON-serializable", key)
            return False
        return await self.set(key, serialized, ttl)

    async def delete(self, key: str) -> bool:
        """Remove key from cache. Returns True if the command succeeded."""
        if not self.is_available():
            return False
        try:
            await self.redis.delete(key)
        except redis.RedisError as e:
            logger.warning("Cache delete error for key %s: %s", key, e)
            return False
        logger.debug("Cache DELETE: %s", key)
        return True

    async def delete_pattern(self, pattern: str) -> int:
        """Delete all keys matching pattern using SCAN + batched UNLINK (non-blocking).

        Args:
            pattern: Redis SCAN match pattern (e.g. users:page:*).

        Returns:
            Number of keys deleted (0 on failure).
        """
        if not self.is_available():
            return 0
        chunk_size = 500
        deleted = 0
        try:
            chunk: list[str] = []
            async for key in self.redis.scan_iter(match=pattern):
                chunk.append(key)
                if len(chunk) >= chunk_size:
                    deleted += int(await self.redis.unlink(*chunk) or 0)
                    chunk = []
            if chunk:
                deleted += int(await self.redis.unlink(*chunk) or 0)
        except redis.RedisError as e:
            logger.warning("Cache delete_pattern error for %s: %s", pattern, e)
            return deleted
        if deleted > 0:
            logger.debug("Cache INVALIDATE: %s (%s keys)", pattern, deleted)
        return deleted
