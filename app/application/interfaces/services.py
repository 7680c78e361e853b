"""Service interfaces (ports) for the application layer (DIP).

No runtime imports from app.infrastructure.
"""

from __future__ import annotations

from typing import Any, Protocol


class ICacheService(Protocol):
    """Cache protocol used by the cache-aside read path.

    Implementations must never raise: failures are reported as a miss
    (None) or as False / 0 for writes.
    """

    def is_available(self) -> bool:
        """Return True if cache is connected."""

    async def get_json(self, key: str) -> Any:
        """Return the JSON-decoded value or None on miss/failure."""

    async def set_json(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store value as JSON with TTL. Returns True on success."""

    async def delete(self, key: str) -> bool:
        """Delete key. Returns True on success."""

    async def delete_pattern(self, pattern: str) -> int:
        """Delete keys matching pattern. Returns count deleted."""


class IPasswordHasher(Protocol):
    """Password hashing port (bcrypt in infrastructure)."""

    def hash_password(self, password: str) -> str:
        """Return a salted hash of password."""

    def verify_password(self, password: str, hashed: str) -> bool:
        """Return True if password matches hashed."""


class IMetricsRecorder(Protocol):
    """Business counters reported by services."""

    def record_registration(self) -> None:
        """Count one successful signup."""

    def record_login(self, success: bool) -> None:
        """Count one login attempt by outcome."""

    def record_cache_lookup(self, key_type: str, hit: bool) -> None:
        """Count one cache lookup by key type and result."""
