"""In-memory store implementations."""

from app.infrastructure.memory.user_store import InMemoryUserStore

__all__ = ["InMemoryUserStore"]
