"""SQL store implementations."""

from app.infrastructure.persistence.repositories.user_repo import SqlUserStore

__all__ = ["SqlUserStore"]
