"""SQLAlchemy ORM models."""

from app.infrastructure.persistence.models.user import User

__all__ = ["User"]
