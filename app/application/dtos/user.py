"""DTOs for user use cases (no dependency on ORM or HTTP)."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from app.domain.enums import DataSource
from app.shared.utils.datetime import ensure_utc


@dataclass(frozen=True)
class UserRecord:
    """User read-model returned by every store. hashed_password never leaves the service."""

    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime
    age: int | None = None
    hashed_password: str | None = field(default=None, repr=False, compare=False)

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe snapshot (ISO-8601 timestamps, no password). Used for cache and responses."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "age": self.age,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserRecord:
        """Rebuild from to_dict() output. Raises KeyError/TypeError/ValueError on malformed data."""
        age = data.get("age")
        return cls(
            id=int(data["id"]),
            name=str(data["name"]),
            email=str(data["email"]),
            age=int(age) if age is not None else None,
            created_at=ensure_utc(datetime.fromisoformat(data["created_at"])),
            updated_at=ensure_utc(datetime.fromisoformat(data["updated_at"])),
        )


@dataclass(frozen=True)
class UserCreate:
    """Fields for inserting a user. hashed_password is set only by signup."""

    name: str
    email: str
    age: int | None = None
    hashed_password: str | None = None


@dataclass(frozen=True)
class UserUpdate:
    """Partial update: None means "leave unchanged"."""

    name: str | None = None
    email: str | None = None
    age: int | None = None

    def changes(self) -> dict[str, Any]:
        """Return only the fields that were provided."""
        return {
            key: value
            for key, value in (("name", self.name), ("email", self.email), ("age", self.age))
            if value is not None
        }


@dataclass(frozen=True)
class UserPage:
    """One page of insertion-ordered users."""

    users: list[UserRecord]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    def pagination(self) -> dict[str, int]:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "totalPages": self.total_pages,
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "users": [u.to_dict() for u in self.users],
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserPage:
        return cls(
            users=[UserRecord.from_dict(u) for u in data["users"]],
            page=int(data["page"]),
            limit=int(data["limit"]),
            total=int(data["total"]),
        )


@dataclass(frozen=True)
class UserReadResult:
    """Single user plus provenance tag."""

    user: UserRecord
    source: DataSource


@dataclass(frozen=True)
class UserListResult:
    """User list plus provenance tag; page is set when the caller asked for pagination."""

    users: list[UserRecord]
    source: DataSource
    page: UserPage | None = None
