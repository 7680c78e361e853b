"""Wire and view shapes for the API client.

ApiUser mirrors the JSON the service returns (integer id, snake_case
timestamps). ClientUser is what a UI consumes: string id and camelCase
keys in as_view().
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ApiUser:
    id: int
    name: str
    email: str
    created_at: str
    updated_at: str
    age: int | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> ApiUser:
        """Build from a response `data` object. Raises KeyError/TypeError/ValueError on bad shape."""
        return cls(
            id=int(data["id"]),
            name=str(data["name"]),
            email=str(data["email"]),
            created_at=str(data["created_at"]),
            updated_at=str(data["updated_at"]),
            age=data.get("age"),
        )


@dataclass(frozen=True)
class ClientUser:
    id: str
    name: str
    email: str
    created_at: str
    updated_at: str
    age: int | None = None

    @classmethod
    def from_api(cls, user: ApiUser) -> ClientUser:
        return cls(
            id=str(user.id),
            name=user.name,
            email=user.email,
            created_at=user.created_at,
            updated_at=user.updated_at,
            age=user.age,
        )

    def as_view(self) -> dict[str, Any]:
        """camelCase dict; age omitted when unknown."""
        view: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
        if self.age is not None:
            view["age"] = self.age
        return view
