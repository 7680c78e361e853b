"""User API schemas.

Request bodies accept missing fields so the service validation step can
answer with a 400 envelope naming them; wrong JSON types still fail
request validation (also 400).
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.application.dtos.user import UserRecord, UserUpdate


class UserCreateRequest(BaseModel):
    """Request body for POST /api/users."""

    name: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    age: int | None = None


class UserUpdateRequest(BaseModel):
    """Request body for PUT (name and email required) and PATCH (any subset)."""

    name: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    age: int | None = None

    def to_update(self) -> UserUpdate:
        return UserUpdate(name=self.name, email=self.email, age=self.age)


class UserResponse(BaseModel):
    """User response (no password)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    age: int | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, user: UserRecord) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            age=user.age,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
