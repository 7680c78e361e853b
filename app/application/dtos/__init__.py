"""Application DTOs (data transfer objects) for use cases."""

from app.application.dtos.user import (
    UserCreate,
    UserListResult,
    UserPage,
    UserReadResult,
    UserRecord,
    UserUpdate,
)

__all__ = [
    "UserCreate",
    "UserListResult",
    "UserPage",
    "UserReadResult",
    "UserRecord",
    "UserUpdate",
]
