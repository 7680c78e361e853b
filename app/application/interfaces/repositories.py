"""Store interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
Both the SQL store and the in-memory store satisfy IUserStore, so services are
written once against this contract.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.user import UserCreate, UserPage, UserRecord, UserUpdate


class IUserStore(Protocol):
    """Protocol for user stores (SQL or in-memory)."""

    async def get_by_id(self, user_id: int) -> UserRecord | None:
        """Return the user with this id, or None."""

    async def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user owning this email (with hashed_password), or None."""

    async def list_all(self) -> list[UserRecord]:
        """Return every user in insertion order."""

    async def get_page(self, page: int, limit: int) -> UserPage:
        """Return slice [(page-1)*limit, page*limit) of insertion-ordered users plus total."""

    async def create(self, data: UserCreate) -> UserRecord:
        """Insert and return the new user. Raises UserAlreadyExistsException on duplicate email."""

    async def update(self, user_id: int, changes: UserUpdate) -> UserRecord | None:
        """Overwrite the provided fields and refresh updated_at; None if the id is unknown.

        Raises DuplicateEmailException when the new email belongs to another user.
        """

    async def delete(self, user_id: int) -> UserRecord | None:
        """Remove the user and return the deleted snapshot; None if the id is unknown."""

    async def ping(self) -> bool:
        """Return True if the store is reachable."""
