"""In-memory user store: IUserStore over an insertion-ordered dict.

Non-persistent alternative to the SQL store; wired without the cache
layer. A single asyncio.Lock serializes every access (single writer at a
time), and records are frozen dataclasses, so concurrently handled
requests never share mutable state.

Ids come from the wall clock in milliseconds. Two creates in the same
millisecond would collide, so the generator never returns an id lower
than or equal to the last one issued (max(now_ms, last_id + 1)).
"""

from __future__ import annotations

import asyncio
from dataclasses import replace

from app.application.dtos.user import UserCreate, UserPage, UserRecord, UserUpdate
from app.domain.exceptions import DuplicateEmailException, UserAlreadyExistsException
from app.shared.utils.datetime import epoch_millis, utc_now


class InMemoryUserStore:
    """User store held in process memory. Lost on restart."""

    def __init__(self) -> None:
        self._users: dict[int, UserRecord] = {}
        self._lock = asyncio.Lock()
        self._last_id = 0

    def _next_id(self) -> int:
        """Clock-derived id, bumped past the last issued id. Caller holds the lock."""
        self._last_id = max(epoch_millis(), self._last_id + 1)
        return self._last_id

    def _email_owner(self, email: str) -> UserRecord | None:
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def get_by_id(self, user_id: int) -> UserRecord | None:
        async with self._lock:
            return self._users.get(user_id)

    async def get_by_email(self, email: str) -> UserRecord | None:
        async with self._lock:
            return self._email_owner(email)

    async def list_all(self) -> list[UserRecord]:
        async with self._lock:
            return list(self._users.values())

    async def get_page(self, page: int, limit: int) -> UserPage:
        async with self._lock:
            users = list(self._users.values())
        start = (page - 1) * limit
        return UserPage(users=users[start : start + limit], page=page, limit=limit, total=len(users))

    async def create(self, data: UserCreate) -> UserRecord:
        async with self._lock:
            if self._email_owner(data.email) is not None:
                raise UserAlreadyExistsException(data.email)
            now = utc_now()
            user = UserRecord(
                id=self._next_id(),
                name=data.name,
                email=data.email,
                age=data.age,
                created_at=now,
                updated_at=now,
                hashed_password=data.hashed_password,
            )
            self._users[user.id] = user
            return user

    async def update(self, user_id: int, changes: UserUpdate) -> UserRecord | None:
        async with self._lock:
            existing = self._users.get(user_id)
            if existing is None:
                return None
            values = changes.changes()
            if "email" in values:
                owner = self._email_owner(values["email"])
                if owner is not None and owner.id != user_id:
                    raise DuplicateEmailException()
            updated = replace(existing, **values, updated_at=utc_now())
            self._users[user_id] = updated
            return updated

    async def delete(self, user_id: int) -> UserRecord | None:
        async with self._lock:
            return self._users.pop(user_id, None)

    async def ping(self) -> bool:
        return True

    async def count(self) -> int:
        async with self._lock:
            return len(self._users)
