"""SQL user store: IUserStore over SQLAlchemy asyncio.

Each operation runs in its own session and transaction and commits before
returning, so callers can invalidate cache entries knowing the write is
visible. Driver errors are logged here and re-raised as domain exceptions
with generic messages.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import (
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.dtos.user import UserCreate, UserPage, UserRecord, UserUpdate
from app.domain.exceptions import (
    DuplicateEmailException,
    InfrastructureException,
    StoreUnavailableException,
    UserAlreadyExistsException,
)
from app.infrastructure.persistence.models.user import User
from app.shared.utils.datetime import ensure_utc

logger = logging.getLogger(__name__)


def _user_to_record(u: User) -> UserRecord:
    """Map ORM User to application UserRecord."""
    return UserRecord(
        id=u.id,
        name=u.name,
        email=u.email,
        age=u.age,
        created_at=ensure_utc(u.created_at),
        updated_at=ensure_utc(u.updated_at),
        hashed_password=u.hashed_password,
    )


class SqlUserStore:
    """User store backed by the users table. Ordered by id (insertion order)."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        """Session + transaction; translate pool/driver failures. IntegrityError propagates."""
        try:
            async with self._session_factory() as session, session.begin():
                yield session
        except IntegrityError:
            raise
        except (PoolTimeoutError, OperationalError, InterfaceError, OSError) as e:
            logger.error("User store unavailable during %s: %s", operation, e)
            raise StoreUnavailableException() from e
        except SQLAlchemyError as e:
            logger.exception("User store error during %s", operation)
            raise InfrastructureException() from e

    async def get_by_id(self, user_id: int) -> UserRecord | None:
        async with self._transaction("get_by_id") as session:
            user = await session.get(User, user_id)
            return _user_to_record(user) if user else None

    async def get_by_email(self, email: str) -> UserRecord | None:
        async with self._transaction("get_by_email") as session:
            result = await session.execute(select(User).where(User.email == email))
            user = result.scalar_one_or_none()
            return _user_to_record(user) if user else None

    async def list_all(self) -> list[UserRecord]:
        async with self._transaction("list_all") as session:
            result = await session.execute(select(User).order_by(User.id))
            return [_user_to_record(u) for u in result.scalars().all()]

    async def get_page(self, page: int, limit: int) -> UserPage:
        async with self._transaction("get_page") as session:
            total = await session.scalar(select(func.count()).select_from(User))
            result = await session.execute(
                select(User).order_by(User.id).offset((page - 1) * limit).limit(limit)
            )
            users = [_user_to_record(u) for u in result.scalars().all()]
        return UserPage(users=users, page=page, limit=limit, total=int(total or 0))

    async def create(self, data: UserCreate) -> UserRecord:
        """Insert user; the unique constraint closes the pre-check race (409)."""
        user = User(
            name=data.name,
            email=data.email,
            age=data.age,
            hashed_password=data.hashed_password,
        )
        try:
            async with self._transaction("create") as session:
                session.add(user)
                await session.flush()
                await session.refresh(user)
                record = _user_to_record(user)
        except IntegrityError:
            raise UserAlreadyExistsException(data.email) from None
        return record

    async def update(self, user_id: int, changes: UserUpdate) -> UserRecord | None:
        values = changes.changes()
        try:
            async with self._transaction("update") as session:
                stmt = (
                    update(User)
                    .where(User.id == user_id)
                    .values(**values, updated_at=func.now())
                    .returning(User)
                )
                result = await session.execute(stmt)
                user = result.scalar_one_or_none()
                return _user_to_record(user) if user else None
        except IntegrityError:
            raise DuplicateEmailException() from None

    async def delete(self, user_id: int) -> UserRecord | None:
        async with self._transaction("delete") as session:
            result = await session.execute(
                delete(User).where(User.id == user_id).returning(User)
            )
            user = result.scalar_one_or_none()
            return _user_to_record(user) if user else None

    async def ping(self) -> bool:
        try:
            async with self._transaction("ping") as session:
                await session.execute(select(1))
            return True
        except InfrastructureException:
            return False
