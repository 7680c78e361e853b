"""User application services: CRUD over IUserStore, with an optional cache-aside layer.

UserService is the plain CRUD path (used with the in-memory store).
CachedUserService adds the cache-aside read path and write invalidation
(used with the SQL store). The two never share a read code path.
"""

from __future__ import annotations

import logging
from typing import Any

from app.application.dtos.user import (
    UserCreate,
    UserListResult,
    UserPage,
    UserReadResult,
    UserRecord,
    UserUpdate,
)
from app.application.interfaces.repositories import IUserStore
from app.application.interfaces.services import ICacheService, IMetricsRecorder
from app.application.services.user_validation import (
    validate_user_create,
    validate_user_update,
)
from app.core.cache_keys import (
    user_key,
    users_all_key,
    users_page_key,
    users_page_pattern,
)
from app.core.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from app.domain.enums import DataSource
from app.domain.exceptions import (
    DuplicateEmailException,
    ResourceNotFoundException,
    UserAlreadyExistsException,
    ValidationException,
)

logger = logging.getLogger(__name__)


def _strip(value: str | None) -> str | None:
    return value.strip() if value is not None else None


def resolve_paging(page: int | None, limit: int | None) -> tuple[int, int] | None:
    """Return (page, limit) when pagination was requested, else None.

    Raises:
        ValidationException: page < 1 or limit outside [1, MAX_PAGE_LIMIT].
    """
    if page is None and limit is None:
        return None
    page = 1 if page is None else page
    limit = DEFAULT_PAGE_LIMIT if limit is None else limit
    if page < 1:
        raise ValidationException("page must be >= 1", field="page")
    if not 1 <= limit <= MAX_PAGE_LIMIT:
        raise ValidationException(f"limit must be between 1 and {MAX_PAGE_LIMIT}", field="limit")
    return page, limit


class UserService:
    """CRUD on users: validation, email uniqueness, not-found handling.

    Reads go straight to the store and are tagged source=database.
    Subclasses override _on_after_write for cache invalidation.
    """

    def __init__(self, store: IUserStore) -> None:
        self.store = store

    async def list_users(
        self, page: int | None = None, limit: int | None = None
    ) -> UserListResult:
        """Return all users, or one page when page/limit is given."""
        paging = resolve_paging(page, limit)
        if paging is None:
            users = await self.store.list_all()
            return UserListResult(users=users, source=DataSource.DATABASE)
        user_page = await self.store.get_page(*paging)
        return UserListResult(users=user_page.users, source=DataSource.DATABASE, page=user_page)

    async def get_user(self, user_id: int) -> UserReadResult:
        """Return the user. Raises ResourceNotFoundException if absent."""
        user = await self.store.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        return UserReadResult(user=user, source=DataSource.DATABASE)

    async def create_user(
        self,
        name: str | None,
        email: str | None,
        age: int | None = None,
        *,
        hashed_password: str | None = None,
    ) -> UserRecord:
        """Validate, reject duplicate email (409), insert.

        The email pre-check is not atomic with the insert; the store enforces
        uniqueness as well and raises UserAlreadyExistsException on a lost race.
        """
        name, email = _strip(name), _strip(email)
        validate_user_create(name, email, age).raise_for_errors()
        if await self.store.get_by_email(email) is not None:
            raise UserAlreadyExistsException(email)
        user = await self.store.create(
            UserCreate(name=name, email=email, age=age, hashed_password=hashed_password)
        )
        logger.info("User created: id=%s", user.id)
        await self._on_after_write(None)
        return user

    async def update_user(
        self, user_id: int, update: UserUpdate, *, partial: bool = False
    ) -> UserRecord:
        """Overwrite provided fields. PUT (partial=False) requires name and email.

        Raises:
            ValidationException: Missing or malformed fields (no store access).
            ResourceNotFoundException: Unknown id.
            DuplicateEmailException: Email owned by a different user.
        """
        update = UserUpdate(name=_strip(update.name), email=_strip(update.email), age=update.age)
        validate_user_update(update, partial=partial).raise_for_errors()
        if await self.store.get_by_id(user_id) is None:
            raise ResourceNotFoundException("user", user_id)
        if update.email is not None:
            owner = await self.store.get_by_email(update.email)
            if owner is not None and owner.id != user_id:
                raise DuplicateEmailException()
        user = await self.store.update(user_id, update)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        logger.info("User updated: id=%s fields=%s", user_id, sorted(update.changes()))
        await self._on_after_write(user_id)
        return user

    async def delete_user(self, user_id: int) -> UserRecord:
        """Remove the user and return the deleted snapshot. Raises ResourceNotFoundException."""
        if await self.store.get_by_id(user_id) is None:
            raise ResourceNotFoundException("user", user_id)
        user = await self.store.delete(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        logger.info("User deleted: id=%s", user_id)
        await self._on_after_write(user_id)
        return user

    async def _on_after_write(self, user_id: int | None) -> None:
        """Override in subclasses to invalidate caches. Runs after the store write committed."""


class CachedUserService(UserService):
    """UserService with a cache-aside read path in front of the store.

    Reads: cache -> (miss) store -> populate cache with TTL. A cache lookup
    failure or an undecodable entry is a miss; a cache write failure is
    ignored. Only the store can fail a read. Empty and not-found results
    are never cached.
    """

    def __init__(
        self,
        store: IUserStore,
        cache: ICacheService,
        *,
        list_ttl: int = 300,
        user_ttl: int = 600,
        metrics: IMetricsRecorder | None = None,
    ) -> None:
        super().__init__(store)
        self.cache = cache
        self.list_ttl = list_ttl
        self.user_ttl = user_ttl
        self.metrics = metrics

    def _record_lookup(self, key_type: str, hit: bool) -> None:
        if self.metrics is not None:
            self.metrics.record_cache_lookup(key_type, hit)

    async def _cached(self, key: str, key_type: str, decode: Any) -> Any | None:
        """Return decode(cached value) or None on miss / bad entry."""
        raw = await self.cache.get_json(key)
        if raw is None:
            self._record_lookup(key_type, hit=False)
            return None
        try:
            value = decode(raw)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning("Discarding malformed cache entry %s: %s", key, e)
            self._record_lookup(key_type, hit=False)
            return None
        self._record_lookup(key_type, hit=True)
        return value

    async def list_users(
        self, page: int | None = None, limit: int | None = None
    ) -> UserListResult:
        paging = resolve_paging(page, limit)
        if paging is None:
            key = users_all_key()
            cached = await self._cached(
                key, "users_all", lambda raw: [UserRecord.from_dict(u) for u in raw]
            )
            if cached is not None:
                return UserListResult(users=cached, source=DataSource.CACHE)
            users = await self.store.list_all()
            if users:
                await self.cache.set_json(key, [u.to_dict() for u in users], ttl=self.list_ttl)
            return UserListResult(users=users, source=DataSource.DATABASE)

        key = users_page_key(*paging)
        cached_page = await self._cached(key, "users_page", UserPage.from_dict)
        if cached_page is not None:
            return UserListResult(users=cached_page.users, source=DataSource.CACHE, page=cached_page)
        user_page = await self.store.get_page(*paging)
        if user_page.users:
            await self.cache.set_json(key, user_page.to_dict(), ttl=self.list_ttl)
        return UserListResult(users=user_page.users, source=DataSource.DATABASE, page=user_page)

    async def get_user(self, user_id: int) -> UserReadResult:
        key = user_key(user_id)
        cached = await self._cached(key, "user", UserRecord.from_dict)
        if cached is not None:
            return UserReadResult(user=cached, source=DataSource.CACHE)
        result = await super().get_user(user_id)
        await self.cache.set_json(key, result.user.to_dict(), ttl=self.user_ttl)
        return result

    async def _on_after_write(self, user_id: int | None) -> None:
        """Drop the list key, every cached page, and the per-user key when known."""
        await self.cache.delete(users_all_key())
        await self.cache.delete_pattern(users_page_pattern())
        if user_id is not None:
            await self.cache.delete(user_key(user_id))
