"""SqlUserStore error translation (no database needed; sessions are faked)."""

from contextlib import asynccontextmanager

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError, ProgrammingError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from app.application.dtos.user import UserCreate, UserUpdate
from app.domain.exceptions import (
    DuplicateEmailException,
    InfrastructureException,
    StoreUnavailableException,
    UserAlreadyExistsException,
)
from app.infrastructure.persistence.repositories import SqlUserStore


class _FailingSession:
    def __init__(self, error: Exception) -> None:
        self.error = error

    async def __aenter__(self) -> "_FailingSession":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        return None

    @asynccontextmanager
    async def begin(self):
        yield

    def add(self, obj: object) -> None:
        pass

    async def _fail(self, *args, **kwargs):
        raise self.error

    get = execute = flush = refresh = scalar = _fail


def _store(error: Exception) -> SqlUserStore:
    return SqlUserStore(lambda: _FailingSession(error))


async def test_pool_timeout_is_store_unavailable() -> None:
    store = _store(PoolTimeoutError("QueuePool limit reached"))
    with pytest.raises(StoreUnavailableException):
        await store.list_all()


async def test_operational_error_is_store_unavailable() -> None:
    store = _store(OperationalError("SELECT 1", {}, Exception("connection refused")))
    with pytest.raises(StoreUnavailableException):
        await store.get_by_id(1)


async def test_other_sqlalchemy_error_is_infrastructure_error() -> None:
    store = _store(ProgrammingError("SELECT", {}, Exception("syntax")))
    with pytest.raises(InfrastructureException) as excinfo:
        await store.get_by_email("a@example.com")
    assert not isinstance(excinfo.value, StoreUnavailableException)
    assert excinfo.value.message == "User store operation failed"


async def test_integrity_error_on_create_is_conflict() -> None:
    store = _store(IntegrityError("INSERT", {}, Exception("duplicate key")))
    with pytest.raises(UserAlreadyExistsException):
        await store.create(UserCreate(name="Alice", email="alice@example.com"))


async def test_integrity_error_on_update_is_duplicate_email() -> None:
    store = _store(IntegrityError("UPDATE", {}, Exception("duplicate key")))
    with pytest.raises(DuplicateEmailException):
        await store.update(1, UserUpdate(email="taken@example.com"))


async def test_ping_false_when_unavailable() -> None:
    store = _store(OperationalError("SELECT 1", {}, Exception("connection refused")))
    assert await store.ping() is False


def test_user_id_column_is_bigint() -> None:
    """Clock-derived and large path ids fit the column instead of overflowing int4."""
    from sqlalchemy import BigInteger

    from app.infrastructure.persistence.models import User

    assert isinstance(User.__table__.c.id.type, BigInteger)
