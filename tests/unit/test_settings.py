"""Tests for Settings validation and derived flags."""

import pytest
from pydantic import ValidationError

from app.core.config import Settings


def test_memory_backend_never_uses_cache() -> None:
    assert Settings(store_backend="memory", redis_enabled=True).uses_cache is False


def test_postgres_backend_uses_cache_when_enabled() -> None:
    assert Settings(store_backend="postgres", redis_enabled=True).uses_cache is True
    assert Settings(store_backend="postgres", redis_enabled=False).uses_cache is False


def test_unknown_backend_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(store_backend="mongo")


def test_postgres_requires_database_url() -> None:
    with pytest.raises(ValidationError):
        Settings(store_backend="postgres", database_url="")


def test_pool_timeout_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        Settings(store_backend="memory", db_pool_timeout=0)
