"""Pytest configuration and fixtures for the user service.

HTTP tests run against a fresh app per test on the in-memory store, with
the lifespan entered explicitly (httpx ASGITransport does not send
lifespan events). Cache-aside tests swap in CachedUserService over a
dict-backed FakeCache. Nothing here needs Postgres or Redis; tests that
do are marked requires_db.
"""

import os

# Env must be in place before app.main builds its module-level app.
os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("REDIS_ENABLED", "false")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("TELEMETRY_ENABLED", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import fnmatch  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.application.services.auth_service import AuthService  # noqa: E402
from app.application.services.user_service import CachedUserService  # noqa: E402
from app.core.config import get_settings  # noqa: E402
from app.infrastructure.memory import InMemoryUserStore  # noqa: E402
from app.infrastructure.security.password import BcryptPasswordHasher  # noqa: E402

get_settings.cache_clear()


class FakeCache:
    """In-process ICacheService double. available=False behaves like a Redis outage."""

    def __init__(self, available: bool = True) -> None:
        self.available = available
        self.data: dict[str, Any] = {}
        self.ttls: dict[str, int | None] = {}
        self.deleted: list[str] = []
        self.disconnected = False

    def is_available(self) -> bool:
        return self.available

    async def ping(self) -> bool:
        return self.available

    async def disconnect(self) -> None:
        self.disconnected = True

    async def get_json(self, key: str) -> Any | None:
        if not self.available:
            return None
        return self.data.get(key)

    async def set_json(self, key: str, value: Any, ttl: int | None = None) -> bool:
        if not self.available:
            return False
        self.data[key] = value
        self.ttls[key] = ttl
        return True

    async def delete(self, key: str) -> bool:
        if not self.available:
            return False
        self.deleted.append(key)
        self.data.pop(key, None)
        return True

    async def delete_pattern(self, pattern: str) -> int:
        if not self.available:
            return 0
        matched = [k for k in self.data if fnmatch.fnmatchcase(k, pattern)]
        for key in matched:
            del self.data[key]
        self.deleted.append(pattern)
        return len(matched)


@pytest.fixture
async def app() -> FastAPI:
    """Fresh application with its lifespan running (in-memory store, no cache)."""
    from app.main import create_app

    get_settings.cache_clear()
    application = create_app()
    async with application.router.lifespan_context(application):
        yield application


@pytest.fixture
async def client(app: FastAPI) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def fake_cache() -> FakeCache:
    return FakeCache()


@pytest.fixture
async def cached_client(app: FastAPI, fake_cache: FakeCache) -> AsyncClient:
    """Client whose app serves reads through CachedUserService over fake_cache."""
    service = CachedUserService(
        app.state.user_store,
        fake_cache,
        list_ttl=300,
        user_ttl=600,
        metrics=app.state.metrics,
    )
    app.state.cache = fake_cache
    app.state.user_service = service
    app.state.auth_service = AuthService(
        service, BcryptPasswordHasher(rounds=4), metrics=app.state.metrics
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def store() -> InMemoryUserStore:
    return InMemoryUserStore()
