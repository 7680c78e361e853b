"""Application lifespan: startup and shutdown.

Composition root. Builds the user store for the configured backend, the
optional Redis cache, the user/auth services and telemetry, and stores
them on app.state. No business logic here.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.application.services.auth_service import AuthService
from app.application.services.user_service import CachedUserService, UserService
from app.core.config import get_settings
from app.infrastructure.security.password import BcryptPasswordHasher

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: user store (tables if DATABASE_CREATE_TABLES), Redis
    cache (postgres backend with REDIS_ENABLED only), services, telemetry.
    Shutdown order: cache disconnect, telemetry shutdown, SQL engine dispose.
    """
    settings = get_settings()
    metrics = app.state.metrics

    # ---- Startup ----
    if settings.store_backend == "postgres":
        from app.infrastructure.persistence import database
        from app.infrastructure.persistence.repositories import SqlUserStore

        store = SqlUserStore(database.get_session_factory())
        if settings.database_create_tables:
            await database.create_tables()
    else:
        from app.infrastructure.memory import InMemoryUserStore

        store = InMemoryUserStore()
        logger.info("Using in-memory user store (data is lost on restart)")
    app.state.user_store = store

    app.state.cache = None
    cache = None
    if settings.uses_cache:
        from app.infrastructure.cache.redis_cache import CacheService

        cache = CacheService(settings=settings)
        await cache.connect()
        app.state.cache = cache
        app.state.user_service = CachedUserService(
            store,
            cache,
            list_ttl=settings.cache_ttl_users_list,
            user_ttl=settings.cache_ttl_user,
            metrics=metrics,
        )
    else:
        app.state.user_service = UserService(store)

    app.state.auth_service = AuthService(
        app.state.user_service,
        BcryptPasswordHasher(rounds=settings.bcrypt_rounds),
        metrics=metrics,
    )

    app.state.telemetry = None
    if settings.telemetry_enabled:
        from app.shared.telemetry.telemetry import Telemetry

        telemetry = Telemetry.from_settings(settings)
        telemetry.instrument_logging()
        if app.state.cache is not None:
            telemetry.instrument_redis()
        if settings.store_backend == "postgres":
            from app.infrastructure.persistence import database

            telemetry.instrument_sqlalchemy(database.engine)
        app.state.telemetry = telemetry

    logger.info(
        "Startup complete (store=%s, cache=%s)",
        settings.store_backend,
        "on" if app.state.cache is not None and app.state.cache.is_available() else "off",
    )

    yield

    # ---- Shutdown ----
    # Disconnect the client built here; app.state.cache may have been replaced.
    if cache is not None:
        await cache.disconnect()
        logger.info("Cache disconnected")

    if app.state.telemetry is not None:
        app.state.telemetry.shutdown()

    if settings.store_backend == "postgres":
        from app.infrastructure.persistence import database

        await database.dispose_engine()
