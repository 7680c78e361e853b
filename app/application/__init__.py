"""Application layer: interfaces, DTOs, services.

Depends only on domain, core and protocol definitions (DIP).
Infrastructure implements the interfaces (stores, cache, hashing, metrics).
"""

from app.application.interfaces import (
    ICacheService,
    IMetricsRecorder,
    IPasswordHasher,
    IUserStore,
)
from app.application.services import AuthService, CachedUserService, UserService

__all__ = [
    "AuthService",
    "CachedUserService",
    "ICacheService",
    "IMetricsRecorder",
    "IPasswordHasher",
    "IUserStore",
    "UserService",
]
