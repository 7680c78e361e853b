"""Application services: user CRUD (plain and cache-aside), auth, validation."""

from app.application.services.auth_service import AuthService
from app.application.services.user_service import (
    CachedUserService,
    UserService,
    resolve_paging,
)
from app.application.services.user_validation import (
    ValidationResult,
    validate_login,
    validate_signup,
    validate_user_create,
    validate_user_update,
)

__all__ = [
    "AuthService",
    "CachedUserService",
    "UserService",
    "ValidationResult",
    "resolve_paging",
    "validate_login",
    "validate_signup",
    "validate_user_create",
    "validate_user_update",
]
