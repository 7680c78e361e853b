"""Security: password hashing."""

from app.infrastructure.security.password import BcryptPasswordHasher

__all__ = ["BcryptPasswordHasher"]
