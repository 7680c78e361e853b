"""Signup and login against the user store.

Passwords are stored as bcrypt hashes and verified with bcrypt; no
plaintext comparison. No token or session is issued: a successful login
returns the user record.
"""

from __future__ import annotations

import asyncio
import logging

from app.application.dtos.user import UserRecord
from app.application.interfaces.services import IMetricsRecorder, IPasswordHasher
from app.application.services.user_service import UserService
from app.application.services.user_validation import validate_login, validate_signup
from app.domain.exceptions import AuthenticationException, UserAlreadyExistsException

logger = logging.getLogger(__name__)


class AuthService:
    """Signup (create with hashed password) and login (bcrypt verify)."""

    def __init__(
        self,
        users: UserService,
        hasher: IPasswordHasher,
        metrics: IMetricsRecorder | None = None,
    ) -> None:
        self.users = users
        self.hasher = hasher
        self.metrics = metrics
        self._dummy_hash: str | None = None

    async def _get_dummy_hash(self) -> str:
        """Hash verified when the user is unknown, so both paths cost one bcrypt check."""
        if self._dummy_hash is None:
            self._dummy_hash = await asyncio.to_thread(
                self.hasher.hash_password, "not-a-real-password"
            )
        return self._dummy_hash

    async def signup(
        self,
        name: str | None,
        email: str | None,
        password: str | None,
        age: int | None = None,
    ) -> UserRecord:
        """Create a user with a hashed password.

        Raises:
            ValidationException: name, email or password missing / malformed.
            UserAlreadyExistsException: email already registered.
        """
        name = name.strip() if name is not None else None
        email = email.strip() if email is not None else None
        validate_signup(name, email, password, age).raise_for_errors()
        if await self.users.store.get_by_email(email) is not None:
            raise UserAlreadyExistsException(email)
        hashed = await asyncio.to_thread(self.hasher.hash_password, password)
        user = await self.users.create_user(name, email, age, hashed_password=hashed)
        if self.metrics is not None:
            self.metrics.record_registration()
        return user

    async def login(self, email: str | None, password: str | None) -> UserRecord:
        """Return the user when email/password match.

        Raises:
            ValidationException: email or password missing.
            AuthenticationException: unknown email, no password set, or wrong password.
        """
        validate_login(email, password).raise_for_errors()
        user = await self.users.store.get_by_email(email.strip())
        if user is None or user.hashed_password is None:
            await asyncio.to_thread(
                self.hasher.verify_password, password, await self._get_dummy_hash()
            )
            self._record_login(False)
            raise AuthenticationException()
        if not await asyncio.to_thread(
            self.hasher.verify_password, password, user.hashed_password
        ):
            self._record_login(False)
            raise AuthenticationException()
        self._record_login(True)
        logger.info("Login succeeded: user_id=%s", user.id)
        return user

    def _record_login(self, success: bool) -> None:
        if self.metrics is not None:
            self.metrics.record_login(success)
