"""Create a user with a password (Postgres only), as signup would.

Usage:
    python -m scripts.create_test_user <name> <email> [password]
If password is omitted, a random one is printed.
"""

import asyncio
import secrets
import sys

from app.application.services.auth_service import AuthService
from app.application.services.user_service import UserService
from app.core.config import get_settings
from app.domain.exceptions import UserServiceException
from app.infrastructure.persistence import database
from app.infrastructure.persistence.repositories import SqlUserStore
from app.infrastructure.security.password import BcryptPasswordHasher


async def main() -> None:
    """Create the user through AuthService.signup (bcrypt hash, uniqueness check)."""
    if len(sys.argv) < 3:
        print(
            "Usage: python -m scripts.create_test_user <name> <email> [password]",
            file=sys.stderr,
        )
        sys.exit(1)
    name, email = sys.argv[1], sys.argv[2]
    password = sys.argv[3] if len(sys.argv) > 3 else secrets.token_urlsafe(12)

    settings = get_settings()
    if settings.store_backend != "postgres":
        print("STORE_BACKEND must be 'postgres'", file=sys.stderr)
        sys.exit(1)

    auth = AuthService(
        UserService(SqlUserStore(database.get_session_factory())),
        BcryptPasswordHasher(rounds=settings.bcrypt_rounds),
    )
    try:
        user = await auth.signup(name, email, password)
    except UserServiceException as e:
        print(f"Could not create user: {e.message}", file=sys.stderr)
        sys.exit(1)
    finally:
        await database.dispose_engine()
    print(f"Created user: {user.id} ({user.email})")
    if len(sys.argv) <= 3:
        print(f"Password: {password}")


if __name__ == "__main__":
    asyncio.run(main())
