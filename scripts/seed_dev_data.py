"""Seed dev users into Postgres.

Creates the users table if it does not exist, then inserts `count` users
named dev-user-<n> (existing emails are skipped). Goes through UserService
so validation and uniqueness match the API.

Usage:
    python -m scripts.seed_dev_data [count]

Default count: 25 (enough for three pages at limit=10).
Requires: STORE_BACKEND=postgres and DATABASE_URL.
"""

from __future__ import annotations

import asyncio
import sys

from app.application.services.user_service import UserService
from app.core.config import get_settings
from app.domain.exceptions import UserAlreadyExistsException
from app.infrastructure.persistence import database
from app.infrastructure.persistence.repositories import SqlUserStore

DEFAULT_COUNT = 25


async def seed(count: int) -> tuple[int, int]:
    """Insert up to count users; return (created, skipped)."""
    await database.create_tables()
    service = UserService(SqlUserStore(database.get_session_factory()))
    created = skipped = 0
    for n in range(1, count + 1):
        try:
            await service.create_user(
                f"dev-user-{n}", f"dev-user-{n}@example.com", age=20 + n % 50
            )
            created += 1
        except UserAlreadyExistsException:
            skipped += 1
    return created, skipped


async def main() -> None:
    count = int(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_COUNT
    if get_settings().store_backend != "postgres":
        print("STORE_BACKEND must be 'postgres' to seed", file=sys.stderr)
        sys.exit(1)
    try:
        created, skipped = await seed(count)
    finally:
        await database.dispose_engine()
    print(f"Seeded users: {created} created, {skipped} already present")


if __name__ == "__main__":
    asyncio.run(main())
