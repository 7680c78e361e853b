"""Password hashing for signup and login (bcrypt with SHA-256 pre-hash).

Replaces plaintext password storage: only the bcrypt hash is persisted,
and login verifies against it. Inputs are SHA-256 pre-hashed because
bcrypt silently truncates at 72 bytes.
"""

import base64
import hashlib

import bcrypt


def _prehash(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


class BcryptPasswordHasher:
    """IPasswordHasher implementation. Both methods are CPU-bound; call via asyncio.to_thread."""

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds

    def hash_password(self, password: str) -> str:
        """Return a salted bcrypt hash of password."""
        hashed = bcrypt.hashpw(_prehash(password), bcrypt.gensalt(rounds=self.rounds))
        return hashed.decode("utf-8")

    def verify_password(self, password: str, hashed: str) -> bool:
        """Return True if password matches hashed; malformed hashes never match."""
        try:
            return bool(bcrypt.checkpw(_prehash(password), hashed.encode("utf-8")))
        except (ValueError, TypeError):
            return False
