"""Password hashing adapters.

Two implementations of the ``PasswordHasher`` port:

* ``BcryptPasswordHasher`` (default) produces ``$2b$`` hashes compatible with
  existing user records.
* ``Argon2PasswordHasher`` uses Argon2id, the winner of the Password Hashing
  Competition and the algorithm recommended by OWASP.

Hashing is CPU-bound and deliberately slow, so both adapters run it in a
worker thread to keep the event loop responsive.
"""

import asyncio

import bcrypt
from argon2 import PasswordHasher as Argon2Hasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from teampulse.core.config import Settings, get_settings
from teampulse.core.logging import get_logger
from teampulse.domain.errors import RepositoryError
from teampulse.domain.result import Err, Ok, Result
from teampulse.domain.services import PasswordHasher

logger = get_logger(__name__)

BCRYPT_MAX_PASSWORD_BYTES = 72
DEFAULT_BCRYPT_ROUNDS = 10


def _bcrypt_secret(password: str) -> bytes:
    # bcrypt only reads the first 72 bytes; current releases raise instead of truncating.
    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


class BcryptPasswordHasher:
    """bcrypt implementation of ``PasswordHasher``."""

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        if not 4 <= rounds <= 31:
            raise ValueError("bcrypt rounds must be between 4 and 31")
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def _hash_sync(self, password: str) -> str:
        return bcrypt.hashpw(_bcrypt_secret(password), bcrypt.gensalt(rounds=self._rounds)).decode("utf-8")

    @staticmethod
    def _verify_sync(password: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(_bcrypt_secret(password), hashed.encode("utf-8"))
        except ValueError:
            # Malformed or unsupported hash string
            return False

    async def hash(self, password: str) -> Result[str, RepositoryError]:
        try:
            return Ok(await asyncio.to_thread(self._hash_sync, password))
        except Exception as e:
            logger.error("Password hashing failed", algorithm="bcrypt", error=str(e))
            return Err(RepositoryError.for_operation("hash", "Failed to hash password", cause=e))

    async def verify(self, password: str, hashed: str) -> Result[bool, RepositoryError]:
        try:
            return Ok(await asyncio.to_thread(self._verify_sync, password, hashed))
        except Exception as e:
            logger.error("Password verification failed", algorithm="bcrypt", error=str(e))
            return Err(RepositoryError.for_operation("verify", "Failed to verify password", cause=e))


class Argon2PasswordHasher:
    """Argon2id implementation of ``PasswordHasher``."""

    def __init__(self, time_cost: int = 3, memory_cost: int = 65536, parallelism: int = 4) -> None:
        self._hasher = Argon2Hasher(time_cost=time_cost, memory_cost=memory_cost, parallelism=parallelism)

    def _verify_sync(self, password: str, hashed: str) -> bool:
        try:
            return self._hasher.verify(hashed, password)
        except (VerifyMismatchError, InvalidHashError, VerificationError):
            return False

    def needs_rehash(self, hashed: str) -> bool:
        """Check whether a hash was produced with outdated parameters.

        Call this after a successful verification and store a fresh hash
        when it returns True.
        """
        return self._hasher.check_needs_rehash(hashed)

    async def hash(self, password: str) -> Result[str, RepositoryError]:
        try:
            return Ok(await asyncio.to_thread(self._hasher.hash, password))
        except Exception as e:
            logger.error("Password hashing failed", algorithm="argon2", error=str(e))
            return Err(RepositoryError.for_operation("hash", "Failed to hash password", cause=e))

    async def verify(self, password: str, hashed: str) -> Result[bool, RepositoryError]:
        try:
            return Ok(await asyncio.to_thread(self._verify_sync, password, hashed))
        except Exception as e:
            logger.error("Password verification failed", algorithm="argon2", error=str(e))
            return Err(RepositoryError.for_operation("verify", "Failed to verify password", cause=e))


def create_password_hasher(settings: Settings | None = None) -> PasswordHasher:
    """Build the hasher selected by ``settings.password_hasher``."""
    settings = settings or get_settings()
    if settings.password_hasher == "argon2":
        return Argon2PasswordHasher(
            time_cost=settings.argon2_time_cost,
            memory_cost=settings.argon2_memory_cost,
            parallelism=settings.argon2_parallelism,
        )
    return BcryptPasswordHasher(rounds=settings.bcrypt_rounds)
