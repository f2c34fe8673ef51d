"""Password hashing port."""

from typing import Protocol

from teampulse.domain.errors import RepositoryError
from teampulse.domain.result import Result


class PasswordHasher(Protocol):
    """One-way, salted, adaptive-cost password hashing.

    Implementations live in ``teampulse.infrastructure.auth.password_hasher``.
    """

    async def hash(self, password: str) -> Result[str, RepositoryError]:
        """Hash ``password`` with a fresh random salt.

        The returned string encodes the algorithm and its parameters, so two
        calls with the same password never return the same value.
        """
        ...

    async def verify(self, password: str, hashed: str) -> Result[bool, RepositoryError]:
        """Check ``password`` against ``hashed``.

        A mismatch and a syntactically invalid hash both give ``Ok(False)``.
        ``RepositoryError`` is reserved for unexpected failures.
        """
        ...
