"""Refresh token repository port."""

from typing import Protocol

from teampulse.domain.entities import RefreshToken
from teampulse.domain.errors import RepositoryError
from teampulse.domain.result import Result
from teampulse.domain.value_objects import UserId


class RefreshTokenRepository(Protocol):
    """Persistence port for refresh tokens.

    Implementations surface every storage failure as a single
    ``RepositoryError`` and never retry. Uniqueness of ``RefreshToken.id`` is
    the storage layer's primary key; ``save`` is an upsert keyed by it.
    """

    async def find_by_token(self, token: str) -> Result[RefreshToken | None, RepositoryError]: ...

    async def find_by_user_id(self, user_id: UserId) -> Result[list[RefreshToken], RepositoryError]: ...

    async def save(self, refresh_token: RefreshToken) -> Result[RefreshToken, RepositoryError]: ...

    async def delete_by_token(self, token: str) -> Result[bool, RepositoryError]: ...

    async def delete_by_user_id(self, user_id: UserId) -> Result[int, RepositoryError]: ...

    async def delete_expired(self) -> Result[int, RepositoryError]:
        """Remove every token whose ``expires_at`` has passed.

        Meant to run on a periodic schedule to bound storage growth.
        """
        ...
