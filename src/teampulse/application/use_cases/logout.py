"""Logout use case."""

from teampulse.domain.errors import RepositoryError
from teampulse.domain.repositories import RefreshTokenRepository
from teampulse.domain.result import Err, Ok, Result


class LogoutUseCase:
    """End a session by deleting its refresh token.

    Idempotent: logging out with an unknown or already revoked token
    succeeds. Access tokens are stateless and simply run out.
    """

    def __init__(self, refresh_token_repo: RefreshTokenRepository) -> None:
        self.refresh_token_repo = refresh_token_repo

    async def execute(self, refresh_token: str) -> Result[None, RepositoryError]:
        deleted = await self.refresh_token_repo.delete_by_token(refresh_token)
        if isinstance(deleted, Err):
            return deleted
        return Ok(None)
