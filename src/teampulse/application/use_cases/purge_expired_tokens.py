"""Periodic sweep of expired refresh tokens."""

from teampulse.core.logging import get_logger
from teampulse.domain.errors import RepositoryError
from teampulse.domain.repositories import RefreshTokenRepository
from teampulse.domain.result import Err, Ok, Result

logger = get_logger(__name__)


class PurgeExpiredRefreshTokensUseCase:
    """Delete every stored refresh token past its expiry.

    Expired tokens are already rejected on use; this only bounds storage.
    Run it from a scheduler (``teampulse purge-expired-tokens``).
    """

    def __init__(self, refresh_token_repo: RefreshTokenRepository) -> None:
        self.refresh_token_repo = refresh_token_repo

    async def execute(self) -> Result[int, RepositoryError]:
        purged = await self.refresh_token_repo.delete_expired()
        if isinstance(purged, Err):
            return purged
        logger.info("Refresh token purge complete", purged=purged.value)
        return Ok(purged.value)
