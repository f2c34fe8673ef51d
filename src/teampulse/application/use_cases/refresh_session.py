"""Refresh session use case: trade a refresh token for a new token pair."""

from dataclasses import dataclass

from teampulse.application.token_factory import REFRESH_TOKEN_FIELD, TokenFactory
from teampulse.core.logging import get_logger
from teampulse.domain.errors import AuthenticationError, RepositoryError, ValidationError
from teampulse.domain.repositories import RefreshTokenRepository, UserRepository
from teampulse.domain.result import Err, Ok, Result
from teampulse.domain.value_objects import parse_user_id

logger = get_logger(__name__)


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


def _rejected(message: str, reason: str) -> Err[AuthenticationError]:
    return Err(AuthenticationError.create(message, metadata={"field": REFRESH_TOKEN_FIELD, "reason": reason}))


class RefreshSessionUseCase:
    """Rotate a session.

    The presented refresh token must verify, be stored, match the stored id
    and not be expired, and its user must still exist. On success a new
    refresh token replaces the old one, so every refresh token is single use.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        refresh_token_repo: RefreshTokenRepository,
        token_factory: TokenFactory,
    ) -> None:
        self.user_repo = user_repo
        self.refresh_token_repo = refresh_token_repo
        self.token_factory = token_factory

    async def _revoke(self, token: str) -> None:
        deleted = await self.refresh_token_repo.delete_by_token(token)
        if isinstance(deleted, Err):
            logger.warning(
                "Failed to revoke refresh token",
                operation=deleted.error.operation,
                error=deleted.error.message,
            )

    async def execute(
        self, refresh_token: str
    ) -> Result[TokenPair, AuthenticationError | RepositoryError | ValidationError]:
        verified = self.token_factory.verify_refresh_token(refresh_token)
        if isinstance(verified, Err):
            return verified
        payload = verified.value

        found = await self.refresh_token_repo.find_by_token(refresh_token)
        if isinstance(found, Err):
            return found
        stored = found.value

        if stored is None:
            return _rejected("Invalid or expired refresh token", "token_not_found")

        if stored.id != payload.token_id:
            logger.warning("Refresh token identity mismatch", token_id=stored.id)
            return _rejected("Invalid token identity", "integrity_check_failed")

        if stored.is_expired():
            await self._revoke(refresh_token)
            return _rejected("Refresh token has expired", "token_expired")

        user_id = parse_user_id(payload.user_id)
        if isinstance(user_id, Err):
            return user_id

        found_user = await self.user_repo.find_by_id(user_id.value)
        if isinstance(found_user, Err):
            await self._revoke(refresh_token)
            return found_user
        user = found_user.value
        if user is None:
            await self._revoke(refresh_token)
            return _rejected("User not found", "user_not_found")

        access_token = self.token_factory.create_access_token(user.email.value, user.role, user.id)
        if isinstance(access_token, Err):
            return access_token

        new_refresh_token = self.token_factory.create_refresh_token(user.id)
        if isinstance(new_refresh_token, Err):
            return new_refresh_token

        saved = await self.refresh_token_repo.save(new_refresh_token.value)
        if isinstance(saved, Err):
            return saved

        await self._revoke(refresh_token)

        logger.info("Session refreshed", user_id=user.id)
        return Ok(TokenPair(access_token=access_token.value, refresh_token=new_refresh_token.value.token))
