"""Login use case: exchange email and password for a session."""

from dataclasses import dataclass

from teampulse.application.token_factory import TokenFactory
from teampulse.core.logging import get_logger
from teampulse.domain.entities import User
from teampulse.domain.errors import AuthenticationError, RepositoryError, ValidationError
from teampulse.domain.repositories import RefreshTokenRepository, UserRepository
from teampulse.domain.result import Err, Ok, Result
from teampulse.domain.services import PasswordHasher
from teampulse.domain.value_objects import Email

logger = get_logger(__name__)

# Hashed once per use case so unknown emails cost the same as wrong passwords.
_DUMMY_PASSWORD = "teampulse-dummy-password-for-timing"


@dataclass(frozen=True)
class LoginResult:
    """Tokens issued by a successful login, plus the authenticated user."""

    access_token: str
    refresh_token: str
    user: User


class LoginUseCase:
    """Authenticate a user and start a session.

    Steps: look up the user by email, verify the password, mint and persist a
    refresh token, then mint an access token. An unknown email and a wrong
    password give the same error, and both run one password verification.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        refresh_token_repo: RefreshTokenRepository,
        password_hasher: PasswordHasher,
        token_factory: TokenFactory,
    ) -> None:
        self.user_repo = user_repo
        self.refresh_token_repo = refresh_token_repo
        self.password_hasher = password_hasher
        self.token_factory = token_factory
        self._dummy_hash: str | None = None

    async def _get_dummy_hash(self) -> Result[str, RepositoryError]:
        if self._dummy_hash is None:
            hashed = await self.password_hasher.hash(_DUMMY_PASSWORD)
            if isinstance(hashed, Err):
                return hashed
            self._dummy_hash = hashed.value
        return Ok(self._dummy_hash)

    async def execute(
        self, email: str, password: str
    ) -> Result[LoginResult, AuthenticationError | RepositoryError | ValidationError]:
        parsed_email = Email.create(email)
        if isinstance(parsed_email, Err):
            return parsed_email

        found = await self.user_repo.find_by_email(parsed_email.value)
        if isinstance(found, Err):
            return found
        user = found.value

        if user is None:
            dummy = await self._get_dummy_hash()
            if isinstance(dummy, Err):
                return dummy
            # Result ignored: the outcome is invalid credentials either way.
            await self.password_hasher.verify(password, dummy.value)
            logger.info("Login failed", reason="unknown_email")
            return Err(AuthenticationError.invalid_credentials())

        verified = await self.password_hasher.verify(password, user.password_hash)
        if isinstance(verified, Err):
            return verified
        if not verified.value:
            logger.info("Login failed", reason="invalid_password", user_id=user.id)
            return Err(AuthenticationError.invalid_credentials())

        refresh_token = self.token_factory.create_refresh_token(user.id)
        if isinstance(refresh_token, Err):
            return refresh_token

        saved = await self.refresh_token_repo.save(refresh_token.value)
        if isinstance(saved, Err):
            return saved

        access_token = self.token_factory.create_access_token(user.email.value, user.role, user.id)
        if isinstance(access_token, Err):
            return access_token

        logger.info("User logged in", user_id=user.id, role=user.role.value)
        return Ok(
            LoginResult(
                access_token=access_token.value,
                refresh_token=refresh_token.value.token,
                user=user,
            )
        )
