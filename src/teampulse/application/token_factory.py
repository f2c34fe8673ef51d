"""JWT token factory.

Issues and verifies the two token types of a TeamPulse session:

* access tokens, short-lived (15 minutes), sent on every request;
* refresh tokens, long-lived (7 days), persisted and exchanged for new
  access tokens.

Each type is signed with its own secret, so a refresh token can never pass
as an access token or the other way around. Verification failures are never
described to the caller: every cause (bad signature, expiry, wrong issuer or
audience, malformed claims) yields the same ``AuthenticationError``.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, ClassVar, TypeVar

import jwt
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from teampulse.application.token_payloads import AccessTokenPayload, RefreshTokenPayload
from teampulse.core.config import MIN_SECRET_LENGTH, Settings, get_settings
from teampulse.core.logging import get_logger
from teampulse.domain.entities import RefreshToken
from teampulse.domain.errors import AuthenticationError, ValidationError
from teampulse.domain.result import Err, Ok, Result, combine
from teampulse.domain.value_objects import Email, Role, new_refresh_token_id, parse_user_id

logger = get_logger(__name__)

PayloadT = TypeVar("PayloadT", bound=BaseModel)

ACCESS_TOKEN_FIELD = "accessToken"
REFRESH_TOKEN_FIELD = "refreshToken"


class TokenFactory:
    """Creates and verifies access and refresh tokens.

    Holds only immutable configuration and is safe to share.
    """

    ALGORITHM: ClassVar[str] = "HS256"
    ISSUER: ClassVar[str] = "team-pulse-api"
    AUDIENCE: ClassVar[str] = "team-pulse-app"
    ACCESS_TOKEN_LIFETIME: ClassVar[timedelta] = timedelta(minutes=15)
    REFRESH_TOKEN_LIFETIME: ClassVar[timedelta] = timedelta(days=7)
    REQUIRED_CLAIMS: ClassVar[list[str]] = ["exp", "iat", "iss", "aud"]

    def __init__(self, access_secret: str, refresh_secret: str) -> None:
        """Initialize the factory.

        Args:
            access_secret: Key for signing access tokens.
            refresh_secret: Key for signing refresh tokens.

        Raises:
            ValueError: If a secret is shorter than 32 characters or both
                secrets are the same.
        """
        if len(access_secret) < MIN_SECRET_LENGTH:
            raise ValueError(f"Access token secret must be at least {MIN_SECRET_LENGTH} characters")
        if len(refresh_secret) < MIN_SECRET_LENGTH:
            raise ValueError(f"Refresh token secret must be at least {MIN_SECRET_LENGTH} characters")
        if access_secret == refresh_secret:
            raise ValueError("Access and refresh token secrets must be different")

        self._access_secret = access_secret
        self._refresh_secret = refresh_secret

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "TokenFactory":
        settings = settings or get_settings()
        return cls(settings.jwt_secret, settings.jwt_refresh_secret)

    def _standard_claims(self, now: datetime, lifetime: timedelta) -> dict[str, Any]:
        return {
            "iss": self.ISSUER,
            "aud": self.AUDIENCE,
            "iat": now,
            "exp": now + lifetime,
        }

    def create_access_token(self, email: str, role: str | Role, user_id: str) -> Result[str, ValidationError]:
        """Create a signed access token.

        Args:
            email: The user's email address.
            role: The user's role.
            user_id: The user's unique identifier.

        Returns:
            Ok with the encoded JWT, or Err with the ValidationError of the
            first invalid input.
        """
        validated = combine(
            {
                "email": Email.create(email),
                "role": Role.create(role),
                "user_id": parse_user_id(user_id),
            }
        )
        if isinstance(validated, Err):
            return validated
        values = validated.value

        now = datetime.now(timezone.utc)
        payload = {
            "userId": values["user_id"],
            "email": values["email"].value,
            "role": values["role"].value,
            **self._standard_claims(now, self.ACCESS_TOKEN_LIFETIME),
        }
        return Ok(jwt.encode(payload, self._access_secret, algorithm=self.ALGORITHM))

    def create_refresh_token(self, user_id: str) -> Result[RefreshToken, ValidationError]:
        """Create a signed refresh token wrapped in a RefreshToken entity.

        A fresh token id is generated on every call and used both as the
        ``tokenId`` claim and as the entity id.
        """
        parsed = parse_user_id(user_id)
        if isinstance(parsed, Err):
            return parsed

        token_id = new_refresh_token_id()
        now = datetime.now(timezone.utc)
        payload = {
            "userId": parsed.value,
            "tokenId": token_id,
            **self._standard_claims(now, self.REFRESH_TOKEN_LIFETIME),
        }
        token = jwt.encode(payload, self._refresh_secret, algorithm=self.ALGORITHM)

        return RefreshToken.create(
            id=token_id,
            token=token,
            user_id=parsed.value,
            expires_at=now + self.REFRESH_TOKEN_LIFETIME,
            created_at=now,
        )

    def verify_access_token(self, token: str) -> Result[AccessTokenPayload, AuthenticationError]:
        claims = self._decode(token, self._access_secret, ACCESS_TOKEN_FIELD)
        if isinstance(claims, Err):
            return claims
        return self._validate_payload(AccessTokenPayload, claims.value, ACCESS_TOKEN_FIELD)

    def verify_refresh_token(self, token: str) -> Result[RefreshTokenPayload, AuthenticationError]:
        claims = self._decode(token, self._refresh_secret, REFRESH_TOKEN_FIELD)
        if isinstance(claims, Err):
            return claims
        return self._validate_payload(RefreshTokenPayload, claims.value, REFRESH_TOKEN_FIELD)

    @classmethod
    def get_refresh_token_expiration_date(cls) -> datetime:
        """Return when a refresh token issued now would expire."""
        return datetime.now(timezone.utc) + cls.REFRESH_TOKEN_LIFETIME

    def _decode(self, token: str, secret: str, field: str) -> Result[dict[str, Any], AuthenticationError]:
        try:
            claims = jwt.decode(
                token,
                secret,
                algorithms=[self.ALGORITHM],
                audience=self.AUDIENCE,
                issuer=self.ISSUER,
                options={"require": self.REQUIRED_CLAIMS},
            )
        except jwt.InvalidTokenError as e:
            logger.debug("Token verification failed", field=field, reason=type(e).__name__, detail=str(e))
            return Err(AuthenticationError.invalid_token(field))
        return Ok(claims)

    @staticmethod
    def _validate_payload(
        model: type[PayloadT], claims: dict[str, Any], field: str
    ) -> Result[PayloadT, AuthenticationError]:
        try:
            return Ok(model.model_validate(claims))
        except PydanticValidationError as e:
            logger.debug("Token payload rejected", field=field, errors=e.error_count())
            return Err(AuthenticationError.invalid_token(field))
