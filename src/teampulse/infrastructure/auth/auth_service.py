"""Bearer credential verification and role checks.

``AuthService`` is what an HTTP layer calls on every authenticated request:
it parses the ``Authorization`` header, verifies the access token it carries
and answers role questions about the resulting identity.
"""

from collections.abc import Collection
from dataclasses import dataclass

from teampulse.application.token_factory import TokenFactory
from teampulse.application.token_payloads import AccessTokenPayload
from teampulse.domain.errors import AuthenticationError, AuthorizationError, ValidationError
from teampulse.domain.result import Err, Ok, Result
from teampulse.domain.value_objects import Role

AUTHORIZATION_FIELD = "authorization"
BEARER_SCHEME = "Bearer"
MISSING_HEADER_MESSAGE = "Missing Authorization header"
INVALID_HEADER_MESSAGE = "Invalid Authorization header format. Expected: Bearer <token>"


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity of the caller for the duration of one request."""

    user_id: str
    email: str
    role: Role

    @classmethod
    def from_payload(cls, payload: AccessTokenPayload) -> "AuthenticatedUser":
        return cls(user_id=payload.user_id, email=str(payload.email), role=payload.role)


class AuthService:
    """Verifies bearer credentials with a ``TokenFactory``."""

    def __init__(self, token_factory: TokenFactory) -> None:
        self._token_factory = token_factory

    def verify_auth_header(
        self, auth_header: str | None
    ) -> Result[AccessTokenPayload, ValidationError | AuthenticationError]:
        """Verify an ``Authorization: Bearer <token>`` header value.

        The header must be exactly the scheme, one space and the token. Format
        problems give a ValidationError; token problems give the
        AuthenticationError from ``TokenFactory.verify_access_token``.
        """
        if not auth_header or not auth_header.strip():
            return Err(ValidationError.for_field(AUTHORIZATION_FIELD, MISSING_HEADER_MESSAGE))

        parts = auth_header.split(" ")
        if len(parts) != 2:
            return Err(ValidationError.for_field(AUTHORIZATION_FIELD, INVALID_HEADER_MESSAGE))

        scheme, token = parts
        if scheme != BEARER_SCHEME or not token.strip():
            return Err(ValidationError.for_field(AUTHORIZATION_FIELD, INVALID_HEADER_MESSAGE))

        return self._token_factory.verify_access_token(token)

    @staticmethod
    def check_user_role(user: AuthenticatedUser | AccessTokenPayload | None, allowed_roles: Collection[Role]) -> bool:
        """True if ``user`` holds one of ``allowed_roles`` exactly.

        Role hierarchy is not applied here; list every role that is allowed.
        """
        if user is None or not allowed_roles:
            return False
        return user.role in allowed_roles

    def authorize(
        self, user: AuthenticatedUser | None, allowed_roles: Collection[Role]
    ) -> Result[AuthenticatedUser, AuthenticationError | AuthorizationError]:
        if user is None:
            return Err(AuthenticationError.missing_token())
        if not self.check_user_role(user, allowed_roles):
            return Err(AuthorizationError.insufficient_permissions(allowed_roles, user.role))
        return Ok(user)
