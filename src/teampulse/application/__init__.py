"""Application layer: token issuance and the authentication use cases."""

from teampulse.application.token_factory import TokenFactory
from teampulse.application.token_payloads import AccessTokenPayload, RefreshTokenPayload

__all__ = [
    "AccessTokenPayload",
    "RefreshTokenPayload",
    "TokenFactory",
]
