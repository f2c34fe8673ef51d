"""Refresh token entity.

A refresh token is the persisted half of a login session. It wraps the signed
JWT together with its identity and expiry so that it can be looked up,
rotated and revoked.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from teampulse.domain.errors import ValidationError
from teampulse.domain.result import Err, Ok, Result, combine
from teampulse.domain.value_objects import (
    RefreshTokenId,
    UserId,
    parse_refresh_token_id,
    parse_user_id,
)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class RefreshToken:
    """Refresh token entity.

    Never mutated: rotation replaces the whole entity. Build instances with
    ``RefreshToken.create``, which validates every field.

    Attributes:
        id: Unique identifier, also carried as the ``tokenId`` claim.
        token: The signed JWT string.
        user_id: Owner of the session.
        expires_at: When the token stops being accepted (UTC).
        created_at: When the token was issued (UTC).
    """

    id: RefreshTokenId
    token: str
    user_id: UserId
    expires_at: datetime
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        id: str,
        token: str,
        user_id: str,
        expires_at: datetime,
        created_at: datetime | None = None,
    ) -> Result["RefreshToken", ValidationError]:
        if not isinstance(token, str) or not token.strip():
            return Err(ValidationError.for_field("token", "Refresh token cannot be empty"))

        if not isinstance(expires_at, datetime):
            return Err(
                ValidationError.invalid_value("expiresAt", expires_at, "Expiration must be a valid datetime")
            )
        if created_at is not None and not isinstance(created_at, datetime):
            return Err(
                ValidationError.invalid_value("createdAt", created_at, "Creation time must be a valid datetime")
            )

        ids = combine({"id": parse_refresh_token_id(id), "user_id": parse_user_id(user_id)})
        if isinstance(ids, Err):
            return ids

        return Ok(
            cls(
                id=ids.value["id"],
                token=token,
                user_id=ids.value["user_id"],
                expires_at=_as_utc(expires_at),
                created_at=_as_utc(created_at) if created_at else datetime.now(timezone.utc),
            )
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        """True once the current time has reached ``expires_at``."""
        now = now or datetime.now(timezone.utc)
        return now >= self.expires_at

    def is_valid(self, now: datetime | None = None) -> bool:
        return not self.is_expired(now)
