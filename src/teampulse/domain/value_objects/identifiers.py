"""Branded identifier types.

Identifiers are plain UUID strings at runtime. The ``NewType`` wrappers keep a
user id from being passed where a refresh-token id is expected; the parse
functions are the only place their format is checked.
"""

import uuid
from typing import NewType

from teampulse.domain.errors import ValidationError
from teampulse.domain.result import Err, Ok, Result

UserId = NewType("UserId", str)
RefreshTokenId = NewType("RefreshTokenId", str)


def _is_uuid(value: object) -> bool:
    if not isinstance(value, str) or not value:
        return False
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


def parse_user_id(value: str) -> Result[UserId, ValidationError]:
    if not _is_uuid(value):
        return Err(ValidationError.invalid_value("userId", value, "User ID must be a valid UUID"))
    return Ok(UserId(value))


def parse_refresh_token_id(value: str) -> Result[RefreshTokenId, ValidationError]:
    if not _is_uuid(value):
        return Err(
            ValidationError.invalid_value("refreshTokenId", value, "Refresh token ID must be a valid UUID")
        )
    return Ok(RefreshTokenId(value))


def new_refresh_token_id() -> RefreshTokenId:
    """Generate a fresh random refresh token id."""
    return RefreshTokenId(str(uuid.uuid4()))
