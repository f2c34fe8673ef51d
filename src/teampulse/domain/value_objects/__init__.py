"""Value objects for TeamPulse.

Validated wrappers around primitives. Each type has exactly one constructor
function that performs its validation and returns a Result.
"""

from teampulse.domain.value_objects.email import Email
from teampulse.domain.value_objects.identifiers import (
    RefreshTokenId,
    UserId,
    new_refresh_token_id,
    parse_refresh_token_id,
    parse_user_id,
)
from teampulse.domain.value_objects.role import Role

__all__ = [
    "Email",
    "RefreshTokenId",
    "Role",
    "UserId",
    "new_refresh_token_id",
    "parse_refresh_token_id",
    "parse_user_id",
]
