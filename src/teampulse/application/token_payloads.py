"""Decoded JWT payload schemas.

The signature and standard claims are checked by PyJWT; these models validate
the application claims that follow (UUID ids, email format, role).
"""

import uuid

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from teampulse.domain.value_objects import Role


def _validate_uuid(value: str) -> str:
    uuid.UUID(value)
    return value


class _TokenClaims(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    iat: int
    exp: int
    iss: str
    aud: str


class AccessTokenPayload(_TokenClaims):
    """Claims of an access token."""

    user_id: str = Field(alias="userId")
    email: EmailStr
    role: Role

    @field_validator("user_id")
    @classmethod
    def validate_user_id(cls, v: str) -> str:
        return _validate_uuid(v)


class RefreshTokenPayload(_TokenClaims):
    """Claims of a refresh token."""

    user_id: str = Field(alias="userId")
    token_id: str = Field(alias="tokenId")

    @field_validator("user_id", "token_id")
    @classmethod
    def validate_ids(cls, v: str) -> str:
        return _validate_uuid(v)
