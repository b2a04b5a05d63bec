"""Schemas describing authentication payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, validate_email

from .user import UserPublic


def _check_email_format(value: str) -> str:
    """Reject malformed addresses but keep the address exactly as sent.

    Emails are stored and compared case-sensitively, so the normalised form
    returned by the validator is discarded.
    """
    validate_email(value)
    return value


class RegisterRequest(BaseModel):
    """Incoming payload for registering a new user."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "jane",
                "email": "jane@example.com",
                "password": "s3cret-pass",
            }
        }
    )

    username: str = Field(min_length=1, max_length=64)
    email: str = Field(max_length=254)
    password: str = Field(min_length=6, max_length=128)

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        return _check_email_format(value)


class LoginRequest(BaseModel):
    """Credentials exchanged for a session token."""

    email: str = Field(max_length=254)
    password: str = Field(min_length=1, max_length=128)

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        return _check_email_format(value)


class RegisterResponse(BaseModel):
    """Response returned after a successful registration."""

    message: str = "User created successfully"
    user: UserPublic


class LoginResponse(BaseModel):
    """Session token issued to an authenticated user."""

    token: str
    token_type: str = Field(default="bearer", frozen=True)
    expires_in: int = Field(description="Token lifetime in seconds")
    user: UserPublic


class TokenPayload(BaseModel):
    """Validated JWT payload."""

    model_config = ConfigDict(extra="ignore")

    sub: str = Field(min_length=1)
    email: str = Field(min_length=1)
    exp: datetime
    iat: datetime
    jti: str


__all__ = [
    "LoginRequest",
    "LoginResponse",
    "RegisterRequest",
    "RegisterResponse",
    "TokenPayload",
]
