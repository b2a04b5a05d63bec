"""Token service issuing and validating signed session tokens."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from pydantic import ValidationError as PydanticValidationError

from ..core.config import Settings
from ..core.security import ExpiredSignatureError, GeneratedToken, JWTError, create_token, decode_token
from ..errors import InvalidTokenError
from ..models import User
from ..schemas.auth import TokenPayload

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class TokenClaims:
    """Identity claims recovered from a valid session token."""

    user_id: str
    email: str
    expires_at: datetime
    jti: str


class TokenService:
    """Issue and validate HMAC-signed JWT session tokens."""

    def __init__(self, settings: Settings) -> None:
        self._secret = settings.jwt_secret_key
        self._algorithm = settings.jwt_algorithm
        self._lifetime = timedelta(minutes=settings.access_token_expire_minutes)

    @property
    def lifetime(self) -> timedelta:
        """Return how long issued tokens remain valid."""
        return self._lifetime

    def issue(self, user: User, *, expires_delta: timedelta | None = None) -> GeneratedToken:
        """Return a signed token carrying the user's id and email."""
        return create_token(
            subject=user.id,
            claims={"email": user.email},
            secret=self._secret,
            algorithm=self._algorithm,
            expires_delta=expires_delta if expires_delta is not None else self._lifetime,
        )

    def validate(self, token: str) -> TokenClaims:
        """Return the claims of ``token`` or raise ``InvalidTokenError``."""
        try:
            payload = decode_token(token=token, secret=self._secret, algorithm=self._algorithm)
        except ExpiredSignatureError as exc:
            raise InvalidTokenError("Token has expired.", code="token_expired") from exc
        except JWTError as exc:
            logger.warning("Rejected session token", extra={"reason": type(exc).__name__})
            raise InvalidTokenError() from exc

        try:
            token_payload = TokenPayload.model_validate(payload)
        except PydanticValidationError as exc:
            raise InvalidTokenError() from exc

        return TokenClaims(
            user_id=token_payload.sub,
            email=token_payload.email,
            expires_at=token_payload.exp,
            jti=token_payload.jti,
        )


__all__ = ["TokenClaims", "TokenService"]
