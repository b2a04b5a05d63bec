"""Security helpers for password hashing and JWT token management."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any
from uuid import uuid4

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

DEFAULT_HASH_ROUNDS = 12


@dataclass(slots=True, frozen=True)
class GeneratedToken:
    """Represents a generated JWT token with associated metadata."""

    token: str
    expires_at: datetime
    jti: str


@lru_cache(maxsize=None)
def get_password_context(rounds: int = DEFAULT_HASH_ROUNDS) -> CryptContext:
    """Return a bcrypt ``CryptContext`` using ``rounds`` as the cost factor."""

    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def get_password_hash(password: str, *, rounds: int = DEFAULT_HASH_ROUNDS) -> str:
    """Return a salted bcrypt hash of ``password``."""

    return get_password_context(rounds).hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against its hashed counterpart."""

    return get_password_context().verify(plain_password, hashed_password)


def dummy_verify(*, rounds: int = DEFAULT_HASH_ROUNDS) -> None:
    """Spend the time of a real verification without a stored hash.

    Used when the account being authenticated does not exist so response
    timing matches a failed password check.
    """

    get_password_context(rounds).dummy_verify()


def create_token(
    *,
    subject: str,
    claims: dict[str, Any],
    secret: str,
    algorithm: str,
    expires_delta: timedelta,
) -> GeneratedToken:
    """Sign a JWT for ``subject`` carrying ``claims`` and an expiry."""

    now = datetime.now(timezone.utc)
    expire = now + expires_delta
    payload: dict[str, Any] = {
        **claims,
        "sub": subject,
        "iat": now,
        "exp": expire,
        "jti": uuid4().hex,
    }
    token = jwt.encode(payload, secret, algorithm=algorithm)
    return GeneratedToken(token=token, expires_at=expire, jti=payload["jti"])


def decode_token(*, token: str, secret: str, algorithm: str) -> dict[str, Any]:
    """Decode a JWT token and return its payload.

    Only ``algorithm`` is accepted, so a token whose header names any other
    algorithm (including ``none``) is rejected with ``JWTError``.
    """

    return jwt.decode(token, secret, algorithms=[algorithm])


__all__ = [
    "DEFAULT_HASH_ROUNDS",
    "ExpiredSignatureError",
    "GeneratedToken",
    "JWTError",
    "create_token",
    "decode_token",
    "dummy_verify",
    "get_password_context",
    "get_password_hash",
    "verify_password",
]
