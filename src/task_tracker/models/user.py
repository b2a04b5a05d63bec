"""User domain records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .common import utcnow


@dataclass(slots=True, frozen=True)
class User:
    """Public view of a registered user. Never carries credentials."""

    id: str
    username: str
    email: str
    created_at: datetime


@dataclass(slots=True, frozen=True)
class UserAccount:
    """Stored user record, including the password hash."""

    id: str
    username: str
    email: str
    password_hash: str = field(repr=False)
    created_at: datetime = field(default_factory=utcnow)

    def to_user(self) -> User:
        """Return the credential-free view of this account."""
        return User(
            id=self.id,
            username=self.username,
            email=self.email,
            created_at=self.created_at,
        )


__all__ = ["User", "UserAccount"]
