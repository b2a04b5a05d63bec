"""Repository holding registered user accounts."""

from __future__ import annotations

from collections.abc import Iterator

from ..core.ids import generate_unique_id
from ..models import UserAccount, utcnow
from .base import InMemoryRepository


class DuplicateUserError(Exception):
    """Raised when an email or username is already registered."""

    def __init__(self, field: str) -> None:
        super().__init__(f"A user with this {field} already exists")
        self.field = field


class UserRepository(InMemoryRepository[UserAccount]):
    """Concrete repository for ``UserAccount`` records.

    Accounts are indexed by id, with secondary indexes on email and username
    so uniqueness checks and login lookups are constant time. Both comparisons
    are case-sensitive, exactly as supplied.
    """

    def __init__(self) -> None:
        super().__init__()
        self._accounts: dict[str, UserAccount] = {}
        self._ids_by_email: dict[str, str] = {}
        self._ids_by_username: dict[str, str] = {}

    def _iter_records(self) -> Iterator[UserAccount]:
        return iter(self._accounts.values())

    def _conflicting_field_locked(self, *, email: str, username: str) -> str | None:
        if email in self._ids_by_email:
            return "email"
        if username in self._ids_by_username:
            return "username"
        return None

    def get(self, user_id: str) -> UserAccount | None:
        """Return the account with ``user_id`` if it exists."""
        with self._lock.read():
            return self._accounts.get(user_id)

    def get_by_email(self, email: str) -> UserAccount | None:
        """Return the account registered under ``email`` if it exists."""
        with self._lock.read():
            user_id = self._ids_by_email.get(email)
            return self._accounts.get(user_id) if user_id is not None else None

    def find_conflict(self, *, email: str, username: str) -> str | None:
        """Return ``"email"`` or ``"username"`` when either is already taken."""
        with self._lock.read():
            return self._conflicting_field_locked(email=email, username=username)

    def add(self, *, username: str, email: str, password_hash: str) -> UserAccount:
        """Insert a new account, enforcing uniqueness in the same critical section.

        Raises ``DuplicateUserError`` if the email or username is taken.
        """
        with self._lock.write():
            field = self._conflicting_field_locked(email=email, username=username)
            if field is not None:
                raise DuplicateUserError(field)
            account = UserAccount(
                id=generate_unique_id(self._accounts),
                username=username,
                email=email,
                password_hash=password_hash,
                created_at=utcnow(),
            )
            self._accounts[account.id] = account
            self._ids_by_email[email] = account.id
            self._ids_by_username[username] = account.id
            return account


__all__ = ["DuplicateUserError", "UserRepository"]
