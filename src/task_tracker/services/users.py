"""Service layer acting as the credential store."""

from __future__ import annotations

import logging

from ..core.security import DEFAULT_HASH_ROUNDS, dummy_verify, get_password_hash, verify_password
from ..errors import ConflictError, InternalError, NotFoundError, UnauthorizedError
from ..models import User
from ..repositories import DuplicateUserError, UserRepository

logger = logging.getLogger(__name__)

_CONFLICT_MESSAGES = {
    "email": "Email is already registered.",
    "username": "Username is already taken.",
}


class UserService:
    """Registration, password verification and lookup for ``User`` records."""

    def __init__(
        self,
        repository: UserRepository | None = None,
        *,
        hash_rounds: int = DEFAULT_HASH_ROUNDS,
    ) -> None:
        self._repository = repository or UserRepository()
        self._hash_rounds = hash_rounds

    @property
    def repository(self) -> UserRepository:
        """Expose the underlying repository for advanced scenarios."""
        return self._repository

    def register(self, *, username: str, email: str, password: str) -> User:
        """Create a new account, failing with ``ConflictError`` on duplicates.

        A cheap pre-check under the shared lock rejects obvious duplicates
        before paying for the password hash. The authoritative check runs
        again inside the repository's exclusive insert.
        """
        field = self._repository.find_conflict(email=email, username=username)
        if field is not None:
            raise ConflictError(_CONFLICT_MESSAGES[field])

        try:
            password_hash = get_password_hash(password, rounds=self._hash_rounds)
        except (ValueError, RuntimeError) as exc:
            logger.exception("Password hashing failed")
            raise InternalError() from exc

        try:
            account = self._repository.add(
                username=username,
                email=email,
                password_hash=password_hash,
            )
        except DuplicateUserError as exc:
            raise ConflictError(_CONFLICT_MESSAGES[exc.field]) from exc

        logger.info("User registered", extra={"user_id": account.id})
        return account.to_user()

    def authenticate(self, *, email: str, password: str) -> User:
        """Return the user owning ``email`` if ``password`` verifies.

        Unknown emails and wrong passwords fail identically.
        """
        account = self._repository.get_by_email(email)
        if account is None:
            dummy_verify(rounds=self._hash_rounds)
            logger.warning("Authentication failed")
            raise UnauthorizedError("Invalid credentials.", code="invalid_credentials")
        if not verify_password(password, account.password_hash):
            logger.warning("Authentication failed")
            raise UnauthorizedError("Invalid credentials.", code="invalid_credentials")
        return account.to_user()

    def get_user(self, user_id: str) -> User:
        """Fetch a user by id, raising ``NotFoundError`` when absent."""
        account = self._repository.get(user_id)
        if account is None:
            raise NotFoundError("User not found.")
        return account.to_user()


__all__ = ["UserService"]
