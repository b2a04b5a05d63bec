from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from task_tracker.errors import ConflictError, InternalError, NotFoundError, UnauthorizedError
from task_tracker.services import UserService

PASSWORD = "StrongPass123!"


@pytest.fixture
def users() -> UserService:
    return UserService(hash_rounds=4)


def test_register_returns_public_user(users: UserService) -> None:
    user = users.register(username="jane", email="jane@example.com", password=PASSWORD)

    assert user.id
    assert user.username == "jane"
    assert user.email == "jane@example.com"
    assert not hasattr(user, "password_hash")


def test_register_stores_a_bcrypt_hash(users: UserService) -> None:
    user = users.register(username="jane", email="jane@example.com", password=PASSWORD)

    account = users.repository.get(user.id)

    assert account is not None
    assert account.password_hash != PASSWORD
    assert account.password_hash.startswith("$2")
    assert PASSWORD not in repr(account)


def test_duplicate_email_is_rejected(users: UserService) -> None:
    users.register(username="jane", email="jane@example.com", password=PASSWORD)

    with pytest.raises(ConflictError) as excinfo:
        users.register(username="someone-else", email="jane@example.com", password=PASSWORD)

    assert excinfo.value.message == "Email is already registered."
    assert users.repository.count() == 1


def test_duplicate_username_is_rejected(users: UserService) -> None:
    users.register(username="jane", email="jane@example.com", password=PASSWORD)

    with pytest.raises(ConflictError) as excinfo:
        users.register(username="jane", email="other@example.com", password=PASSWORD)

    assert excinfo.value.message == "Username is already taken."


def test_concurrent_registrations_with_one_email_yield_one_account(users: UserService) -> None:
    def attempt(index: int) -> bool:
        try:
            users.register(username=f"user-{index}", email="race@example.com", password=PASSWORD)
        except ConflictError:
            return False
        return True

    with ThreadPoolExecutor(max_workers=8) as executor:
        outcomes = list(executor.map(attempt, range(16)))

    assert outcomes.count(True) == 1
    assert users.repository.count() == 1


def test_authenticate_with_correct_password(users: UserService) -> None:
    registered = users.register(username="jane", email="jane@example.com", password=PASSWORD)

    authenticated = users.authenticate(email="jane@example.com", password=PASSWORD)

    assert authenticated == registered


def test_authenticate_with_wrong_password(users: UserService) -> None:
    users.register(username="jane", email="jane@example.com", password=PASSWORD)

    with pytest.raises(UnauthorizedError) as excinfo:
        users.authenticate(email="jane@example.com", password="not-the-password")

    assert excinfo.value.message == "Invalid credentials."


def test_unknown_email_fails_like_a_wrong_password(users: UserService) -> None:
    users.register(username="jane", email="jane@example.com", password=PASSWORD)

    with pytest.raises(UnauthorizedError) as unknown:
        users.authenticate(email="nobody@example.com", password=PASSWORD)
    with pytest.raises(UnauthorizedError) as wrong:
        users.authenticate(email="jane@example.com", password="wrong-password")

    assert unknown.value.message == wrong.value.message
    assert unknown.value.code == wrong.value.code


def test_get_user(users: UserService) -> None:
    registered = users.register(username="jane", email="jane@example.com", password=PASSWORD)

    assert users.get_user(registered.id) == registered


def test_get_unknown_user(users: UserService) -> None:
    with pytest.raises(NotFoundError):
        users.get_user("missing")


def test_hashing_failure_is_reported_as_internal_error(
    users: UserService,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def _failing_hash(password: str, *, rounds: int) -> str:
        raise ValueError("hash backend unavailable")

    monkeypatch.setattr("task_tracker.services.users.get_password_hash", _failing_hash)

    with pytest.raises(InternalError) as excinfo:
        users.register(username="jane", email="jane@example.com", password=PASSWORD)

    assert excinfo.value.status_code == 500
    assert excinfo.value.message == "Internal server error."
    assert users.repository.count() == 0
