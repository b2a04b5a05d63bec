from __future__ import annotations

import pytest
from pydantic import ValidationError

from task_tracker.core.config import Settings

SECRET = "unit-test-secret"


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "TASK_TRACKER_JWT_SECRET_KEY",
        "TASK_TRACKER_ENVIRONMENT",
        "TASK_TRACKER_LOG_LEVEL",
        "TASK_TRACKER_PASSWORD_HASH_ROUNDS",
        "TASK_TRACKER_CORS_ALLOW_ORIGINS",
    ):
        monkeypatch.delenv(name, raising=False)


def test_missing_secret_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_blank_secret_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(jwt_secret_key="   ", _env_file=None)


def test_secret_is_read_from_the_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TASK_TRACKER_JWT_SECRET_KEY", "from-env")

    settings = Settings(_env_file=None)

    assert settings.jwt_secret_key == "from-env"


def test_production_defaults() -> None:
    settings = Settings(jwt_secret_key=SECRET, environment="prod", _env_file=None)

    assert settings.environment == "production"
    assert settings.log_level == "INFO"
    assert settings.reload is False
    assert settings.app_port == 8080
    assert settings.jwt_algorithm == "HS256"
    assert settings.access_token_expire_minutes == 24 * 60
    assert settings.password_hash_rounds == 12


def test_test_profile_applies_fast_hashing() -> None:
    settings = Settings(jwt_secret_key=SECRET, environment="testing", _env_file=None)

    assert settings.environment == "test"
    assert settings.log_level == "WARNING"
    assert settings.reload is False
    assert settings.password_hash_rounds == 4


def test_explicit_values_override_the_profile() -> None:
    settings = Settings(
        jwt_secret_key=SECRET,
        environment="test",
        password_hash_rounds=6,
        log_level="debug",
        _env_file=None,
    )

    assert settings.password_hash_rounds == 6
    assert settings.log_level == "DEBUG"


def test_unknown_environment_falls_back_to_development() -> None:
    settings = Settings(jwt_secret_key=SECRET, environment="staging", _env_file=None)

    assert settings.environment == "development"
    assert settings.reload is True


@pytest.mark.parametrize("algorithm", ["RS256", "none", "ES256"])
def test_only_hmac_algorithms_are_accepted(algorithm: str) -> None:
    with pytest.raises(ValidationError):
        Settings(jwt_secret_key=SECRET, jwt_algorithm=algorithm, _env_file=None)


def test_cors_origins_accept_comma_separated_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TASK_TRACKER_CORS_ALLOW_ORIGINS", "http://a.test, http://b.test")

    settings = Settings(jwt_secret_key=SECRET, _env_file=None)

    assert settings.cors_allow_origins == ["http://a.test", "http://b.test"]
