"""Application settings powered by ``pydantic-settings``."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any, Literal, Sequence

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .. import __version__ as package_version

REPOSITORY_ROOT = Path(__file__).resolve().parents[3]

EnvironmentName = Literal["development", "test", "production"]

_ENVIRONMENT_ALIASES: dict[str, EnvironmentName] = {
    "development": "development",
    "dev": "development",
    "local": "development",
    "test": "test",
    "testing": "test",
    "ci": "test",
    "production": "production",
    "prod": "production",
}

_ENVIRONMENT_PROFILES: dict[EnvironmentName, dict[str, Any]] = {
    "development": {
        "log_level": "DEBUG",
        "reload": True,
    },
    "test": {
        "log_level": "WARNING",
        "reload": False,
        "password_hash_rounds": 4,
    },
    "production": {
        "log_level": "INFO",
        "reload": False,
    },
}

SUPPORTED_JWT_ALGORITHMS = ("HS256", "HS384", "HS512")


class Settings(BaseSettings):
    """Runtime configuration for the task tracker service.

    ``jwt_secret_key`` has no default: constructing settings without it fails,
    which in turn stops the application from starting with a forgeable
    signing key.
    """

    model_config = SettingsConfigDict(
        env_prefix="TASK_TRACKER_",
        env_file=REPOSITORY_ROOT / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    project_name: str = "Task Tracker"
    environment: EnvironmentName = "development"
    api_prefix: str = "/api"
    version: str = package_version
    cors_allow_origins: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = False
    cors_allow_methods: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["*"])
    cors_allow_headers: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["*"])
    app_host: str = "0.0.0.0"
    app_port: int = Field(default=8080, ge=1, le=65535)
    log_level: str = "INFO"
    reload: bool = False

    jwt_secret_key: str = Field(min_length=1)
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = Field(default=60 * 24, ge=1)
    password_hash_rounds: int = Field(default=12, ge=4, le=31)

    @field_validator("environment", mode="before")
    @classmethod
    def _normalise_environment(cls, value: object) -> EnvironmentName:
        if isinstance(value, str):
            normalized = value.strip().lower()
        else:
            normalized = ""
        return _ENVIRONMENT_ALIASES.get(normalized, "development")

    @field_validator(
        "cors_allow_origins",
        "cors_allow_methods",
        "cors_allow_headers",
        mode="before",
    )
    @classmethod
    def _coerce_comma_separated(cls, value: object) -> list[str]:
        """Allow comma separated strings for CORS configuration."""
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        if isinstance(value, Sequence):
            return [str(item) for item in value if str(item).strip()]
        return []

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_log_level(cls, value: object) -> str:
        if not isinstance(value, str):
            return "INFO"
        return value.upper()

    @field_validator("jwt_secret_key")
    @classmethod
    def _reject_blank_secret(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("JWT secret key must not be blank.")
        return value

    @field_validator("jwt_algorithm", mode="before")
    @classmethod
    def _ensure_hmac_algorithm(cls, value: object) -> str:
        normalized = str(value).strip().upper()
        if normalized not in SUPPORTED_JWT_ALGORITHMS:
            raise ValueError(
                f"Unsupported JWT algorithm {value!r}; expected one of {', '.join(SUPPORTED_JWT_ALGORITHMS)}."
            )
        return normalized

    @model_validator(mode="after")
    def _apply_environment_profile(self) -> "Settings":
        profile = _ENVIRONMENT_PROFILES[self.environment]
        fields_set = set(getattr(self, "model_fields_set", set()))
        for field_name, value in profile.items():
            if field_name not in fields_set:
                setattr(self, field_name, value)
        return self


@lru_cache()
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance."""
    return Settings()


__all__ = ["EnvironmentName", "SUPPORTED_JWT_ALGORITHMS", "Settings", "get_settings"]
