"""Reusable FastAPI dependencies."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Header, Request

from .core.config import Settings
from .core.context import bind_user_id
from .errors import UnauthorizedError
from .services import TaskService, TokenService, UserService


@dataclass(slots=True, frozen=True)
class Identity:
    """Authenticated caller recovered from a session token."""

    user_id: str
    email: str


def get_app_settings(request: Request) -> Settings:
    """Return the settings the running application was created with."""

    return request.app.state.settings


def get_user_service(request: Request) -> UserService:
    return request.app.state.users


def get_task_service(request: Request) -> TaskService:
    return request.app.state.tasks


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


SettingsDependency = Annotated[Settings, Depends(get_app_settings)]
UserServiceDependency = Annotated[UserService, Depends(get_user_service)]
TaskServiceDependency = Annotated[TaskService, Depends(get_task_service)]
TokenServiceDependency = Annotated[TokenService, Depends(get_token_service)]


def _extract_bearer_token(authorization: str) -> str | None:
    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token or " " in token:
        return None
    return token


async def require_identity(
    request: Request,
    tokens: TokenServiceDependency,
    authorization: Annotated[str | None, Header()] = None,
) -> Identity:
    """Authenticate the request from its ``Authorization: Bearer`` header.

    The resolved identity is also stored on ``request.state.identity`` and
    bound to the logging context for the rest of the request.
    """

    if not authorization:
        raise UnauthorizedError("Authorization header required.", code="missing_authorization")

    token = _extract_bearer_token(authorization)
    if token is None:
        raise UnauthorizedError("Invalid authorization format.", code="invalid_authorization")

    claims = tokens.validate(token)
    identity = Identity(user_id=claims.user_id, email=claims.email)
    request.state.identity = identity
    bind_user_id(identity.user_id)
    return identity


CurrentIdentityDependency = Annotated[Identity, Depends(require_identity)]


__all__ = [
    "CurrentIdentityDependency",
    "Identity",
    "SettingsDependency",
    "TaskServiceDependency",
    "TokenServiceDependency",
    "UserServiceDependency",
    "get_app_settings",
    "get_task_service",
    "get_token_service",
    "get_user_service",
    "require_identity",
]
