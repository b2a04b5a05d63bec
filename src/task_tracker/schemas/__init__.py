"""Pydantic schemas for public interfaces."""

from __future__ import annotations

from .auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    TokenPayload,
)
from .system import ErrorResponse, HealthCheckResponse, RootResponse
from .task import TaskCreate, TaskDeleted, TaskRead, TaskStatistics, TaskUpdate
from .user import UserPublic

__all__ = [
    "ErrorResponse",
    "HealthCheckResponse",
    "LoginRequest",
    "LoginResponse",
    "RegisterRequest",
    "RegisterResponse",
    "RootResponse",
    "TaskCreate",
    "TaskDeleted",
    "TaskRead",
    "TaskStatistics",
    "TaskUpdate",
    "TokenPayload",
    "UserPublic",
]
