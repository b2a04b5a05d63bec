"""Domain service layer package."""

from __future__ import annotations

from .tasks import TaskService, TaskStatisticsResult
from .tokens import TokenClaims, TokenService
from .users import UserService

__all__ = [
    "TaskService",
    "TaskStatisticsResult",
    "TokenClaims",
    "TokenService",
    "UserService",
]
