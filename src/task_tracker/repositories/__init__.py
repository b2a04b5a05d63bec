"""In-memory repositories encapsulating storage and lock discipline."""

from __future__ import annotations

from .tasks import TaskRepository
from .users import DuplicateUserError, UserRepository

__all__ = ["DuplicateUserError", "TaskRepository", "UserRepository"]
