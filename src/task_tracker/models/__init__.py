"""Domain records held by the in-memory stores."""

from __future__ import annotations

from .common import utcnow
from .task import UPDATABLE_TASK_FIELDS, Task, TaskPriority, TaskStatus, normalise_label
from .user import User, UserAccount

__all__ = [
    "Task",
    "TaskPriority",
    "TaskStatus",
    "UPDATABLE_TASK_FIELDS",
    "User",
    "UserAccount",
    "normalise_label",
    "utcnow",
]
