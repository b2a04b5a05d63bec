"""Task domain records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .common import utcnow


class TaskStatus(str, Enum):
    """Well-known task states. Stored status values are open strings."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    """Well-known task priorities. Stored priority values are open strings."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(slots=True, frozen=True)
class Task:
    """Immutable snapshot of a task owned by exactly one user."""

    id: str
    user_id: str
    title: str
    description: str = ""
    status: str = TaskStatus.PENDING.value
    priority: str = TaskPriority.MEDIUM.value
    due_date: datetime | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


def normalise_label(value: str | None) -> str | None:
    """Return a status or priority without surrounding whitespace, or ``None`` if blank."""
    if value is None:
        return None
    return value.strip() or None


# Fields a task owner may change after creation.
UPDATABLE_TASK_FIELDS = frozenset({"title", "description", "status", "priority", "due_date"})


__all__ = ["Task", "TaskPriority", "TaskStatus", "UPDATABLE_TASK_FIELDS", "normalise_label"]
