"""Task-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..models import TaskPriority, TaskStatus, normalise_label

TASK_READ_EXAMPLE = {
    "id": "9b2e41c07d3f4a5c8e6a1b2c3d4e5f60",
    "title": "Draft product documentation",
    "description": "Outline sections for the public API guide.",
    "status": TaskStatus.PENDING.value,
    "priority": TaskPriority.HIGH.value,
    "due_date": "2024-02-01T00:00:00Z",
    "user_id": "4f0c9a3e8d2b4c7a9e1f2a3b4c5d6e7f",
    "created_at": "2024-01-01T12:00:00Z",
    "updated_at": "2024-01-02T08:30:00Z",
}

TASK_STATISTICS_EXAMPLE = {
    "total": 3,
    "by_status": {
        TaskStatus.PENDING.value: 1,
        TaskStatus.IN_PROGRESS.value: 1,
        TaskStatus.COMPLETED.value: 1,
    },
}

# Labels stored trimmed, exactly as on create; blank or null leaves them as-is.
_LABEL_FIELDS = ("status", "priority")
# Fields that may be cleared by sending an explicit null.
_CLEARABLE_FIELDS = {"description": "", "due_date": None}


class TaskCreate(BaseModel):
    """Payload for creating a new task."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Draft product documentation",
                "description": "Outline sections for the public API guide.",
                "status": TaskStatus.PENDING.value,
                "priority": TaskPriority.HIGH.value,
                "due_date": "2024-02-01T00:00:00Z",
            }
        }
    )

    title: str = Field(min_length=1, max_length=255)
    description: str = Field(default="", max_length=10_000)
    status: str = Field(default=TaskStatus.PENDING.value, min_length=1, max_length=32)
    priority: str = Field(default=TaskPriority.MEDIUM.value, min_length=1, max_length=32)
    due_date: datetime | None = None


class TaskUpdate(BaseModel):
    """Payload for partially updating an existing task.

    Omitted fields are left unchanged. So are blank strings and nulls sent
    for ``title``, ``status`` and ``priority``. An explicit null for
    ``description`` or ``due_date`` clears that field.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Update API documentation",
                "status": TaskStatus.IN_PROGRESS.value,
            }
        }
    )

    title: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=10_000)
    status: str | None = Field(default=None, max_length=32)
    priority: str | None = Field(default=None, max_length=32)
    due_date: datetime | None = None

    def changes(self) -> dict[str, Any]:
        """Return only the field values that should overwrite stored ones."""
        supplied = self.model_dump(include=self.model_fields_set)
        changes: dict[str, Any] = {}
        title = supplied.get("title")
        if title is not None and title.strip():
            changes["title"] = title
        for name in _LABEL_FIELDS:
            label = normalise_label(supplied.get(name))
            if label is not None:
                changes[name] = label
        for name, cleared in _CLEARABLE_FIELDS.items():
            if name not in supplied:
                continue
            value = supplied[name]
            if value is None:
                changes[name] = cleared
            elif value != "":
                changes[name] = value
        return changes


class TaskRead(BaseModel):
    """Public representation of a task."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={"example": TASK_READ_EXAMPLE},
    )

    id: str
    title: str
    description: str
    status: str
    priority: str
    due_date: datetime | None = None
    user_id: str
    created_at: datetime
    updated_at: datetime


class TaskDeleted(BaseModel):
    """Confirmation returned after a task is removed."""

    message: str = "Task deleted"


class TaskStatistics(BaseModel):
    """Aggregated counts describing the caller's tasks."""

    model_config = ConfigDict(json_schema_extra={"example": TASK_STATISTICS_EXAMPLE})

    total: int = Field(ge=0)
    by_status: dict[str, int] = Field(default_factory=dict)


__all__ = [
    "TaskCreate",
    "TaskDeleted",
    "TaskRead",
    "TaskStatistics",
    "TaskUpdate",
]
