"""Service layer encapsulating owner-scoped task operations."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..errors import NotFoundError, ValidationError
from ..models import Task, TaskPriority, TaskStatus, normalise_label
from ..repositories import TaskRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TaskStatisticsResult:
    """Aggregate statistics for one owner's tasks."""

    total: int
    by_status: dict[str, int]


def _task_not_found() -> NotFoundError:
    return NotFoundError("Task not found.")


class TaskService:
    """High-level business orchestration for ``Task`` records.

    Every operation takes the owner's id. A task belonging to someone else
    is reported exactly like a task that does not exist.
    """

    def __init__(self, repository: TaskRepository | None = None) -> None:
        self._repository = repository or TaskRepository()

    def list_tasks(self, owner_id: str, *, status: str | None = None) -> list[Task]:
        """Return the owner's tasks, most recently created first."""
        return self._repository.list_for_owner(owner_id, status=status)

    def create_task(
        self,
        *,
        owner_id: str,
        title: str,
        description: str = "",
        status: str = TaskStatus.PENDING.value,
        priority: str = TaskPriority.MEDIUM.value,
        due_date: datetime | None = None,
    ) -> Task:
        """Create a new task belonging to the specified owner."""
        if not title.strip():
            raise ValidationError("title: must not be blank")
        task = self._repository.add(
            owner_id=owner_id,
            title=title,
            description=description,
            status=normalise_label(status) or TaskStatus.PENDING.value,
            priority=normalise_label(priority) or TaskPriority.MEDIUM.value,
            due_date=due_date,
        )
        logger.info("Task created", extra={"task_id": task.id, "user_id": owner_id})
        return task

    def get_task(self, owner_id: str, task_id: str) -> Task:
        """Retrieve one of the owner's tasks."""
        task = self._repository.get_for_owner(task_id, owner_id)
        if task is None:
            raise _task_not_found()
        return task

    def update_task(self, owner_id: str, task_id: str, changes: Mapping[str, Any]) -> Task:
        """Overwrite the supplied fields of one of the owner's tasks."""
        task = self._repository.update_for_owner(task_id, owner_id, changes)
        if task is None:
            raise _task_not_found()
        logger.info(
            "Task updated",
            extra={"task_id": task_id, "user_id": owner_id, "fields": sorted(changes)},
        )
        return task

    def delete_task(self, owner_id: str, task_id: str) -> None:
        """Delete one of the owner's tasks."""
        if not self._repository.delete_for_owner(task_id, owner_id):
            raise _task_not_found()
        logger.info("Task deleted", extra={"task_id": task_id, "user_id": owner_id})

    def get_statistics(self, owner_id: str) -> TaskStatisticsResult:
        """Return the owner's task count overall and per status."""
        counts = self._repository.count_by_status(owner_id)
        by_status = {status.value: 0 for status in TaskStatus}
        by_status.update(counts)
        return TaskStatisticsResult(total=sum(counts.values()), by_status=by_status)


__all__ = ["TaskService", "TaskStatisticsResult"]
