"""Repository holding each owner's task collection."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator, Mapping
from dataclasses import replace
from datetime import datetime
from typing import Any

from ..core.ids import generate_unique_id
from ..models import UPDATABLE_TASK_FIELDS, Task, utcnow
from .base import InMemoryRepository


class TaskRepository(InMemoryRepository[Task]):
    """Concrete repository encapsulating ``Task`` storage.

    Tasks are indexed by owner id, then by task id. Every lookup takes the
    owner id, so a task stored under another owner is simply not found.
    Per-owner collections keep insertion order, and insertion happens under
    the write lock, so reversing a collection yields most-recent-first order
    even for tasks created within the same clock tick.
    """

    def __init__(self) -> None:
        super().__init__()
        self._tasks_by_owner: dict[str, dict[str, Task]] = {}
        self._owner_by_task_id: dict[str, str] = {}

    def _iter_records(self) -> Iterator[Task]:
        for collection in self._tasks_by_owner.values():
            yield from collection.values()

    def _get_locked(self, task_id: str, owner_id: str) -> Task | None:
        collection = self._tasks_by_owner.get(owner_id)
        if collection is None:
            return None
        return collection.get(task_id)

    def list_for_owner(self, owner_id: str, *, status: str | None = None) -> list[Task]:
        """Return the owner's tasks, most recently created first."""
        with self._lock.read():
            collection = self._tasks_by_owner.get(owner_id, {})
            tasks = list(reversed(collection.values()))
        if status is not None:
            tasks = [task for task in tasks if task.status == status]
        return tasks

    def get_for_owner(self, task_id: str, owner_id: str) -> Task | None:
        """Retrieve a task by ID ensuring it belongs to the provided owner."""
        with self._lock.read():
            return self._get_locked(task_id, owner_id)

    def add(
        self,
        *,
        owner_id: str,
        title: str,
        description: str,
        status: str,
        priority: str,
        due_date: datetime | None,
    ) -> Task:
        """Store a new task under ``owner_id`` and return it."""
        with self._lock.write():
            now = utcnow()
            task = Task(
                id=generate_unique_id(self._owner_by_task_id),
                user_id=owner_id,
                title=title,
                description=description,
                status=status,
                priority=priority,
                due_date=due_date,
                created_at=now,
                updated_at=now,
            )
            self._tasks_by_owner.setdefault(owner_id, {})[task.id] = task
            self._owner_by_task_id[task.id] = owner_id
            return task

    def update_for_owner(
        self,
        task_id: str,
        owner_id: str,
        changes: Mapping[str, Any],
    ) -> Task | None:
        """Apply ``changes`` to the owner's task, returning ``None`` if it is absent."""
        unknown = set(changes) - UPDATABLE_TASK_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")
        with self._lock.write():
            task = self._get_locked(task_id, owner_id)
            if task is None:
                return None
            if not changes:
                return task
            updated = replace(task, **changes, updated_at=utcnow())
            self._tasks_by_owner[owner_id][task_id] = updated
            return updated

    def delete_for_owner(self, task_id: str, owner_id: str) -> bool:
        """Delete the owner's task, returning ``True`` iff a record was removed."""
        with self._lock.write():
            collection = self._tasks_by_owner.get(owner_id)
            if collection is None or collection.pop(task_id, None) is None:
                return False
            self._owner_by_task_id.pop(task_id, None)
            if not collection:
                del self._tasks_by_owner[owner_id]
            return True

    def count_by_status(self, owner_id: str) -> dict[str, int]:
        """Return the number of the owner's tasks in each status."""
        with self._lock.read():
            collection = self._tasks_by_owner.get(owner_id, {})
            return dict(Counter(task.status for task in collection.values()))


__all__ = ["TaskRepository"]
