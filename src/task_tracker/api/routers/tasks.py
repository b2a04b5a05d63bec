"""Routes handling owner-scoped task CRUD operations."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query, status

from ...deps import CurrentIdentityDependency, TaskServiceDependency
from ...models import Task
from ...schemas import TaskCreate, TaskDeleted, TaskRead, TaskStatistics, TaskUpdate

router = APIRouter(prefix="/tasks", tags=["tasks"])

StatusQuery = Annotated[
    str | None,
    Query(description="Filter results to tasks matching the supplied status."),
]


def _map_task(task: Task) -> TaskRead:
    return TaskRead.model_validate(task)


@router.get(
    "",
    response_model=list[TaskRead],
    summary="List the caller's tasks, most recent first",
)
def list_tasks(
    identity: CurrentIdentityDependency,
    tasks: TaskServiceDependency,
    status: StatusQuery = None,
) -> list[TaskRead]:
    return [_map_task(task) for task in tasks.list_tasks(identity.user_id, status=status)]


@router.post(
    "",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new task",
)
def create_task(
    payload: TaskCreate,
    identity: CurrentIdentityDependency,
    tasks: TaskServiceDependency,
) -> TaskRead:
    task = tasks.create_task(
        owner_id=identity.user_id,
        title=payload.title,
        description=payload.description,
        status=payload.status,
        priority=payload.priority,
        due_date=payload.due_date,
    )
    return _map_task(task)


@router.get(
    "/statistics",
    response_model=TaskStatistics,
    summary="Aggregate the caller's task counts",
)
def get_task_statistics(
    identity: CurrentIdentityDependency,
    tasks: TaskServiceDependency,
) -> TaskStatistics:
    stats = tasks.get_statistics(identity.user_id)
    return TaskStatistics(total=stats.total, by_status=stats.by_status)


@router.get(
    "/{task_id}",
    response_model=TaskRead,
    summary="Retrieve a task by id",
)
def get_task(
    task_id: str,
    identity: CurrentIdentityDependency,
    tasks: TaskServiceDependency,
) -> TaskRead:
    return _map_task(tasks.get_task(identity.user_id, task_id))


@router.put(
    "/{task_id}",
    response_model=TaskRead,
    summary="Update an existing task",
)
def update_task(
    task_id: str,
    payload: TaskUpdate,
    identity: CurrentIdentityDependency,
    tasks: TaskServiceDependency,
) -> TaskRead:
    return _map_task(tasks.update_task(identity.user_id, task_id, payload.changes()))


@router.delete(
    "/{task_id}",
    response_model=TaskDeleted,
    summary="Delete a task",
)
def delete_task(
    task_id: str,
    identity: CurrentIdentityDependency,
    tasks: TaskServiceDependency,
) -> TaskDeleted:
    tasks.delete_task(identity.user_id, task_id)
    return TaskDeleted()
