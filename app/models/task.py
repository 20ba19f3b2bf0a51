"""Task records and the pure transitions of the task collection.

Every function here takes a ``TaskState`` and returns a new one; nothing is
mutated in place. ``app.store.TaskStore`` is the only holder of the current
state.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import StrEnum
from typing import Any, Iterable, Mapping, Optional

from app.errors import NoEditTarget, TaskNotFound, TaskValidationError


class TaskStatus(StrEnum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


MUTABLE_FIELDS = ("title", "description", "status", "priority")


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class TaskStats:
    total: int
    pending: int
    in_progress: int
    completed: int


@dataclass(frozen=True)
class TaskState:
    """Ordered collection (most recent first) plus the task being edited."""

    tasks: tuple[Task, ...] = ()
    editing_id: Optional[str] = None

    def find(self, task_id: str) -> Optional[Task]:
        return next((t for t in self.tasks if t.id == task_id), None)

    @property
    def editing(self) -> Optional[Task]:
        if self.editing_id is None:
            return None
        return self.find(self.editing_id)


def _clean_fields(data: Mapping[str, Any]) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    for key in MUTABLE_FIELDS:
        if key not in data or data[key] is None:
            continue
        value = data[key]
        try:
            if key == "title":
                value = str(value).strip()
                if not value:
                    raise TaskValidationError("title cannot be empty")
            elif key == "description":
                value = str(value)
            elif key == "status":
                value = TaskStatus(value)
            else:
                value = TaskPriority(value)
        except ValueError as exc:
            raise TaskValidationError(f"invalid {key}: {value!r}") from exc
        fields[key] = value
    return fields


def new_task_id(state: TaskState, now: datetime) -> str:
    """Millisecond timestamp id, bumped until it is free in ``state``."""
    taken = {t.id for t in state.tasks}
    candidate = int(now.timestamp() * 1000)
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)


def create_task(state: TaskState, data: Mapping[str, Any], now: datetime) -> tuple[TaskState, Task]:
    fields = _clean_fields(data)
    if "title" not in fields:
        raise TaskValidationError("title cannot be empty")
    task = Task(
        id=new_task_id(state, now),
        title=fields["title"],
        description=fields.get("description", ""),
        status=fields.get("status", TaskStatus.PENDING),
        priority=fields.get("priority", TaskPriority.MEDIUM),
        created_at=now,
        updated_at=now,
    )
    return replace(state, tasks=(task,) + state.tasks), task


def begin_edit(state: TaskState, task_id: str) -> TaskState:
    if state.find(task_id) is None:
        raise TaskNotFound()
    return replace(state, editing_id=task_id)


def cancel_edit(state: TaskState) -> TaskState:
    return replace(state, editing_id=None)


def update_task(
    state: TaskState, task_id: str, data: Mapping[str, Any], now: datetime
) -> tuple[TaskState, Task]:
    """Apply the submitted fields to the task being edited.

    Only the keys present in ``data`` change; ``id`` and ``created_at`` never
    do. ``updated_at`` is clamped so it cannot fall behind ``created_at``.
    """
    target = state.editing
    if target is None or target.id != task_id:
        raise NoEditTarget()
    fields = _clean_fields(data)
    updated = replace(target, **fields, updated_at=max(now, target.created_at))
    tasks = tuple(updated if t.id == task_id else t for t in state.tasks)
    return TaskState(tasks=tasks, editing_id=None), updated


def delete_task(state: TaskState, task_id: str) -> tuple[TaskState, Optional[Task]]:
    removed = state.find(task_id)
    if removed is None:
        return state, None
    editing_id = None if state.editing_id == task_id else state.editing_id
    tasks = tuple(t for t in state.tasks if t.id != task_id)
    return TaskState(tasks=tasks, editing_id=editing_id), removed


def compute_stats(tasks: Iterable[Task]) -> TaskStats:
    counts = {status: 0 for status in TaskStatus}
    total = 0
    for task in tasks:
        counts[task.status] += 1
        total += 1
    return TaskStats(
        total=total,
        pending=counts[TaskStatus.PENDING],
        in_progress=counts[TaskStatus.IN_PROGRESS],
        completed=counts[TaskStatus.COMPLETED],
    )
