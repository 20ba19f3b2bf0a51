from dataclasses import asdict
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from app.models.task import Task, TaskPriority, TaskStats, TaskStatus
from app.schemas.notification import Notification
from app.utils.display import format_date, status_label, updated_label


def _title_not_empty(v: Optional[str]) -> Optional[str]:
    if v is not None and not v.strip():
        raise ValueError("title cannot be empty")
    return v.strip() if v is not None else v


class TaskCreate(BaseModel):
    title: str
    description: Optional[str] = ""
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v):
        return _title_not_empty(v)


class TaskUpdate(BaseModel):
    """Edit-form submission; fields left out keep their current value."""

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v):
        return _title_not_empty(v)


class TaskOut(BaseModel):
    id: str
    title: str
    description: str = ""
    status: TaskStatus
    priority: TaskPriority
    created_at: datetime
    updated_at: datetime
    status_label: str
    created_label: str
    updated_label: Optional[str] = None

    @classmethod
    def from_task(cls, task: Task) -> "TaskOut":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status,
            priority=task.priority,
            created_at=task.created_at,
            updated_at=task.updated_at,
            status_label=status_label(task.status),
            created_label=format_date(task.created_at),
            updated_label=updated_label(task),
        )


class StatsOut(BaseModel):
    total: int
    pending: int
    in_progress: int
    completed: int

    @classmethod
    def from_stats(cls, stats: TaskStats) -> "StatsOut":
        return cls(**asdict(stats))


class TaskListOut(BaseModel):
    items: list[TaskOut]
    stats: StatsOut
    editing_id: Optional[str] = None
    empty_message: Optional[str] = None


class TaskResult(BaseModel):
    task: Optional[TaskOut] = None
    notification: Optional[Notification] = None
