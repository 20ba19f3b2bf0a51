from datetime import datetime
from typing import Optional

from app.models.task import Task, TaskStatus

EMPTY_LIST_MESSAGE = "No tasks found. Create your first task to get started!"


def status_label(status: TaskStatus) -> str:
    return str(status).replace("-", " ", 1)


def format_date(value: datetime) -> str:
    """US short date, e.g. ``Jan 15, 2024``."""
    return f"{value:%b} {value.day}, {value.year}"


def updated_label(task: Task) -> Optional[str]:
    # untouched tasks only show their creation date
    if task.updated_at == task.created_at:
        return None
    return format_date(task.updated_at)
