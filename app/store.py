import logging
from datetime import datetime, UTC
from typing import Any, Callable, Iterable, Mapping, Optional

from app.models.task import (
    Task,
    TaskPriority,
    TaskState,
    TaskStats,
    TaskStatus,
    begin_edit,
    cancel_edit,
    compute_stats,
    create_task,
    delete_task,
    update_task,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(UTC)


def demo_tasks() -> list[Task]:
    """The two tasks every freshly mounted dashboard starts with."""
    return [
        Task(
            id="1",
            title="Complete Nest.js Assignment",
            description="Build a REST API with CRUD operations, authentication, and database integration",
            status=TaskStatus.IN_PROGRESS,
            priority=TaskPriority.HIGH,
            created_at=datetime(2024, 1, 15, tzinfo=UTC),
            updated_at=datetime(2024, 1, 16, tzinfo=UTC),
        ),
        Task(
            id="2",
            title="Write Unit Tests",
            description="Ensure comprehensive test coverage for all API endpoints",
            status=TaskStatus.PENDING,
            priority=TaskPriority.MEDIUM,
            created_at=datetime(2024, 1, 16, tzinfo=UTC),
            updated_at=datetime(2024, 1, 16, tzinfo=UTC),
        ),
    ]


class TaskStore:
    """Holds the dashboard's task collection and applies transitions to it."""

    def __init__(self, tasks: Iterable[Task] = (), clock: Optional[Clock] = None):
        self._state = TaskState(tasks=tuple(tasks))
        self._clock = clock or _utcnow

    @property
    def state(self) -> TaskState:
        return self._state

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._state.tasks

    @property
    def editing(self) -> Optional[Task]:
        return self._state.editing

    def create(self, data: Mapping[str, Any]) -> Task:
        self._state, task = create_task(self._state, data, self._clock())
        logger.info("task created id=%s title=%r", task.id, task.title)
        return task

    def begin_edit(self, task_id: str) -> Task:
        self._state = begin_edit(self._state, task_id)
        return self._state.editing

    def cancel_edit(self) -> None:
        self._state = cancel_edit(self._state)

    def update(self, task_id: str, data: Mapping[str, Any]) -> Task:
        self._state, task = update_task(self._state, task_id, data, self._clock())
        logger.info("task updated id=%s title=%r", task.id, task.title)
        return task

    def delete(self, task_id: str) -> Optional[Task]:
        self._state, removed = delete_task(self._state, task_id)
        if removed is None:
            logger.debug("delete of unknown task id=%s ignored", task_id)
        else:
            logger.info("task deleted id=%s title=%r", removed.id, removed.title)
        return removed

    def stats(self) -> TaskStats:
        return compute_stats(self._state.tasks)
