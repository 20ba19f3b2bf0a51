import random
from datetime import datetime, timedelta, UTC

import pytest

from app.errors import NoEditTarget, TaskNotFound, TaskValidationError
from app.models.task import TaskPriority, TaskStatus, compute_stats
from app.store import TaskStore, demo_tasks

START = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)


class StepClock:
    """Advances by ``step`` on every read."""

    def __init__(self, start=START, step=timedelta(seconds=1)):
        self.now = start
        self.step = step

    def __call__(self):
        current = self.now
        self.now += self.step
        return current


@pytest.fixture
def store():
    return TaskStore(demo_tasks(), clock=StepClock())


def test_demo_tasks_stats(store):
    stats = store.stats()
    assert stats.total == 2
    assert stats.in_progress == 1
    assert stats.pending == 1
    assert stats.completed == 0


def test_create_goes_to_front_and_delete_restores_count(store):
    before = len(store.tasks)
    task = store.create({"title": "  Ship it  ", "priority": "high"})

    assert store.tasks[0] is task
    assert task.title == "Ship it"
    assert task.description == ""
    assert task.status is TaskStatus.PENDING
    assert task.priority is TaskPriority.HIGH
    assert task.created_at == task.updated_at
    assert task.id == str(int(START.timestamp() * 1000))

    removed = store.delete(task.id)
    assert removed == task
    assert len(store.tasks) == before


def test_ids_stay_unique_within_the_same_millisecond():
    store = TaskStore(clock=lambda: START)
    ids = [store.create({"title": f"t{i}"}).id for i in range(5)]
    assert len(set(ids)) == 5


def test_create_requires_title(store):
    with pytest.raises(TaskValidationError):
        store.create({"title": "   "})
    with pytest.raises(TaskValidationError):
        store.create({"description": "no title"})
    with pytest.raises(TaskValidationError):
        store.create({"title": "x", "status": "archived"})
    assert len(store.tasks) == 2


def test_update_changes_only_submitted_fields(store):
    original = store.tasks[1]
    store.begin_edit(original.id)

    updated = store.update(original.id, {"status": "completed"})

    assert updated.id == original.id
    assert updated.created_at == original.created_at
    assert updated.updated_at >= updated.created_at
    assert updated.updated_at > original.updated_at
    assert updated.status is TaskStatus.COMPLETED
    assert updated.title == original.title
    assert updated.description == original.description
    assert updated.priority == original.priority
    assert store.editing is None
    assert store.tasks[1] == updated


def test_update_never_moves_updated_at_before_created_at():
    created = TaskStore(clock=lambda: START).create({"title": "x"})
    store = TaskStore([created], clock=lambda: START - timedelta(days=1))
    store.begin_edit(created.id)
    updated = store.update(created.id, {"title": "y"})
    assert updated.updated_at == created.created_at


def test_update_requires_edit_target(store):
    with pytest.raises(NoEditTarget):
        store.update("1", {"title": "nope"})

    store.begin_edit("2")
    with pytest.raises(NoEditTarget):
        store.update("1", {"title": "wrong target"})
    assert store.tasks[0].title == "Complete Nest.js Assignment"


def test_begin_edit_unknown_task(store):
    with pytest.raises(TaskNotFound):
        store.begin_edit("missing")
    assert store.editing is None


def test_cancel_edit(store):
    store.begin_edit("1")
    assert store.editing.id == "1"
    store.cancel_edit()
    assert store.editing is None


def test_delete_unknown_is_noop(store):
    state = store.state
    assert store.delete("missing") is None
    assert store.state is state


def test_deleting_edited_task_clears_target(store):
    store.begin_edit("1")
    store.delete("1")
    assert store.editing is None
    assert store.state.editing_id is None


@pytest.mark.parametrize("seed", range(10))
def test_stats_partition_total_for_any_sequence(seed):
    rng = random.Random(seed)
    store = TaskStore(demo_tasks(), clock=StepClock())
    statuses = [s.value for s in TaskStatus]

    for _ in range(60):
        op = rng.choice(["create", "update", "delete", "delete-missing"])
        if op == "create":
            store.create({"title": f"task {rng.random()}", "status": rng.choice(statuses)})
        elif op == "update" and store.tasks:
            target = rng.choice(store.tasks)
            store.begin_edit(target.id)
            store.update(target.id, {"status": rng.choice(statuses)})
        elif op == "delete" and store.tasks:
            store.delete(rng.choice(store.tasks).id)
        else:
            store.delete("missing")

        stats = store.stats()
        assert stats.total == len(store.tasks)
        assert stats.pending + stats.in_progress + stats.completed == stats.total
        assert len({t.id for t in store.tasks}) == len(store.tasks)
        assert all(t.updated_at >= t.created_at for t in store.tasks)


def test_compute_stats_empty():
    stats = compute_stats([])
    assert (stats.total, stats.pending, stats.in_progress, stats.completed) == (0, 0, 0, 0)
