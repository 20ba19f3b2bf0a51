from fastapi import APIRouter, Depends, Request

from app.errors import NotAuthenticated
from app.schemas.notification import Notification
from app.schemas.task import StatsOut, TaskCreate, TaskListOut, TaskOut, TaskResult, TaskUpdate
from app.store import TaskStore
from app.utils.display import EMPTY_LIST_MESSAGE
from app.workspace import find_shell

router = APIRouter(prefix="/tasks", tags=["tasks"])


def get_dashboard(request: Request) -> TaskStore:
    """The task store of the signed-in workspace; 401 while on the login form.

    Never creates a workspace, so unauthenticated traffic leaves no state behind.
    """
    shell = find_shell(request)
    if shell is None or shell.dashboard is None:
        raise NotAuthenticated()
    return shell.dashboard


@router.get("/", response_model=TaskListOut)
def list_tasks(store: TaskStore = Depends(get_dashboard)):
    items = [TaskOut.from_task(t) for t in store.tasks]
    return {
        "items": items,
        "stats": StatsOut.from_stats(store.stats()),
        "editing_id": store.state.editing_id,
        "empty_message": None if items else EMPTY_LIST_MESSAGE,
    }


@router.get("/stats", response_model=StatsOut)
def read_stats(store: TaskStore = Depends(get_dashboard)):
    return StatsOut.from_stats(store.stats())


@router.post("/", response_model=TaskResult)
def create_task(task: TaskCreate, store: TaskStore = Depends(get_dashboard)):
    new = store.create(task.model_dump())
    return {
        "task": TaskOut.from_task(new),
        "notification": Notification(
            title="Task Created",
            description=f'"{new.title}" has been successfully created',
        ),
    }


# declared before /{task_id} routes so "edit" is never read as a task id
@router.delete("/edit", response_model=TaskResult)
def cancel_edit(store: TaskStore = Depends(get_dashboard)):
    store.cancel_edit()
    return {"task": None}


@router.post("/{task_id}/edit", response_model=TaskResult)
def begin_edit(task_id: str, store: TaskStore = Depends(get_dashboard)):
    return {"task": TaskOut.from_task(store.begin_edit(task_id))}


@router.put("/{task_id}", response_model=TaskResult)
def update_task(task_id: str, task: TaskUpdate, store: TaskStore = Depends(get_dashboard)):
    updated = store.update(task_id, task.model_dump(exclude_unset=True, exclude_none=True))
    return {
        "task": TaskOut.from_task(updated),
        "notification": Notification(
            title="Task Updated",
            description=f'"{updated.title}" has been successfully updated',
        ),
    }


@router.delete("/{task_id}", response_model=TaskResult)
def delete_task(task_id: str, store: TaskStore = Depends(get_dashboard)):
    removed = store.delete(task_id)
    if removed is None:
        # unknown id: nothing to remove, still reported as done
        return {
            "task": None,
            "notification": Notification(title="Task Deleted", description="Task has been successfully deleted"),
        }
    return {
        "task": TaskOut.from_task(removed),
        "notification": Notification(
            title="Task Deleted",
            description=f'"{removed.title}" has been successfully deleted',
        ),
    }
