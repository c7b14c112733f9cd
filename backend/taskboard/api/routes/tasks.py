"""CRUD API endpoints for tasks."""

from fastapi import APIRouter, Depends, Query, status

from taskboard.api.deps import get_task_store
from taskboard.db.task_store import TaskStore
from taskboard.schemas.task import (
    TaskCreate,
    TaskDeleteResponse,
    TaskResponse,
    TaskStatsResponse,
    TaskUpdate,
)

router = APIRouter()


@router.get("/tasks", response_model=list[TaskResponse])
def list_tasks(
    status_filter: str | None = Query(None, alias="status"),
    priority_filter: str | None = Query(None, alias="priority"),
    search: str | None = None,
    store: TaskStore = Depends(get_task_store),
) -> list[TaskResponse]:
    """List all tasks, most recent first, with optional filters."""
    tasks = store.list_all(status=status_filter, priority=priority_filter, search=search)
    return [TaskResponse.from_task(task) for task in tasks]


# Registered before /tasks/{task_id} so "stats" is not taken for an id
@router.get("/tasks/stats/summary", response_model=TaskStatsResponse)
def get_task_stats(store: TaskStore = Depends(get_task_store)) -> dict:
    """Get summary statistics for tasks."""
    return store.stats_summary()


@router.get("/tasks/{task_id}", response_model=TaskResponse)
def get_task(task_id: str, store: TaskStore = Depends(get_task_store)) -> TaskResponse:
    """Get a specific task by ID."""
    return TaskResponse.from_task(store.get_by_id(task_id))


@router.post("/tasks", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(task_in: TaskCreate, store: TaskStore = Depends(get_task_store)) -> TaskResponse:
    """Create a new task."""
    return TaskResponse.from_task(store.create(task_in))


@router.put("/tasks/{task_id}", response_model=TaskResponse)
@router.patch("/tasks/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: str, task_update: TaskUpdate, store: TaskStore = Depends(get_task_store)
) -> TaskResponse:
    """Update a task (partial update)."""
    return TaskResponse.from_task(store.update(task_id, task_update))


@router.delete("/tasks/{task_id}", response_model=TaskDeleteResponse)
def delete_task(task_id: str, store: TaskStore = Depends(get_task_store)) -> TaskDeleteResponse:
    """Delete a task and return the removed record."""
    task = store.delete(task_id)
    return TaskDeleteResponse(message="Task deleted successfully", task=TaskResponse.from_task(task))
