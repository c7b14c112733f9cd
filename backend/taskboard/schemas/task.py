"""Pydantic schemas for Task CRUD operations."""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskboard.core.normalize import normalize_subtasks_out, normalize_tags_out
from taskboard.models.task import Task


class TaskPayload(BaseModel):
    """Fields a client may send. Everything is optional at this level."""

    model_config = ConfigDict(extra="ignore")

    title: str | None = Field(None, max_length=255)
    description: str | None = None
    priority: str | None = None
    status: str | None = None
    assigned_to: str | None = Field(None, max_length=255)
    due_date: date | None = None
    tags: list[str] | str | None = None
    subtasks: Any = None

    @field_validator("description", "assigned_to", "due_date", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        """An empty string clears an optional field."""
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def stringify_tags(cls, value: Any) -> Any:
        """Tag lists may carry numbers; store them as text, drop nulls."""
        if isinstance(value, (list, tuple)):
            return [str(tag) for tag in value if tag is not None]
        return value


class TaskCreate(TaskPayload):
    """Schema for creating a new task."""

    pass


class TaskUpdate(TaskPayload):
    """Schema for updating an existing task (all fields optional)."""

    pass


class TaskResponse(BaseModel):
    """Schema for task responses."""

    id: int | str
    title: str
    description: str | None = None
    priority: str
    status: str
    assigned_to: str | None = None
    due_date: date | None = None
    tags: list[str] = []
    subtasks: list[dict[str, Any]] = []
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            priority=task.priority,
            status=task.status,
            assigned_to=task.assigned_to,
            due_date=task.due_date,
            tags=normalize_tags_out(task.tags),
            subtasks=normalize_subtasks_out(task.subtasks),
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


class TaskDeleteResponse(BaseModel):
    message: str
    task: TaskResponse


class TaskStatsResponse(BaseModel):
    """Aggregate counts for the dashboard cards."""

    total: int
    byStatus: dict[str, int]
    overdue: int
