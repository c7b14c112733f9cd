"""Pydantic schemas for request/response validation."""

from taskboard.schemas.task import (
    TaskCreate,
    TaskDeleteResponse,
    TaskResponse,
    TaskStatsResponse,
    TaskUpdate,
)

__all__ = ["TaskCreate", "TaskDeleteResponse", "TaskResponse", "TaskStatsResponse", "TaskUpdate"]
