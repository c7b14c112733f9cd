"""Database models."""

from taskboard.models.task import Task, TaskPriority, TaskStatus

__all__ = ["Task", "TaskPriority", "TaskStatus"]
