"""Task model for the task board."""

from datetime import date, datetime, timezone
from enum import Enum

from sqlalchemy import JSON, CheckConstraint, Date, DateTime, Index, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from taskboard.db.base import Base


class TaskPriority(str, Enum):
    """Task priority levels."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class TaskStatus(str, Enum):
    """Task completion status."""

    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


VALID_PRIORITIES = [priority.value for priority in TaskPriority]
VALID_STATUSES = [task_status.value for task_status in TaskStatus]

PRIORITY_CHECK_NAME = "tasks_priority_check"
STATUS_CHECK_NAME = "tasks_status_check"
STATUS_INDEX_NAME = "idx_tasks_status"


def check_clause(column: str, values: list[str]) -> str:
    """Return the ``column IN (...)`` SQL used by the enum check constraints."""
    quoted = ", ".join(f"'{value}'" for value in values)
    return f"{column} IN ({quoted})"


def utcnow() -> datetime:
    """Naive UTC timestamp, matching what the DateTime columns store."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Task(Base):
    """A single task on the board."""

    __tablename__ = "tasks"
    __table_args__ = (
        CheckConstraint(check_clause("priority", VALID_PRIORITIES), name=PRIORITY_CHECK_NAME),
        CheckConstraint(check_clause("status", VALID_STATUSES), name=STATUS_CHECK_NAME),
        Index(STATUS_INDEX_NAME, "status"),
        # Ids are never reused after a delete
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    priority: Mapped[str] = mapped_column(
        String(20),
        default=TaskPriority.MEDIUM.value,
        server_default=TaskPriority.MEDIUM.value,
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        default=TaskStatus.TODO.value,
        server_default=TaskStatus.TODO.value,
        nullable=False,
    )

    assigned_to: Mapped[str | None] = mapped_column(String(255), nullable=True)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    # Comma-joined, exposed to clients as a list
    tags: Mapped[str | None] = mapped_column(Text, nullable=True)
    subtasks: Mapped[list | None] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"), default=list, nullable=True
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, server_default=func.current_timestamp(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, server_default=func.current_timestamp(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<Task(id={self.id}, title='{self.title}', status={self.status})>"
