"""Seed the database with sample tasks for local development."""

from datetime import date, timedelta

from taskboard.db.base import SessionLocal
from taskboard.db.init_db import init_db
from taskboard.db.task_store import TaskStore
from taskboard.models.task import Task, TaskPriority, TaskStatus
from taskboard.schemas.task import TaskCreate


def sample_tasks(today: date) -> list[TaskCreate]:
    """Sample tasks spread over the three board columns."""
    return [
        TaskCreate(
            title="Morning standup meeting",
            description="Daily team sync",
            priority=TaskPriority.HIGH.value,
            status=TaskStatus.COMPLETED.value,
            assigned_to="Priya",
            due_date=today,
            tags=["meetings"],
        ),
        TaskCreate(
            title="Review pull requests",
            description="Code review for authentication module",
            priority=TaskPriority.MEDIUM.value,
            status=TaskStatus.IN_PROGRESS.value,
            assigned_to="Marco",
            due_date=today + timedelta(days=1),
            tags=["backend", "review"],
            subtasks=[
                {"text": "Auth middleware", "completed": True},
                {"text": "Token refresh"},
            ],
        ),
        TaskCreate(
            title="Update documentation",
            description="API docs for new endpoints",
            priority=TaskPriority.LOW.value,
            status=TaskStatus.TODO.value,
            due_date=today + timedelta(days=3),
            tags=["docs"],
        ),
        TaskCreate(
            title="Quarterly report",
            description="Collect metrics for Q4 review",
            priority=TaskPriority.HIGH.value,
            status=TaskStatus.TODO.value,
            assigned_to="Priya",
            due_date=today - timedelta(days=2),
            tags=["reporting"],
            subtasks=[
                {"text": "Export board stats"},
                {"text": "Draft summary"},
                {"text": "Send to leads"},
            ],
        ),
        TaskCreate(
            title="Setup CI/CD pipeline",
            description="Configure GitHub Actions",
            priority=TaskPriority.MEDIUM.value,
            status=TaskStatus.COMPLETED.value,
            assigned_to="Marco",
            due_date=today - timedelta(days=5),
            tags=["devops"],
        ),
    ]


def seed_tasks() -> int:
    """Replace existing tasks with the sample set; returns how many were added."""
    init_db()
    db = SessionLocal()
    try:
        # Clear existing tasks
        db.query(Task).delete()
        db.commit()

        store = TaskStore(db)
        mock_tasks = sample_tasks(date.today())
        for task_in in mock_tasks:
            store.create(task_in)

        count = len(mock_tasks)
        print(f"✅ Successfully seeded {count} sample tasks")
        return count
    finally:
        db.close()


if __name__ == "__main__":
    seed_tasks()
