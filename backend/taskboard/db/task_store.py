"""Task persistence: CRUD and summary counts against the ``tasks`` table."""

import logging
from datetime import date
from enum import Enum

from sqlalchemy import String, cast, func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taskboard.core.errors import TaskNotFound
from taskboard.core.normalize import normalize_subtasks_in, normalize_tags_in
from taskboard.core.validation import validate_enum, validate_required, validate_title
from taskboard.models.task import Task, TaskStatus, utcnow
from taskboard.schemas.task import TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)

# Never cleared by an explicit null, only overwritten by a value
REQUIRED_FIELDS = ("title", "priority", "status")

# Signed 64-bit key range
MIN_KEY = -(2**63)
MAX_KEY = 2**63 - 1


class IdentifierMode(str, Enum):
    """How an identifier taken from the URL is matched against the key."""

    DUAL = "dual"  # integer match, then text match for hyphenated ids
    INTEGER = "integer"
    TEXT = "text"

    @classmethod
    def from_setting(cls, value: str | None) -> "IdentifierMode":
        try:
            return cls((value or cls.DUAL.value).strip().lower())
        except ValueError:
            logger.warning("Unknown TASK_ID_MODE %r, falling back to %s", value, cls.DUAL.value)
            return cls.DUAL


class TaskStore:
    """
    CRUD for tasks over one request-scoped session.

    Validation and normalization happen here, before anything is written,
    so every caller (routes, scripts, seeding) gets the same rules.
    """

    def __init__(self, db: Session, id_mode: IdentifierMode = IdentifierMode.DUAL) -> None:
        self.db = db
        self.id_mode = id_mode

    # ---- identifier resolution ----

    def _lookup_clauses(self, task_id) -> list:
        raw = str(task_id).strip()
        clauses = []
        if self.id_mode in (IdentifierMode.DUAL, IdentifierMode.INTEGER):
            try:
                value = int(raw)
            except ValueError:
                value = None
            # Out-of-range integers can never match a key
            if value is not None and MIN_KEY <= value <= MAX_KEY:
                clauses.append(Task.id == value)
        if self.id_mode is IdentifierMode.TEXT or (self.id_mode is IdentifierMode.DUAL and "-" in raw):
            clauses.append(cast(Task.id, String) == raw)
        return clauses

    def _find(self, task_id) -> Task:
        for clause in self._lookup_clauses(task_id):
            task = self.db.query(Task).filter(clause).first()
            if task is not None:
                return task
        raise TaskNotFound(task_id)

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    # ---- queries ----

    def list_all(
        self,
        status: str | None = None,
        priority: str | None = None,
        search: str | None = None,
    ) -> list[Task]:
        """All tasks, newest first, optionally filtered."""
        # Empty filters mean "all"
        validate_enum(status=status or None, priority=priority or None)
        query = self.db.query(Task)

        if status:
            query = query.filter(Task.status == status)

        if priority:
            query = query.filter(Task.priority == priority)

        if search:
            search_pattern = f"%{search}%"
            query = query.filter(
                or_(
                    Task.title.ilike(search_pattern),
                    Task.description.ilike(search_pattern),
                    Task.assigned_to.ilike(search_pattern),
                    Task.tags.ilike(search_pattern),
                )
            )

        return query.order_by(Task.created_at.desc(), Task.id.desc()).all()

    def get_by_id(self, task_id) -> Task:
        return self._find(task_id)

    def stats_summary(self) -> dict:
        """Total count, count per status, and open tasks past their due date."""
        total = self.db.query(func.count(Task.id)).scalar()
        by_status = self.db.query(Task.status, func.count(Task.id)).group_by(Task.status).all()
        overdue = (
            self.db.query(func.count(Task.id))
            .filter(Task.due_date.isnot(None))
            .filter(Task.due_date < date.today())
            .filter(Task.status != TaskStatus.COMPLETED.value)
            .scalar()
        )
        return {
            "total": total or 0,
            "byStatus": {task_status: count for task_status, count in by_status},
            "overdue": overdue or 0,
        }

    # ---- mutations ----

    def create(self, task_in: TaskCreate) -> Task:
        validate_required(task_in.title, task_in.priority, task_in.status)
        validate_enum(status=task_in.status, priority=task_in.priority)

        now = utcnow()
        task = Task(
            title=task_in.title,
            description=task_in.description,
            priority=task_in.priority,
            status=task_in.status,
            assigned_to=task_in.assigned_to,
            due_date=task_in.due_date,
            tags=normalize_tags_in(task_in.tags),
            subtasks=normalize_subtasks_in(task_in.subtasks),
            created_at=now,
            updated_at=now,
        )
        self.db.add(task)
        self._commit()
        self.db.refresh(task)
        logger.info("Created task id=%s status=%s", task.id, task.status)
        return task

    def update(self, task_id, task_update: TaskUpdate) -> Task:
        """Partial update: fields left out of the request keep their value."""
        update_data = task_update.model_dump(exclude_unset=True)
        validate_enum(status=update_data.get("status"), priority=update_data.get("priority"))
        if update_data.get("title") is not None:
            validate_title(update_data["title"])

        task = self._find(task_id)

        for field in REQUIRED_FIELDS:
            if field in update_data and update_data[field] is None:
                del update_data[field]
        if "tags" in update_data:
            update_data["tags"] = normalize_tags_in(update_data["tags"])
        if "subtasks" in update_data:
            update_data["subtasks"] = normalize_subtasks_in(update_data["subtasks"])

        for field, value in update_data.items():
            setattr(task, field, value)

        task.updated_at = utcnow()
        self._commit()
        self.db.refresh(task)
        logger.info("Updated task id=%s fields=%s", task.id, sorted(update_data))
        return task

    def delete(self, task_id) -> Task:
        """Remove the task permanently and return the removed row."""
        task = self._find(task_id)
        self.db.delete(task)
        self._commit()
        logger.info("Deleted task id=%s", task.id)
        return task
