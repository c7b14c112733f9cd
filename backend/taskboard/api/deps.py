"""FastAPI dependencies shared by the routers."""

from fastapi import Depends
from sqlalchemy.orm import Session

from taskboard.core.settings import get_settings
from taskboard.db.base import get_db
from taskboard.db.task_store import IdentifierMode, TaskStore


def get_task_store(db: Session = Depends(get_db)) -> TaskStore:
    """Dependency that yields a store bound to the request's session."""
    id_mode = IdentifierMode.from_setting(get_settings().task_id_mode)
    return TaskStore(db, id_mode=id_mode)
