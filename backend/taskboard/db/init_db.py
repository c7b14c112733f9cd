"""Database initialization utilities.

Every step is idempotent, so this is safe to run on each process start and
from several processes at once.
"""

import logging

from sqlalchemy import inspect, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from taskboard.core.errors import CONNECTION_HINT, SchemaInitError
from taskboard.db.base import Base, engine
from taskboard.models.task import (
    PRIORITY_CHECK_NAME,
    STATUS_CHECK_NAME,
    STATUS_INDEX_NAME,
    VALID_PRIORITIES,
    VALID_STATUSES,
    Task,
    check_clause,
)

logger = logging.getLogger(__name__)

# Columns introduced after the table first shipped
LATE_COLUMNS = ("tags", "subtasks")

_initialized = False


def _add_missing_columns(conn: Connection) -> None:
    existing = {column["name"] for column in inspect(conn).get_columns(Task.__tablename__)}
    for name in LATE_COLUMNS:
        if name in existing:
            continue
        column_type = Task.__table__.c[name].type.compile(dialect=conn.dialect)
        conn.execute(text(f"ALTER TABLE {Task.__tablename__} ADD COLUMN {name} {column_type}"))
        logger.info("Added %s column to existing %s table", name, Task.__tablename__)


def _refresh_check_constraints(conn: Connection) -> None:
    if conn.dialect.name != "postgresql":
        # SQLite cannot alter constraints; they are fixed when the table is created
        logger.debug("Skipping check constraint refresh on %s", conn.dialect.name)
        return

    conn.execute(
        text(
            f"ALTER TABLE {Task.__tablename__} "
            f"DROP CONSTRAINT IF EXISTS {PRIORITY_CHECK_NAME}, "
            f"DROP CONSTRAINT IF EXISTS {STATUS_CHECK_NAME}"
        )
    )
    for name, column, values in (
        (PRIORITY_CHECK_NAME, "priority", VALID_PRIORITIES),
        (STATUS_CHECK_NAME, "status", VALID_STATUSES),
    ):
        conn.execute(
            text(
                f"ALTER TABLE {Task.__tablename__} "
                f"ADD CONSTRAINT {name} CHECK ({check_clause(column, values)})"
            )
        )


def ensure_schema(bind: Engine) -> None:
    """Create or upgrade the tasks table, its constraints and its status index."""
    try:
        Base.metadata.create_all(bind=bind, tables=[Task.__table__])
        with bind.begin() as conn:
            _add_missing_columns(conn)
            _refresh_check_constraints(conn)
            conn.execute(
                text(f"CREATE INDEX IF NOT EXISTS {STATUS_INDEX_NAME} ON {Task.__tablename__} (status)")
            )
    except SQLAlchemyError as exc:
        logger.exception("Database schema initialization failed")
        raise SchemaInitError(
            "Database schema initialization failed",
            details=str(getattr(exc, "orig", None) or exc),
            hint=CONNECTION_HINT,
        ) from exc
    logger.info("Database schema ready (%s)", bind.dialect.name)


def init_db(force: bool = False) -> None:
    """Run the schema step against the application engine once per process."""
    global _initialized
    if _initialized and not force:
        return
    ensure_schema(engine)
    _initialized = True


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s:     %(name)s - %(message)s")
    init_db()
