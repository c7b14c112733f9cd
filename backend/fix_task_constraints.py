"""Repair tasks with out-of-range priority/status values, then re-apply the constraints."""

import sys

from sqlalchemy import update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from taskboard.core.errors import SchemaInitError, classify_store_error
from taskboard.db.base import engine
from taskboard.db.init_db import ensure_schema
from taskboard.models.task import (
    VALID_PRIORITIES,
    VALID_STATUSES,
    Task,
    TaskPriority,
    TaskStatus,
    utcnow,
)


def repair_invalid_values(bind: Engine) -> dict:
    """Reset invalid priorities to Medium and invalid statuses to To Do."""
    table = Task.__table__
    with bind.begin() as conn:
        priority_result = conn.execute(
            update(table)
            .where(table.c.priority.not_in(VALID_PRIORITIES))
            .values(priority=TaskPriority.MEDIUM.value, updated_at=utcnow())
        )
        status_result = conn.execute(
            update(table)
            .where(table.c.status.not_in(VALID_STATUSES))
            .values(status=TaskStatus.TODO.value, updated_at=utcnow())
        )
    return {"priority": priority_result.rowcount, "status": status_result.rowcount}


def fix_constraints(bind: Engine = engine) -> dict:
    print("Starting repair: invalid task priority/status values")

    counts = repair_invalid_values(bind)
    print(f"✓ Updated {counts['priority']} task(s) with invalid priority → \"{TaskPriority.MEDIUM.value}\"")
    print(f"✓ Updated {counts['status']} task(s) with invalid status → \"{TaskStatus.TODO.value}\"")

    print("Re-applying table constraints...")
    ensure_schema(bind)
    print(f"✓ Priority must be one of: {', '.join(VALID_PRIORITIES)}")
    print(f"✓ Status must be one of: {', '.join(VALID_STATUSES)}")
    return counts


if __name__ == "__main__":
    try:
        fix_constraints()
    except SchemaInitError as e:
        print(f"❌ Repair failed: {e.message}")
        print(f"   {e.details}")
        sys.exit(1)
    except SQLAlchemyError as e:
        error = classify_store_error(e, "repair tasks")
        print(f"❌ Repair failed: {error.message}")
        if error.hint:
            print(f"⚠ {error.hint}")
        sys.exit(1)
