# tests/test_init_db.py

from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

import taskboard.db.init_db as init_db_module
from fix_task_constraints import repair_invalid_values
from taskboard.core.errors import SchemaInitError
from taskboard.db.base import make_engine
from taskboard.db.init_db import ensure_schema
from taskboard.db.task_store import TaskStore
from taskboard.schemas.task import TaskCreate

LEGACY_TABLE = """
CREATE TABLE tasks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title VARCHAR(255) NOT NULL,
    description TEXT,
    priority VARCHAR(20) DEFAULT 'Medium',
    status VARCHAR(20) DEFAULT 'To Do',
    assigned_to VARCHAR(255),
    due_date DATE,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
"""


def test_fresh_schema_has_columns_constraints_and_index(engine: Engine) -> None:
    inspector = inspect(engine)

    columns = {column["name"] for column in inspector.get_columns("tasks")}
    assert columns == {
        "id",
        "title",
        "description",
        "priority",
        "status",
        "assigned_to",
        "due_date",
        "tags",
        "subtasks",
        "created_at",
        "updated_at",
    }
    constraint_names = {c["name"] for c in inspector.get_check_constraints("tasks")}
    assert {"tasks_priority_check", "tasks_status_check"} <= constraint_names
    assert "idx_tasks_status" in {index["name"] for index in inspector.get_indexes("tasks")}


def test_ensure_schema_is_idempotent(engine: Engine) -> None:
    ensure_schema(engine)
    ensure_schema(engine)

    indexes = [i for i in inspect(engine).get_indexes("tasks") if i["name"] == "idx_tasks_status"]
    assert len(indexes) == 1


def test_legacy_table_gains_late_columns(bare_engine: Engine) -> None:
    with bare_engine.begin() as conn:
        conn.execute(text(LEGACY_TABLE))
        conn.execute(text("INSERT INTO tasks (title, priority, status) VALUES ('Old task', 'High', 'To Do')"))

    ensure_schema(bare_engine)

    columns = {column["name"] for column in inspect(bare_engine).get_columns("tasks")}
    assert {"tags", "subtasks"} <= columns

    session = sessionmaker(bind=bare_engine)()
    try:
        store = TaskStore(session)
        (old,) = store.list_all()
        assert old.title == "Old task"
        assert old.tags is None

        created = store.create(
            TaskCreate(title="New task", priority="Low", status="To Do", tags=["x"], subtasks=[{"text": "y"}])
        )
        assert created.tags == "x"
        assert created.subtasks[0]["text"] == "y"
    finally:
        session.close()


def test_repair_resets_out_of_range_values(bare_engine: Engine) -> None:
    with bare_engine.begin() as conn:
        conn.execute(text(LEGACY_TABLE))
        conn.execute(text("INSERT INTO tasks (title, priority, status) VALUES ('a', 'Urgent', 'Done')"))
        conn.execute(text("INSERT INTO tasks (title, priority, status) VALUES ('b', 'Low', 'Completed')"))

    counts = repair_invalid_values(bare_engine)

    assert counts == {"priority": 1, "status": 1}
    with bare_engine.connect() as conn:
        row = conn.execute(text("SELECT priority, status FROM tasks WHERE title = 'a'")).one()
    assert tuple(row) == ("Medium", "To Do")


def test_unreachable_database_raises_schema_init_error(tmp_path: Path) -> None:
    engine = make_engine(f"sqlite:///{tmp_path / 'missing' / 'dir' / 'tasks.sqlite3'}")

    with pytest.raises(SchemaInitError) as excinfo:
        ensure_schema(engine)

    assert excinfo.value.code == "schema_init_failed"
    assert excinfo.value.details


def test_init_db_runs_schema_step_once(monkeypatch: pytest.MonkeyPatch, engine: Engine) -> None:
    calls = []
    monkeypatch.setattr(init_db_module, "engine", engine)
    monkeypatch.setattr(init_db_module, "_initialized", False)
    monkeypatch.setattr(init_db_module, "ensure_schema", lambda bind: calls.append(bind))

    init_db_module.init_db()
    init_db_module.init_db()
    assert calls == [engine]

    init_db_module.init_db(force=True)
    assert calls == [engine, engine]
