# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from taskboard.core.settings import get_settings
from taskboard.db.base import get_db, make_engine
from taskboard.db.init_db import ensure_schema
from taskboard.db.task_store import TaskStore


@pytest.fixture()
def api() -> str:
    """Prefix the routers are mounted under."""
    return get_settings().api_prefix


@pytest.fixture()
def bare_engine(tmp_path: Path) -> Iterator[Engine]:
    """Engine on a fresh SQLite file with no schema at all."""
    engine = make_engine(f"sqlite:///{tmp_path / 'tasks.sqlite3'}")
    yield engine
    engine.dispose()


@pytest.fixture()
def engine(bare_engine: Engine) -> Engine:
    ensure_schema(bare_engine)
    return bare_engine


@pytest.fixture()
def db(engine: Engine) -> Iterator[Session]:
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def store(db: Session) -> TaskStore:
    return TaskStore(db)


def _client_for(engine: Engine) -> Iterator[TestClient]:
    from taskboard.main import app

    testing_session = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = testing_session()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    # Not used as a context manager, so the startup hook never touches the real database
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def client(engine: Engine) -> Iterator[TestClient]:
    yield from _client_for(engine)


@pytest.fixture()
def bare_client(bare_engine: Engine) -> Iterator[TestClient]:
    """Client whose database was never initialized."""
    yield from _client_for(bare_engine)
