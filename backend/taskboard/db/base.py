"""SQLAlchemy base and engine configuration."""

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from taskboard.core.settings import get_settings

settings = get_settings()

# Suppress SQLAlchemy engine logging (only show errors)
logging.getLogger("sqlalchemy.engine").setLevel(logging.ERROR)


def make_engine(url: str) -> Engine:
    """Build an engine for ``url`` with the per-dialect connect arguments."""
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False  # needed for SQLite
    return create_engine(
        url,
        connect_args=connect_args,
        pool_pre_ping=not url.startswith("sqlite"),
        echo=False,  # Disable SQL query logging
    )


engine = make_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def get_db():
    """Dependency that yields a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
