"""Quick script to check the tasks table, its structure and its constraints."""

import sys

from sqlalchemy import func, inspect, select
from sqlalchemy.exc import SQLAlchemyError

from taskboard.core.errors import classify_store_error
from taskboard.db.base import engine
from taskboard.models.task import Task


def check_database() -> int:
    try:
        inspector = inspect(engine)
        tables = inspector.get_table_names()
    except SQLAlchemyError as exc:
        error = classify_store_error(exc, "connect to the database")
        print(f"❌ Database check failed: {error.message}")
        print(f"   {error.details}")
        if error.hint:
            print(f"\n⚠ {error.hint}")
        return 1

    print(f"✓ Connected to {engine.dialect.name} database")
    print("\n📊 Database Tables:")
    for table in tables:
        print(f"  - {table}")

    if Task.__tablename__ not in tables:
        print(f"\n❌ {Task.__tablename__} table NOT found")
        print("\nTo create the table, run:")
        print("  python -m taskboard.db.init_db")
        return 1

    with engine.connect() as conn:
        count = conn.execute(select(func.count()).select_from(Task.__table__)).scalar()
    print(f"\n✅ {Task.__tablename__} table exists with {count} tasks")

    print(f"\n📋 {Task.__tablename__} columns:")
    for col in inspector.get_columns(Task.__tablename__):
        nullable = "NULL" if col["nullable"] else "NOT NULL"
        print(f"  - {col['name']}: {col['type']} {nullable}")

    print("\n🔒 Check constraints:")
    for constraint in inspector.get_check_constraints(Task.__tablename__):
        print(f"  - {constraint['name']}: {constraint['sqltext']}")

    print("\n🗂  Indexes:")
    for index in inspector.get_indexes(Task.__tablename__):
        print(f"  - {index['name']}: {', '.join(index['column_names'])}")
    return 0


if __name__ == "__main__":
    sys.exit(check_database())
