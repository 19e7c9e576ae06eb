"""Utility script to create or upgrade the database schema."""
from __future__ import annotations

from realty_api.core.errors import StorageError

from .migrations import migrate_schema
from .session import get_engine


def create_all() -> list[str]:
    return migrate_schema(get_engine())


if __name__ == "__main__":
    try:
        added = create_all()
        print("Database tables created successfully.")
        for name in added:
            print(f"  added column {name}")
    except StorageError as exc:
        raise SystemExit(f"Failed to create tables: {exc.message}") from exc
