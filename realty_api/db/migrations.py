"""Idempotent schema migration for the SQL backend.

Creates missing tables, then adds any declared column an older database
lacks (databases created before ``text``, ``transactionType``,
``extra_fields``, ... existed). Failures raise instead of being ignored.
"""
from __future__ import annotations

import logging

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from realty_api.core.errors import StorageError

from . import models  # noqa: F401  # ensure models are imported for metadata
from .session import Base

logger = logging.getLogger(__name__)


def _add_column_sql(engine: Engine, table, column) -> str:
    preparer = engine.dialect.identifier_preparer
    col_type = column.type.compile(dialect=engine.dialect)
    return f"ALTER TABLE {preparer.format_table(table)} ADD COLUMN {preparer.format_column(column)} {col_type}"


def migrate_schema(engine: Engine) -> list[str]:
    """Bring the database up to the declared models; return added ``table.column`` names."""
    added: list[str] = []
    try:
        Base.metadata.create_all(bind=engine)
        inspector = inspect(engine)
        for table in Base.metadata.sorted_tables:
            existing = {col["name"] for col in inspector.get_columns(table.name)}
            missing = [column for column in table.columns if column.name not in existing and not column.primary_key]
            if not missing:
                continue
            with engine.begin() as conn:
                for column in missing:
                    conn.execute(text(_add_column_sql(engine, table, column)))
                    added.append(f"{table.name}.{column.name}")
                    logger.info("Added column %s.%s", table.name, column.name)
    except SQLAlchemyError as exc:
        raise StorageError(f"schema migration failed: {exc}") from exc
    return added
