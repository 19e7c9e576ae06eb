"""Collection storage backed by SQLAlchemy (SQLite or Postgres)."""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from realty_api.core.errors import StorageError
from realty_api.db.migrations import migrate_schema
from realty_api.db.models import MODELS, RecordMixin
from realty_api.db.session import get_engine, get_session
from realty_api.domain.collections import DECLARED_FIELDS, Record, clean_fields

from .base import addressable_id, check_collection

logger = logging.getLogger(__name__)


def _fits_column(expected: type, value: Any) -> bool:
    if value is None:
        return False
    if expected is bool:
        return isinstance(value, bool)
    return isinstance(value, str)


class SQLRepository:
    """CRUD over one table per collection.

    Declared fields live in their own columns when the value has the column's
    type; anything else (explicit nulls included) is kept in ``extra_fields``
    and merged back on read. Unset columns are left out of the record.
    """

    name = "sql"

    def __init__(self, url: Optional[str] = None) -> None:
        self.url = url

    def _model(self, collection: str) -> type[RecordMixin]:
        return MODELS[check_collection(collection)]

    # -------------------------- lifecycle --------------------------
    def initialize(self) -> None:
        added = migrate_schema(get_engine(self.url))
        if added:
            logger.info("SQL schema upgraded: %s", ", ".join(added))

    def close(self) -> None:
        get_engine(self.url).dispose()

    # -------------------------- mapping --------------------------
    def _to_record(self, collection: str, entity: RecordMixin) -> Record:
        record: Record = {"id": entity.id}
        for field in DECLARED_FIELDS[collection]:
            value = getattr(entity, field)
            if value is not None:
                record[field] = value
        record.update(entity.extra_fields or {})
        return record

    def _assign(self, collection: str, entity: RecordMixin, values: Mapping[str, Any]) -> None:
        declared = DECLARED_FIELDS[collection]
        extra = dict(entity.extra_fields or {})
        for key, value in values.items():
            expected = declared.get(key)
            if expected is not None and _fits_column(expected, value):
                setattr(entity, key, value)
                extra.pop(key, None)
                continue
            if expected is not None:
                setattr(entity, key, None)
            extra[key] = value
        entity.extra_fields = extra

    # -------------------------- CRUD --------------------------
    def list(self, collection: str) -> list[Record]:
        model = self._model(collection)
        try:
            with get_session(self.url) as session:
                rows = session.execute(select(model).order_by(model.id.desc())).scalars().all()
                return [self._to_record(collection, row) for row in rows]
        except SQLAlchemyError as exc:
            raise StorageError(f"list {collection} failed: {exc}") from exc

    def insert(self, collection: str, fields: Mapping[str, Any]) -> int:
        model = self._model(collection)
        entity = model()
        entity.extra_fields = {}
        self._assign(collection, entity, clean_fields(fields))
        try:
            with get_session(self.url) as session:
                session.add(entity)
                session.commit()
                new_id = int(entity.id)
        except IntegrityError as exc:
            raise StorageError(f"constraint violated on {collection}: {exc.orig}") from exc
        except SQLAlchemyError as exc:
            raise StorageError(f"insert into {collection} failed: {exc}") from exc
        return new_id

    def update(self, collection: str, record_id: int, fields: Mapping[str, Any]) -> int:
        model = self._model(collection)
        if not addressable_id(record_id):
            return 0
        try:
            with get_session(self.url) as session:
                entity = session.get(model, record_id)
                if not entity:
                    return 0
                self._assign(collection, entity, clean_fields(fields))
                session.commit()
        except IntegrityError as exc:
            raise StorageError(f"constraint violated on {collection}: {exc.orig}") from exc
        except SQLAlchemyError as exc:
            raise StorageError(f"update {collection} failed: {exc}") from exc
        return 1

    def delete_one(self, collection: str, record_id: int) -> int:
        model = self._model(collection)
        if not addressable_id(record_id):
            return 0
        try:
            with get_session(self.url) as session:
                result = session.execute(delete(model).where(model.id == record_id))
                session.commit()
                changes = int(result.rowcount or 0)
        except SQLAlchemyError as exc:
            raise StorageError(f"delete from {collection} failed: {exc}") from exc
        return changes

    def delete_all(self, collection: str) -> None:
        model = self._model(collection)
        try:
            with get_session(self.url) as session:
                session.execute(delete(model))
                session.commit()
        except SQLAlchemyError as exc:
            raise StorageError(f"clear {collection} failed: {exc}") from exc

    # -------------------------- bulk import --------------------------
    def import_records(self, collection: str, records: list[Record]) -> int:
        """Insert records keeping their ids (used by the JSON -> SQL migration)."""
        model = self._model(collection)
        count = 0
        try:
            with get_session(self.url) as session:
                for record in records:
                    entity = model()
                    entity.extra_fields = {}
                    entity.id = int(record["id"])
                    self._assign(collection, entity, clean_fields(record))
                    session.merge(entity)
                    count += 1
                session.commit()
        except (KeyError, TypeError, ValueError) as exc:
            raise StorageError(f"record without a valid id in {collection}") from exc
        except SQLAlchemyError as exc:
            raise StorageError(f"import into {collection} failed: {exc}") from exc
        return count
