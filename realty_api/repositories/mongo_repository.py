"""Collection storage backed by MongoDB (pymongo).

Documents carry a sequential integer ``id`` allocated from the ``counters``
collection; Mongo's own ``_id`` never leaves this module.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from pymongo import DESCENDING, MongoClient, ReturnDocument
from pymongo.errors import PyMongoError

from realty_api.core.errors import StorageError
from realty_api.domain.collections import COLLECTIONS, UNIQUE_FIELDS, Record, clean_fields

from .base import addressable_id, check_collection

logger = logging.getLogger(__name__)

COUNTERS = "counters"


class MongoRepository:
    """CRUD over one Mongo collection per entity."""

    name = "mongo"

    def __init__(self, uri: Optional[str] = None, db_name: str = "realty", *, database=None) -> None:
        self._client = None
        if database is None:
            self._client = MongoClient(uri, serverSelectionTimeoutMS=5000)
            database = self._client[db_name]
        self.db = database

    def _collection(self, collection: str):
        return self.db[check_collection(collection)]

    # -------------------------- lifecycle --------------------------
    def initialize(self) -> None:
        try:
            for name in COLLECTIONS:
                self.db[name].create_index("id", unique=True)
                for field in UNIQUE_FIELDS.get(name, ()):
                    self.db[name].create_index(field, unique=True, sparse=True)
        except PyMongoError as exc:
            raise StorageError(f"cannot prepare indexes: {exc}") from exc
        logger.info("Mongo storage ready (%s)", getattr(self.db, "name", "?"))

    def close(self) -> None:
        if self._client is not None:
            self._client.close()

    def _next_id(self, collection: str) -> int:
        counter = self.db[COUNTERS].find_one_and_update(
            {"_id": collection},
            {"$inc": {"seq": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return int(counter["seq"])

    # -------------------------- CRUD --------------------------
    def list(self, collection: str) -> list[Record]:
        try:
            cursor = self._collection(collection).find({}, {"_id": 0}).sort("id", DESCENDING)
            return [dict(doc) for doc in cursor]
        except PyMongoError as exc:
            raise StorageError(f"list {collection} failed: {exc}") from exc

    def insert(self, collection: str, fields: Mapping[str, Any]) -> int:
        target = self._collection(collection)
        values = clean_fields(fields)
        try:
            new_id = self._next_id(collection)
            target.insert_one({**values, "id": new_id})
        except PyMongoError as exc:
            raise StorageError(f"insert into {collection} failed: {exc}") from exc
        return new_id

    def update(self, collection: str, record_id: int, fields: Mapping[str, Any]) -> int:
        target = self._collection(collection)
        values = clean_fields(fields)
        if not addressable_id(record_id):
            return 0
        try:
            if not values:
                return 1 if target.find_one({"id": record_id}, {"_id": 1}) else 0
            result = target.update_one({"id": record_id}, {"$set": values})
        except PyMongoError as exc:
            raise StorageError(f"update {collection} failed: {exc}") from exc
        return 1 if result.matched_count else 0

    def delete_one(self, collection: str, record_id: int) -> int:
        if not addressable_id(record_id):
            return 0
        try:
            result = self._collection(collection).delete_one({"id": record_id})
        except PyMongoError as exc:
            raise StorageError(f"delete from {collection} failed: {exc}") from exc
        return int(result.deleted_count)

    def delete_all(self, collection: str) -> None:
        try:
            self._collection(collection).delete_many({})
        except PyMongoError as exc:
            raise StorageError(f"clear {collection} failed: {exc}") from exc
