"""
JSON-file persistence adapter.

One document per collection under ``data_dir`` with the shape
``{"nextId": int, "items": [...]}``, newest record first. Read-modify-write
cycles are serialized per collection and every write lands through a temp
file + ``os.replace`` so readers (and snapshots) never see a partial file.
"""

from __future__ import annotations

from contextlib import ExitStack, contextmanager
from pathlib import Path
from typing import Any, Iterator, Mapping, Optional
import json
import logging
import os
import tempfile
import threading

from realty_api.core.errors import StorageError
from realty_api.domain.collections import COLLECTIONS, UNIQUE_FIELDS, Record, clean_fields

from .base import WriteHook, check_collection

logger = logging.getLogger(__name__)


def empty_document() -> dict:
    return {"nextId": 1, "items": []}


class JsonFileBackend:
    """Flat-file backend: one JSON document per collection."""

    name = "json"

    def __init__(self, data_dir: str | os.PathLike, *, on_write: Optional[WriteHook] = None) -> None:
        self.data_dir = Path(data_dir)
        self.on_write = on_write
        self._locks = {name: threading.RLock() for name in COLLECTIONS}

    # -------------------------- files --------------------------
    def path_for(self, collection: str) -> Path:
        return self.data_dir / f"{check_collection(collection)}.json"

    def collection_files(self) -> dict[str, Path]:
        return {name: self.path_for(name) for name in COLLECTIONS}

    @contextmanager
    def locked(self) -> Iterator[None]:
        """Hold every collection lock (fixed order) for a point-in-time view."""
        with ExitStack() as stack:
            for name in COLLECTIONS:
                stack.enter_context(self._locks[name])
            yield

    def load(self, collection: str) -> dict:
        path = self.path_for(collection)
        if not path.exists():
            return empty_document()
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise StorageError(f"cannot read {path}: {exc}") from exc
        return self._defaults(data)

    def save(self, collection: str, data: dict) -> None:
        path = self.path_for(collection)
        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{collection}.", suffix=".tmp", dir=path.parent)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except OSError as exc:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"cannot write {path}: {exc}") from exc

    @staticmethod
    def _defaults(data: Any) -> dict:
        if not isinstance(data, dict):
            data = {}
        items = data.get("items")
        if not isinstance(items, list):
            items = []
        highest = max((int(item.get("id") or 0) for item in items if isinstance(item, dict)), default=0)
        try:
            next_id = int(data.get("nextId") or 1)
        except (TypeError, ValueError):
            next_id = 1
        return {"nextId": max(next_id, highest + 1), "items": [item for item in items if isinstance(item, dict)]}

    # -------------------------- lifecycle --------------------------
    def initialize(self) -> None:
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"cannot create {self.data_dir}: {exc}") from exc
        for name in COLLECTIONS:
            with self._locks[name]:
                if not self.path_for(name).exists():
                    self.save(name, empty_document())
        logger.info("JSON storage ready at %s", self.data_dir)

    def close(self) -> None:
        return None

    # -------------------------- CRUD --------------------------
    def list(self, collection: str) -> list[Record]:
        with self._locks[check_collection(collection)]:
            items = self.load(collection)["items"]
        return sorted((dict(item) for item in items), key=lambda item: item.get("id") or 0, reverse=True)

    def insert(self, collection: str, fields: Mapping[str, Any]) -> int:
        values = clean_fields(fields)
        with self._locks[check_collection(collection)]:
            data = self.load(collection)
            for unique in UNIQUE_FIELDS.get(collection, ()):
                if unique in values and any(item.get(unique) == values[unique] for item in data["items"]):
                    raise StorageError(f"duplicate {collection}.{unique}")
            new_id = data["nextId"]
            data["nextId"] = new_id + 1
            data["items"].insert(0, {"id": new_id, **values})
            self.save(collection, data)
        self._written(collection)
        return new_id

    def update(self, collection: str, record_id: int, fields: Mapping[str, Any]) -> int:
        values = clean_fields(fields)
        with self._locks[check_collection(collection)]:
            data = self.load(collection)
            for index, item in enumerate(data["items"]):
                if item.get("id") == record_id:
                    break
            else:
                return 0
            for unique in UNIQUE_FIELDS.get(collection, ()):
                if unique in values and any(
                    other.get(unique) == values[unique] and other.get("id") != record_id for other in data["items"]
                ):
                    raise StorageError(f"duplicate {collection}.{unique}")
            data["items"][index] = {**item, **values, "id": record_id}
            self.save(collection, data)
        self._written(collection)
        return 1

    def delete_one(self, collection: str, record_id: int) -> int:
        with self._locks[check_collection(collection)]:
            data = self.load(collection)
            remaining = [item for item in data["items"] if item.get("id") != record_id]
            changes = len(data["items"]) - len(remaining)
            if not changes:
                return 0
            data["items"] = remaining
            self.save(collection, data)
        self._written(collection)
        return changes

    def delete_all(self, collection: str) -> None:
        with self._locks[check_collection(collection)]:
            data = self.load(collection)
            data["items"] = []
            self.save(collection, data)
        self._written(collection)

    def _written(self, collection: str) -> None:
        if self.on_write:
            self.on_write(collection)
