"""Storage protocol shared by the JSON, SQL and document backends."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Protocol

from realty_api.core.errors import StorageError
from realty_api.domain.collections import Record, is_collection

WriteHook = Callable[[str], None]

# signed 64-bit: the widest id SQL integers and BSON int64 can hold
MAX_RECORD_ID = 2**63 - 1


class StorageBackend(Protocol):
    """Defines the operations the API needs from a storage engine.

    Ids are sequential integers per collection and are never reused.
    ``list`` returns newest-first. ``update``/``delete_one`` return the
    number of changed records (0 or 1).
    """

    name: str

    def initialize(self) -> None:
        ...

    def close(self) -> None:
        ...

    def list(self, collection: str) -> list[Record]:
        ...

    def insert(self, collection: str, fields: Mapping[str, Any]) -> int:
        ...

    def update(self, collection: str, record_id: int, fields: Mapping[str, Any]) -> int:
        ...

    def delete_one(self, collection: str, record_id: int) -> int:
        ...

    def delete_all(self, collection: str) -> None:
        ...


def check_collection(name: str) -> str:
    if not is_collection(name):
        raise StorageError(f"unknown collection {name!r}")
    return name


def addressable_id(record_id: Any) -> bool:
    """True when ``record_id`` could name a stored record on every backend."""
    return isinstance(record_id, int) and not isinstance(record_id, bool) and 0 < record_id <= MAX_RECORD_ID


def find_record(backend: StorageBackend, collection: str, **criteria: Any) -> Optional[Record]:
    """Return the first record whose fields equal every criterion."""
    for record in backend.list(collection):
        if all(record.get(key) == value for key, value in criteria.items()):
            return record
    return None


@dataclass
class CollectionStore:
    """A backend bound to one collection name."""

    backend: StorageBackend
    collection: str

    def __post_init__(self):
        check_collection(self.collection)

    def list(self) -> list[Record]:
        return self.backend.list(self.collection)

    def insert(self, fields: Mapping[str, Any]) -> int:
        return self.backend.insert(self.collection, fields)

    def update(self, record_id: int, fields: Mapping[str, Any]) -> int:
        return self.backend.update(self.collection, record_id, fields)

    def delete_one(self, record_id: int) -> int:
        return self.backend.delete_one(self.collection, record_id)

    def delete_all(self) -> None:
        self.backend.delete_all(self.collection)
