"""
Content use cases: generic CRUD over the named collections plus the two
public submission forms (testimonials and contact messages).
"""

from __future__ import annotations

from typing import Any, Mapping
import logging

from realty_api.core.errors import NotFoundError, ValidationError
from realty_api.core.utils import iso_date, iso_timestamp
from realty_api.domain.collections import CONTENT_COLLECTIONS, MESSAGES, TESTIMONIALS, Record
from realty_api.domain.demo_content import DEMO_CONTENT
from realty_api.repositories.base import CollectionStore, StorageBackend

logger = logging.getLogger(__name__)


def _required(value: Any) -> bool:
    if isinstance(value, str):
        return bool(value.strip())
    return bool(value)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


class ContentService:
    """Maps the HTTP verbs of one content collection onto its store."""

    def __init__(self, backend: StorageBackend) -> None:
        self.backend = backend

    def store(self, collection: str) -> CollectionStore:
        if collection not in CONTENT_COLLECTIONS:
            raise NotFoundError(f"unknown collection {collection}")
        return CollectionStore(self.backend, collection)

    # -------------------------- generic CRUD --------------------------
    def list(self, collection: str) -> list[Record]:
        return self.store(collection).list()

    def create(self, collection: str, fields: Mapping[str, Any]) -> int:
        values = dict(fields)
        if not values.get("date"):
            values["date"] = iso_timestamp()
        return self.store(collection).insert(values)

    def update(self, collection: str, record_id: int, fields: Mapping[str, Any]) -> int:
        changes = self.store(collection).update(record_id, fields)
        if not changes:
            raise NotFoundError()
        return changes

    def delete(self, collection: str, record_id: int) -> int:
        return self.store(collection).delete_one(record_id)

    def delete_all(self, collection: str) -> None:
        self.store(collection).delete_all()

    # -------------------------- public forms --------------------------
    def submit_testimonial(self, payload: Mapping[str, Any] | None) -> int:
        payload = payload or {}
        author, text = payload.get("author"), payload.get("text")
        if not (_required(author) and _required(text)):
            raise ValidationError("author and text are required")
        record = {"author": _text(author), "text": _text(text), "date": iso_date()}
        return self.store(TESTIMONIALS).insert(record)

    def submit_message(self, payload: Mapping[str, Any] | None) -> int:
        payload = payload or {}
        name, message = payload.get("name"), payload.get("message")
        if not (_required(name) and _required(message)):
            raise ValidationError("name and message are required")
        record = {
            "name": _text(name),
            "phone": _text(payload.get("phone")),
            "email": _text(payload.get("email")),
            "topic": _text(payload.get("topic")),
            "message": _text(message),
            "date": iso_timestamp(),
            "read": False,
        }
        return self.store(MESSAGES).insert(record)

    # -------------------------- demo content --------------------------
    def seed_demo(self) -> dict[str, int]:
        """Fill empty collections with sample records; returns inserted counts."""
        seeded: dict[str, int] = {}
        for collection, samples in DEMO_CONTENT.items():
            store = self.store(collection)
            existing = len(store.list())
            if collection == TESTIMONIALS:
                if existing >= len(samples):
                    continue
            elif existing:
                continue
            for sample in samples:
                store.insert(sample)
            seeded[collection] = len(samples)
        if seeded:
            logger.info("Seeded demo content: %s", seeded)
        return seeded
