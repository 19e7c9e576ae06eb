"""Named collections and their declared (not enforced) field schema."""
from __future__ import annotations

from typing import Any, Dict, Mapping, Union

from realty_api.core.errors import ValidationError

Scalar = Union[str, int, float, bool, None]
Record = Dict[str, Any]

USERS = "users"
PORTFOLIO = "portfolio"
BLOG = "blog"
GALLERY = "gallery"
VIDEOS = "videos"
TESTIMONIALS = "testimonials"
MESSAGES = "messages"

# Collections exposed through the generic CRUD routes; users never are.
CONTENT_COLLECTIONS = (PORTFOLIO, BLOG, GALLERY, VIDEOS, TESTIMONIALS, MESSAGES)
COLLECTIONS = (USERS,) + CONTENT_COLLECTIONS

# field name -> python type of the column in the relational backend
DECLARED_FIELDS: Dict[str, Dict[str, type]] = {
    USERS: {"username": str, "password": str},
    PORTFOLIO: {
        "title": str,
        "location": str,
        "tag": str,
        "image": str,
        "link": str,
        "transactionType": str,
        "propertyType": str,
        "date": str,
    },
    BLOG: {"title": str, "date": str, "image": str, "link": str, "text": str},
    GALLERY: {"url": str, "category": str, "date": str},
    VIDEOS: {"title": str, "youtubeId": str, "date": str},
    TESTIMONIALS: {"author": str, "text": str, "date": str},
    MESSAGES: {
        "name": str,
        "phone": str,
        "email": str,
        "topic": str,
        "message": str,
        "date": str,
        "read": bool,
    },
}

UNIQUE_FIELDS: Dict[str, tuple[str, ...]] = {USERS: ("username",)}


def is_collection(name: str | None) -> bool:
    return name in COLLECTIONS


def is_reserved_key(key: str) -> bool:
    """Names a document store would read as its own key, an operator or a path."""
    return key == "_id" or key.startswith("$") or "." in key


def clean_fields(fields: Mapping[str, Any] | None) -> Record:
    """Copy caller-supplied fields, dropping the adapter-owned ``id``.

    Reserved names are refused so a record reads back the same on every backend.
    """
    cleaned: Record = {}
    for key, value in (fields or {}).items():
        key = str(key)
        if key == "id":
            continue
        if is_reserved_key(key):
            raise ValidationError(f"invalid field name: {key}")
        cleaned[key] = value
    return cleaned
