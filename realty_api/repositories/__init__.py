"""
Persistence adapters.

Each backend stores the named collections its own way (JSON files, SQL tables,
document collections) behind the StorageBackend protocol. Services depend on
the protocol, never on a concrete backend.
"""

from .base import CollectionStore, StorageBackend
from .factory import build_backend

__all__ = ["CollectionStore", "StorageBackend", "build_backend"]
