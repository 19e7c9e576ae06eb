"""Pick the storage backend named by configuration."""
from __future__ import annotations

import logging
from typing import Optional

from realty_api.core.config import Settings

from .base import StorageBackend, WriteHook

logger = logging.getLogger(__name__)


def build_backend(settings: Settings, *, on_write: Optional[WriteHook] = None) -> StorageBackend:
    """Instantiate (but do not initialize) the configured backend.

    ``on_write`` is only honoured by the JSON backend, the one with snapshots.
    """
    kind = settings.storage_backend
    if kind == "sql":
        from .sql_repository import SQLRepository

        logger.info("Using SQL storage (%s)", settings.database_url.split("://", 1)[0])
        return SQLRepository(settings.database_url)
    if kind == "mongo":
        from .mongo_repository import MongoRepository

        logger.info("Using Mongo storage (db=%s)", settings.mongodb_db)
        return MongoRepository(settings.mongodb_uri, settings.mongodb_db)

    from .json_storage import JsonFileBackend

    logger.info("Using JSON file storage (%s)", settings.data_dir)
    return JsonFileBackend(settings.data_dir, on_write=on_write)
