"""
Snapshot / restore lifecycle for the JSON file backend.

A snapshot is a ``backup-<UTC timestamp>`` directory holding a copy of every
collection file. Directory names sort lexicographically in creation order,
so "newest" is simply the greatest name.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional
import logging
import os
import shutil
import threading

from realty_api.core.errors import StorageError
from realty_api.core.utils import utc_now
from realty_api.repositories.json_storage import JsonFileBackend

logger = logging.getLogger(__name__)

SNAPSHOT_PREFIX = "backup-"


class BackupService:
    """Creates, rotates and restores snapshots of a JsonFileBackend."""

    def __init__(self, store: JsonFileBackend, backup_dir: str | os.PathLike, *, retention: int = 5) -> None:
        self.store = store
        self.backup_dir = Path(backup_dir)
        self.retention = max(1, retention)

    def list_snapshots(self) -> list[Path]:
        """Snapshot directories, newest first."""
        if not self.backup_dir.exists():
            return []
        entries = [p for p in self.backup_dir.iterdir() if p.is_dir() and p.name.startswith(SNAPSHOT_PREFIX)]
        return sorted(entries, key=lambda p: p.name, reverse=True)

    def _new_snapshot_dir(self) -> Path:
        self.backup_dir.mkdir(parents=True, exist_ok=True)
        base = SNAPSHOT_PREFIX + utc_now().strftime("%Y-%m-%dT%H-%M-%S-%fZ")
        candidate = self.backup_dir / base
        suffix = 1
        while candidate.exists():
            candidate = self.backup_dir / f"{base}-{suffix}"
            suffix += 1
        candidate.mkdir()
        return candidate

    def snapshot(self) -> Path:
        """Copy every collection file into a new snapshot, then apply retention."""
        with self.store.locked():
            target = self._new_snapshot_dir()
            for source in self.store.collection_files().values():
                if source.exists():
                    shutil.copy2(source, target / source.name)
        logger.debug("Snapshot written to %s", target)
        self._prune()
        return target

    def _prune(self) -> None:
        for stale in self.list_snapshots()[self.retention :]:
            shutil.rmtree(stale)
            logger.info("Removed old snapshot %s", stale.name)

    def restore_latest(self) -> Optional[Path]:
        """Overwrite live collection files with the newest snapshot's copies."""
        snapshots = self.list_snapshots()
        if not snapshots:
            return None
        latest = snapshots[0]
        with self.store.locked():
            for target in self.store.collection_files().values():
                source = latest / target.name
                if not source.exists():
                    continue
                target.parent.mkdir(parents=True, exist_ok=True)
                staging = target.with_name(f".{target.name}.restore")
                shutil.copy2(source, staging)
                os.replace(staging, target)
        logger.info("Data restored from backup %s", latest.name)
        return latest

    def snapshot_quietly(self, reason: str) -> Optional[Path]:
        """Snapshot for background triggers: failures are logged, never raised."""
        try:
            return self.snapshot()
        except (OSError, StorageError):
            logger.exception("Backup (%s) failed", reason)
            return None

    def after_write(self, collection: str) -> None:
        self.snapshot_quietly(f"write to {collection}")


class BackupScheduler:
    """Daemon thread taking a snapshot every ``interval_seconds``."""

    def __init__(self, backup: BackupService, interval_seconds: int) -> None:
        self.backup = backup
        self.interval_seconds = interval_seconds
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.interval_seconds <= 0 or self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="backup-scheduler", daemon=True)
        self._thread.start()

    def _run(self) -> None:
        while not self._stop.wait(self.interval_seconds):
            self.backup.snapshot_quietly("scheduled")

    def stop(self, timeout: float = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
        self._thread = None
