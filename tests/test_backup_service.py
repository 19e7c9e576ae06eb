from __future__ import annotations

import json
import shutil
import time

import pytest

from realty_api.repositories.json_storage import JsonFileBackend
from realty_api.services.backup_service import SNAPSHOT_PREFIX, BackupScheduler, BackupService


@pytest.fixture()
def store(tmp_path):
    backend = JsonFileBackend(tmp_path / "data")
    backend.initialize()
    return backend


@pytest.fixture()
def backup(store, tmp_path):
    return BackupService(store, tmp_path / "backup", retention=5)


def test_snapshot_copies_every_collection_file(store, backup):
    store.insert("blog", {"title": "kept"})
    target = backup.snapshot()
    assert target.name.startswith(SNAPSHOT_PREFIX)
    assert sorted(p.name for p in target.iterdir()) == sorted(p.name for p in store.collection_files().values())
    saved = json.loads((target / "blog.json").read_text(encoding="utf-8"))
    assert saved["items"][0]["title"] == "kept"


def test_retention_keeps_the_five_newest(backup):
    created = [backup.snapshot() for _ in range(7)]
    remaining = backup.list_snapshots()
    assert len(remaining) == 5
    assert [p.name for p in remaining] == [p.name for p in reversed(created[2:])]
    assert not created[0].exists()
    assert not created[1].exists()


def test_snapshot_names_sort_in_creation_order(backup):
    names = [backup.snapshot().name for _ in range(3)]
    assert names == sorted(names)
    assert len(set(names)) == 3


def test_restore_latest_overwrites_live_files(store, backup):
    store.insert("blog", {"title": "before"})
    backup.snapshot()
    store.insert("blog", {"title": "after the snapshot"})

    restored = backup.restore_latest()

    assert restored == backup.list_snapshots()[0]
    assert [item["title"] for item in store.list("blog")] == ["before"]


def test_restore_without_snapshots_is_a_no_op(store, backup):
    store.insert("blog", {"title": "live"})
    assert backup.restore_latest() is None
    assert store.list("blog")[0]["title"] == "live"


def test_snapshot_failure_propagates_but_quiet_variant_logs(backup, tmp_path, monkeypatch, caplog):
    def boom(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(shutil, "copy2", boom)
    with pytest.raises(OSError):
        backup.snapshot()
    assert backup.snapshot_quietly("test") is None
    assert "Backup (test) failed" in caplog.text


def test_after_write_hook_snapshots(store, backup):
    store.on_write = backup.after_write
    store.insert("messages", {"name": "A", "message": "hi"})
    latest = backup.list_snapshots()[0]
    saved = json.loads((latest / "messages.json").read_text(encoding="utf-8"))
    assert saved["items"][0]["name"] == "A"


def test_scheduler_snapshots_periodically(backup):
    scheduler = BackupScheduler(backup, interval_seconds=1)
    scheduler.interval_seconds = 0.05
    scheduler.start()
    try:
        deadline = time.time() + 5
        while not backup.list_snapshots() and time.time() < deadline:
            time.sleep(0.02)
    finally:
        scheduler.stop()
    assert backup.list_snapshots()
    assert not scheduler.running


def test_scheduler_disabled_with_zero_interval(backup):
    scheduler = BackupScheduler(backup, interval_seconds=0)
    scheduler.start()
    assert not scheduler.running
