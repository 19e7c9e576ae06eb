"""
Smoke tests for the SQLRepository against a temporary SQLite database.
"""
from __future__ import annotations

import pytest
from sqlalchemy import create_engine, inspect, text

from realty_api.core.errors import StorageError
from realty_api.db import session as db_session
from realty_api.db.migrations import migrate_schema
from realty_api.repositories.sql_repository import SQLRepository


@pytest.fixture()
def temp_db(tmp_path):
    """Temporary SQLite file, with full teardown so the file is not left locked on Windows."""
    db_file = tmp_path / "test.db"
    url = f"sqlite:///{db_file}"
    repo = SQLRepository(url)
    repo.initialize()

    yield repo

    try:
        repo.close()
    except Exception:
        pass
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


def test_insert_list_newest_first(temp_db):
    first = temp_db.insert("blog", {"title": "one", "date": "2025-09-09"})
    second = temp_db.insert("blog", {"title": "two", "date": "2025-09-14"})
    items = temp_db.list("blog")
    assert [item["id"] for item in items] == [second, first]
    assert items[0]["title"] == "two"
    assert items[0]["date"] == "2025-09-14"


def test_unknown_keys_round_trip_through_extra_fields(temp_db):
    new_id = temp_db.insert("gallery", {"url": "/uploads/a.jpg", "caption": "Office", "order": 3})
    record = temp_db.list("gallery")[0]
    assert record["id"] == new_id
    assert record["caption"] == "Office"
    assert record["order"] == 3
    assert "extra_fields" not in record


def test_partial_update_keeps_other_fields(temp_db):
    new_id = temp_db.insert("portfolio", {"title": "Flat", "location": "Ankara", "tag": "Sale"})
    assert temp_db.update("portfolio", new_id, {"tag": "Rent", "id": 77}) == 1
    record = temp_db.list("portfolio")[0]
    assert record["id"] == new_id
    assert record["title"] == "Flat"
    assert record["location"] == "Ankara"
    assert record["tag"] == "Rent"


def test_value_type_changes_move_between_column_and_extra(temp_db):
    new_id = temp_db.insert("videos", {"title": 123})
    assert temp_db.list("videos")[0]["title"] == 123
    temp_db.update("videos", new_id, {"title": "now text"})
    assert temp_db.list("videos")[0]["title"] == "now text"


def test_message_read_flag(temp_db):
    new_id = temp_db.insert("messages", {"name": "A", "message": "hi", "read": False})
    temp_db.update("messages", new_id, {"read": True})
    assert temp_db.list("messages")[0]["read"] is True


def test_update_and_delete_missing_ids(temp_db):
    assert temp_db.update("blog", 404, {"title": "x"}) == 0
    new_id = temp_db.insert("blog", {"title": "x"})
    assert temp_db.delete_one("blog", new_id) == 1
    assert temp_db.delete_one("blog", new_id) == 0


def test_ids_are_not_reused_after_delete_all(temp_db):
    temp_db.insert("testimonials", {"author": "A", "text": "t"})
    last = temp_db.insert("testimonials", {"author": "B", "text": "t"})
    temp_db.delete_all("testimonials")
    assert temp_db.list("testimonials") == []
    assert temp_db.insert("testimonials", {"author": "C", "text": "t"}) > last


def test_duplicate_username_raises_storage_error(temp_db):
    temp_db.insert("users", {"username": "admin", "password": "x"})
    with pytest.raises(StorageError):
        temp_db.insert("users", {"username": "admin", "password": "y"})


def test_import_records_keeps_ids(temp_db):
    count = temp_db.import_records("blog", [{"id": 5, "title": "five"}, {"id": 9, "title": "nine"}])
    assert count == 2
    assert [item["id"] for item in temp_db.list("blog")] == [9, 5]


def test_migration_adds_missing_columns_to_legacy_tables(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'legacy.db'}")
    with engine.begin() as conn:
        conn.execute(text("CREATE TABLE blog (id INTEGER PRIMARY KEY AUTOINCREMENT, title TEXT, date TEXT, image TEXT, link TEXT)"))
        conn.execute(text("INSERT INTO blog (title) VALUES ('legacy')"))

    added = migrate_schema(engine)

    assert "blog.text" in added
    assert "blog.extra_fields" in added
    columns = {col["name"] for col in inspect(engine).get_columns("blog")}
    assert {"text", "extra_fields"} <= columns
    assert migrate_schema(engine) == []
    engine.dispose()


def test_ids_beyond_int64_match_nothing(temp_db):
    temp_db.insert("blog", {"title": "x"})
    huge = 99999999999999999999
    assert temp_db.update("blog", huge, {"title": "y"}) == 0
    assert temp_db.delete_one("blog", huge) == 0
    assert temp_db.delete_one("blog", -1) == 0
    assert [item["title"] for item in temp_db.list("blog")] == ["x"]


def test_unset_columns_are_omitted_and_explicit_nulls_kept(temp_db):
    new_id = temp_db.insert("messages", {"name": "A", "message": "hi"})
    assert temp_db.list("messages")[0] == {"id": new_id, "name": "A", "message": "hi"}

    temp_db.update("messages", new_id, {"phone": None})
    record = temp_db.list("messages")[0]
    assert "phone" in record and record["phone"] is None
    assert "email" not in record
