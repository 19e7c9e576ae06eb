"""One-off migration script: JSON collection files (DATA_DIR) -> SQL database (DATABASE_URL)."""
from __future__ import annotations

import argparse
from pathlib import Path
import sys

# Make the package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sqlalchemy import text

from realty_api.core.config import get_settings
from realty_api.db.session import get_engine
from realty_api.domain.collections import COLLECTIONS
from realty_api.repositories.json_storage import JsonFileBackend
from realty_api.repositories.sql_repository import SQLRepository


def _advance_sequence(url: str, table: str, next_id: int) -> None:
    """Make the database's id counter continue at ``next_id``."""
    engine = get_engine(url)
    with engine.begin() as conn:
        if engine.dialect.name == "sqlite":
            conn.execute(text("DELETE FROM sqlite_sequence WHERE name = :t"), {"t": table})
            conn.execute(text("INSERT INTO sqlite_sequence (name, seq) VALUES (:t, :s)"), {"t": table, "s": next_id - 1})
        elif engine.dialect.name == "postgresql":
            conn.execute(
                text("SELECT setval(pg_get_serial_sequence(:t, 'id'), :s, false)"),
                {"t": table, "s": next_id},
            )


def migrate(data_dir: str, database_url: str) -> dict[str, int]:
    source = JsonFileBackend(data_dir)
    target = SQLRepository(database_url)
    target.initialize()
    counts: dict[str, int] = {}
    for name in COLLECTIONS:
        document = source.load(name)
        counts[name] = target.import_records(name, document["items"])
        _advance_sequence(database_url, name, document["nextId"])
    return counts


def main() -> None:
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Copy JSON collection files into the SQL database")
    ap.add_argument("--data-dir", default=settings.data_dir, help="directory with <collection>.json files")
    ap.add_argument("--database-url", default=settings.database_url, help="SQLAlchemy URL of the target")
    args = ap.parse_args()
    if not Path(args.data_dir).is_dir():
        raise SystemExit(f"Directory not found: {args.data_dir}")
    counts = migrate(args.data_dir, args.database_url)
    for name, count in counts.items():
        print(f"  {name}: {count}")
    print("JSON data migrated to SQL successfully.")


if __name__ == "__main__":
    main()
