"""Overwrite the stored snapshot with the demo dataset."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

from dotenv import load_dotenv

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from attendease.config import get_settings_module
from attendease.database.connection import DatabaseConnection, DBConfig
from attendease.snapshot.seed import initial_snapshot
from attendease.storage.mysql_snapshot_store import MySQLSnapshotStore


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_dict(dict(settings.DB_CONFIG))

    store = MySQLSnapshotStore(DatabaseConnection.get_instance(config), storage_key=settings.STORAGE_KEY)
    snapshot = store.save(initial_snapshot())
    print(
        f"OK: Seeded {settings.STORAGE_KEY} -> {config.user}@{config.host}:{config.port}/{config.database} "
        f"(users={len(snapshot.users)}, classes={len(snapshot.classes)}, packages={len(snapshot.packages)})"
    )


if __name__ == "__main__":
    main()
