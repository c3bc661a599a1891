from __future__ import annotations

import json
import logging
from typing import Callable

from ..core.constants import DEFAULT_STORAGE_KEY
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from ..snapshot.codec import snapshot_from_dict, snapshot_to_dict
from ..snapshot.model import Snapshot
from ..snapshot.seed import initial_snapshot

logger = logging.getLogger(__name__)


class MySQLSnapshotStore:
    """Snapshot persisted as one JSON document in the ``app_state`` table."""

    def __init__(
        self,
        conn: DatabaseConnection,
        *,
        storage_key: str = DEFAULT_STORAGE_KEY,
        seed: Callable[[], Snapshot] = initial_snapshot,
    ):
        self._conn = conn
        self._key = storage_key
        self._seed = seed

    def load(self) -> Snapshot:
        with db_cursor(self._conn) as (_, cur):
            cur.execute("SELECT payload FROM app_state WHERE storage_key=%s", (self._key,))
            row = fetchone(cur)

        if not row:
            logger.info("No stored snapshot under %s, writing seed data", self._key)
            return self.save(self._seed())
        return snapshot_from_dict(json.loads(row["payload"]))

    def save(self, snapshot: Snapshot) -> Snapshot:
        payload = json.dumps(snapshot_to_dict(snapshot), ensure_ascii=False)
        with db_cursor(self._conn) as (_, cur):
            cur.execute(
                """
                INSERT INTO app_state (storage_key, payload)
                VALUES (%s, %s)
                ON DUPLICATE KEY UPDATE payload=VALUES(payload)
                """,
                (self._key, payload),
            )
        return snapshot
