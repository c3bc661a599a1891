from __future__ import annotations

import logging

from .connection import DatabaseConnection
from .mysql_base import db_cursor

logger = logging.getLogger(__name__)

APP_STATE_DDL = """
CREATE TABLE IF NOT EXISTS app_state (
    storage_key VARCHAR(64) NOT NULL PRIMARY KEY,
    payload LONGTEXT NOT NULL,
    updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP
)
"""


def apply_schema(conn_factory: DatabaseConnection) -> None:
    """Create the key-value table holding snapshots (idempotent)."""
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        cur.execute(APP_STATE_DDL)
    logger.info("app_state table ready")


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        cur.execute("SHOW TABLES")
        return [str(row[0]) for row in cur.fetchall()]
