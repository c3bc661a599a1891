from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from .common.datetime_utils import now_local
from .database.bootstrap import apply_schema
from .database.connection import DBConfig, DatabaseConnection
from .ledger.service import LedgerService
from .packages.service import PackageService
from .projections.service import DashboardService
from .sessions.service import ScheduleService
from .storage.memory_store import InMemorySnapshotStore
from .storage.mysql_snapshot_store import MySQLSnapshotStore
from .storage.repository import SnapshotStore
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    store: SnapshotStore

    auth_service: AuthService
    user_service: UserService
    schedule_service: ScheduleService
    package_service: PackageService
    ledger_service: LedgerService
    dashboard_service: DashboardService


def build_store(*, backend: str, db_config: dict, storage_key: str, auto_init_db: bool = False) -> SnapshotStore:
    if backend == "memory":
        return InMemorySnapshotStore()
    if backend != "mysql":
        raise ValueError(f"Unknown storage backend: {backend!r}")

    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    if auto_init_db:
        apply_schema(conn)
    return MySQLSnapshotStore(conn, storage_key=storage_key)


def build_container(*, store: SnapshotStore, clock: Callable[[], datetime] = now_local) -> Container:
    return Container(
        store=store,
        auth_service=AuthService(store),
        user_service=UserService(store),
        schedule_service=ScheduleService(store),
        package_service=PackageService(store),
        ledger_service=LedgerService(store, clock=clock),
        dashboard_service=DashboardService(store, clock=clock),
    )
