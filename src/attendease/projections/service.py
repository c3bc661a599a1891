from __future__ import annotations

from datetime import datetime
from typing import Callable

from ..common.datetime_utils import now_local
from ..core.exceptions import NotFoundError
from ..guards.rules import can_cancel
from ..ledger.model import ActivityLog
from ..storage.repository import SnapshotStore
from . import views


class DashboardService:
    """Use case: role dashboards. Reads only, never saves."""

    def __init__(self, store: SnapshotStore, *, clock: Callable[[], datetime] = now_local):
        self._store = store
        self._clock = clock

    def admin_stats(self) -> views.AdminStats:
        return views.admin_stats(self._store.load(), self._clock().date())

    def schedule_for_admin(self) -> list[dict]:
        snapshot = self._store.load()
        return [
            {"session": c, "creator_role": views.creator_role(snapshot, c.creator_id)}
            for c in snapshot.classes
        ]

    def schedule_for_trainer(self, trainer_id: str) -> list[dict]:
        snapshot = self._store.load()
        return [
            {
                "session": c,
                "creator_role": views.creator_role(snapshot, c.creator_id),
                "can_edit": c.creator_id == trainer_id,
            }
            for c in views.trainer_sessions(snapshot, trainer_id)
        ]

    def open_sessions_for_trainee(self, trainee_id: str) -> list[dict]:
        snapshot = self._store.load()
        now = self._clock()
        return [
            {
                "session": c,
                "booked": views.is_booked(snapshot, trainee_id=trainee_id, class_id=c.id),
                "can_cancel": can_cancel(c, now),
            }
            for c in views.open_sessions(snapshot, now)
        ]

    def trainee_history(self, trainee_id: str) -> list[ActivityLog]:
        return views.trainee_history(self._store.load(), trainee_id)

    def roster(self, class_id: str) -> list[views.RosterEntry]:
        snapshot = self._store.load()
        if not snapshot.find_class(class_id):
            raise NotFoundError("Class session not found")
        return views.roster(snapshot, class_id)
