from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from ..common.datetime_utils import now_local
from ..common.identity import new_id
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..snapshot.model import Snapshot
from ..storage.repository import SnapshotStore
from . import engine

logger = logging.getLogger(__name__)


class LedgerService:
    """Use case: credit-affecting actions.

    Each call is one round-trip: load the whole snapshot, compute the next
    one with :mod:`engine`, save it whole. A rejected action raises before
    anything is saved.
    """

    def __init__(
        self,
        store: SnapshotStore,
        *,
        clock: Callable[[], datetime] = now_local,
        id_factory: Callable[[str], str] = new_id,
    ):
        self._store = store
        self._clock = clock
        self._new_id = id_factory

    def book(self, *, trainee_id: str, session_id: str) -> Snapshot:
        snapshot = self._store.load()
        updated = engine.book(
            snapshot, session_id=session_id, trainee_id=trainee_id, now=self._clock(), id_factory=self._new_id
        )
        logger.info("Trainee %s booked session %s", trainee_id, session_id)
        return self._store.save(updated)

    def cancel(self, *, trainee_id: str, session_id: str) -> Snapshot:
        snapshot = self._store.load()
        updated = engine.cancel(
            snapshot, session_id=session_id, trainee_id=trainee_id, now=self._clock(), id_factory=self._new_id
        )
        if updated is snapshot:
            logger.info("Trainee %s holds no slot in session %s, nothing to cancel", trainee_id, session_id)
            return snapshot
        logger.info("Trainee %s cancelled session %s", trainee_id, session_id)
        return self._store.save(updated)

    def toggle_attendance(self, *, current_role: Role, trainee_id: str, session_id: str) -> Snapshot:
        if current_role not in (Role.ADMIN, Role.TRAINER):
            raise AuthorizationError("Only staff can mark attendance")

        snapshot = self._store.load()
        was_held = snapshot.find_attendance(trainee_id=trainee_id, class_id=session_id) is not None
        updated = engine.mark_attendance(
            snapshot, session_id=session_id, trainee_id=trainee_id, now=self._clock(), id_factory=self._new_id
        )
        logger.info(
            "Staff %s trainee %s in session %s",
            "refunded" if was_held else "marked",
            trainee_id,
            session_id,
            extra={"role": current_role.value},
        )
        return self._store.save(updated)

    def purchase(self, *, trainee_id: str, package_id: str) -> Snapshot:
        snapshot = self._store.load()
        updated = engine.purchase_package(
            snapshot, package_id=package_id, trainee_id=trainee_id, now=self._clock(), id_factory=self._new_id
        )
        logger.info("Trainee %s purchased package %s", trainee_id, package_id)
        return self._store.save(updated)
