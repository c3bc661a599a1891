from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable

from ..common.identity import new_id
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError
from ..guards.rules import validate_session_form
from ..snapshot.model import Snapshot
from ..storage.repository import SnapshotStore
from ..users.model import User
from .model import ClassSession, SessionForm

logger = logging.getLogger(__name__)


class ScheduleService:
    """Use case: schedule, edit and remove class sessions (admin and trainers)."""

    def __init__(self, store: SnapshotStore, *, id_factory: Callable[[str], str] = new_id):
        self._store = store
        self._new_id = id_factory

    def create(self, *, actor: User, form: SessionForm) -> Snapshot:
        if actor.role not in (Role.ADMIN, Role.TRAINER):
            raise AuthorizationError("Permission denied")

        snapshot = self._store.load()
        form = validate_session_form(snapshot.classes, form)

        trainer_id = form.trainer_id
        if not trainer_id and actor.role == Role.TRAINER:
            trainer_id = actor.id

        session = ClassSession(
            id=self._new_id("c"),
            name=form.name.strip(),
            date=form.date,
            time=form.time,
            location=form.location.strip(),
            trainer_id=trainer_id,
            creator_id=actor.id,
        )
        logger.info("Session %s scheduled by %s", session.id, actor.id)
        return self._store.save(replace(snapshot, classes=snapshot.classes + (session,)))

    def update(self, *, actor: User, session_id: str, form: SessionForm) -> Snapshot:
        snapshot = self._store.load()
        existing = self._require_editable(snapshot, actor=actor, session_id=session_id)
        form = validate_session_form(snapshot.classes, form, exclude_id=session_id)

        updated = replace(
            existing,
            name=form.name.strip(),
            date=form.date,
            time=form.time,
            location=form.location.strip(),
            trainer_id=form.trainer_id or existing.trainer_id,
        )
        return self._store.save(
            replace(snapshot, classes=tuple(updated if c.id == session_id else c for c in snapshot.classes))
        )

    def delete(self, *, actor: User, session_id: str) -> Snapshot:
        # Attendance records of a removed session are left in place (orphan tolerant).
        snapshot = self._store.load()
        self._require_editable(snapshot, actor=actor, session_id=session_id)
        logger.info("Session %s deleted by %s", session_id, actor.id)
        return self._store.save(replace(snapshot, classes=tuple(c for c in snapshot.classes if c.id != session_id)))

    def list_all(self) -> tuple[ClassSession, ...]:
        return self._store.load().classes

    @staticmethod
    def _require_editable(snapshot: Snapshot, *, actor: User, session_id: str) -> ClassSession:
        session = snapshot.find_class(session_id)
        if not session:
            raise NotFoundError("Class session not found")
        if actor.role == Role.ADMIN:
            return session
        if actor.role == Role.TRAINER and session.creator_id == actor.id:
            return session
        raise AuthorizationError("Only the creator of a session can change it")
