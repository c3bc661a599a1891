"""Credit ledger: next-snapshot computations for every credit-affecting action.

Every function takes the current snapshot and returns a new one in which the
trainee balance, the attendance collection and the activity log change
together, or raises a domain error and leaves the input untouched.

Per (trainee, session) pair there are two states: no record, or a held slot.
``book`` / ``mark_attendance`` move NONE -> HELD for one credit;
``cancel`` / ``mark_attendance`` (undo) move HELD -> NONE and refund it.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local, to_epoch_millis
from ..common.identity import new_id
from ..core.constants import PACKAGE_LABEL_PREFIX, PURCHASE_LOCATION
from ..core.enums import ActivityType, AttendanceMethod, AttendanceStatus
from ..core.exceptions import AlreadyBookedError, NotFoundError, ValidationError
from ..guards.rules import ensure_cancellable, ensure_sufficient_credits
from ..packages.model import CreditPackage
from ..sessions.model import ClassSession
from ..snapshot.model import Snapshot
from ..users.model import User
from .model import ActivityLog, AttendanceRecord

IdFactory = Callable[[str], str]


def book(
    snapshot: Snapshot,
    *,
    session_id: str,
    trainee_id: str,
    now: Optional[datetime] = None,
    id_factory: IdFactory = new_id,
) -> Snapshot:
    """Trainee books a slot: one credit, a SELF/BOOKED record, a BOOKING log."""
    now = now or now_local()
    session, trainee = _resolve(snapshot, session_id=session_id, trainee_id=trainee_id)

    if snapshot.find_attendance(trainee_id=trainee.id, class_id=session.id):
        raise AlreadyBookedError("You already hold a slot in this session")
    ensure_sufficient_credits(trainee)

    return _hold(
        snapshot,
        session=session,
        trainee=trainee,
        status=AttendanceStatus.BOOKED,
        method=AttendanceMethod.SELF,
        log_type=ActivityType.BOOKING,
        now=now,
        id_factory=id_factory,
    )


def cancel(
    snapshot: Snapshot,
    *,
    session_id: str,
    trainee_id: str,
    now: Optional[datetime] = None,
    id_factory: IdFactory = new_id,
) -> Snapshot:
    """Trainee cancels a held slot outside the lock window.

    Returns the same snapshot when nothing is held.
    """
    now = now or now_local()
    session, trainee = _resolve(snapshot, session_id=session_id, trainee_id=trainee_id)

    ensure_cancellable(session, now)

    existing = snapshot.find_attendance(trainee_id=trainee.id, class_id=session.id)
    if not existing:
        return snapshot

    return _release(
        snapshot,
        record=existing,
        session=session,
        trainee=trainee,
        method=AttendanceMethod.SELF,
        log_type=ActivityType.CANCELLATION,
        now=now,
        id_factory=id_factory,
    )


def mark_attendance(
    snapshot: Snapshot,
    *,
    session_id: str,
    trainee_id: str,
    now: Optional[datetime] = None,
    id_factory: IdFactory = new_id,
) -> Snapshot:
    """Staff roster toggle, shared by admins and trainers.

    A held slot is refunded (REFUND); otherwise attendance is charged
    (ATTENDANCE). Not subject to the cancellation lock.
    """
    now = now or now_local()
    session, trainee = _resolve(snapshot, session_id=session_id, trainee_id=trainee_id)

    existing = snapshot.find_attendance(trainee_id=trainee.id, class_id=session.id)
    if existing:
        return _release(
            snapshot,
            record=existing,
            session=session,
            trainee=trainee,
            method=AttendanceMethod.STAFF,
            log_type=ActivityType.REFUND,
            now=now,
            id_factory=id_factory,
        )

    ensure_sufficient_credits(trainee)
    return _hold(
        snapshot,
        session=session,
        trainee=trainee,
        status=AttendanceStatus.ATTENDED,
        method=AttendanceMethod.STAFF,
        log_type=ActivityType.ATTENDANCE,
        now=now,
        id_factory=id_factory,
    )


def purchase_package(
    snapshot: Snapshot,
    *,
    package_id: str,
    trainee_id: str,
    now: Optional[datetime] = None,
    id_factory: IdFactory = new_id,
) -> Snapshot:
    """Simulated store purchase: adds the package credits and logs the price paid."""
    now = now or now_local()
    package = snapshot.find_package(package_id)
    if not package:
        raise NotFoundError("Package not found")
    trainee = _resolve_trainee(snapshot, trainee_id)

    log = _purchase_log(package, trainee, now=now, id_factory=id_factory)
    return replace(
        snapshot.with_user(replace(trainee, credits=trainee.credits + package.credits)),
        activity_logs=snapshot.activity_logs + (log,),
    )


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def _resolve_trainee(snapshot: Snapshot, trainee_id: str) -> User:
    trainee = snapshot.find_user(trainee_id)
    if not trainee:
        raise NotFoundError("Trainee not found")
    if not trainee.is_trainee:
        raise ValidationError("Only trainees hold a credit wallet")
    return trainee


def _resolve(snapshot: Snapshot, *, session_id: str, trainee_id: str) -> tuple[ClassSession, User]:
    session = snapshot.find_class(session_id)
    if not session:
        raise NotFoundError("Class session not found")
    return session, _resolve_trainee(snapshot, trainee_id)


def _hold(
    snapshot: Snapshot,
    *,
    session: ClassSession,
    trainee: User,
    status: AttendanceStatus,
    method: AttendanceMethod,
    log_type: ActivityType,
    now: datetime,
    id_factory: IdFactory,
) -> Snapshot:
    record = AttendanceRecord(
        id=id_factory("att"),
        trainee_id=trainee.id,
        class_id=session.id,
        status=status,
        method=method,
        timestamp=to_epoch_millis(now),
    )
    log = _session_log(session, trainee, method=method, log_type=log_type, now=now, id_factory=id_factory)
    return replace(
        snapshot.with_user(replace(trainee, credits=trainee.credits - 1)),
        attendance=snapshot.attendance + (record,),
        activity_logs=snapshot.activity_logs + (log,),
    )


def _release(
    snapshot: Snapshot,
    *,
    record: AttendanceRecord,
    session: ClassSession,
    trainee: User,
    method: AttendanceMethod,
    log_type: ActivityType,
    now: datetime,
    id_factory: IdFactory,
) -> Snapshot:
    log = _session_log(session, trainee, method=method, log_type=log_type, now=now, id_factory=id_factory)
    return replace(
        snapshot.with_user(replace(trainee, credits=trainee.credits + 1)),
        attendance=tuple(a for a in snapshot.attendance if a.id != record.id),
        activity_logs=snapshot.activity_logs + (log,),
    )


def _session_log(
    session: ClassSession,
    trainee: User,
    *,
    method: AttendanceMethod,
    log_type: ActivityType,
    now: datetime,
    id_factory: IdFactory,
) -> ActivityLog:
    return ActivityLog(
        id=id_factory("log"),
        trainee_id=trainee.id,
        trainee_name=trainee.name,
        class_name=session.name,
        location=session.location,
        date=session.date,
        time=session.time,
        method=method,
        type=log_type,
        timestamp=to_epoch_millis(now),
    )


def _purchase_log(package: CreditPackage, trainee: User, *, now: datetime, id_factory: IdFactory) -> ActivityLog:
    return ActivityLog(
        id=id_factory("log"),
        trainee_id=trainee.id,
        trainee_name=trainee.name,
        class_name=f"{PACKAGE_LABEL_PREFIX}{package.name}",
        location=PURCHASE_LOCATION,
        date=now.strftime("%Y-%m-%d"),
        time=now.strftime("%H:%M"),
        method=AttendanceMethod.SELF,
        type=ActivityType.PURCHASE,
        timestamp=to_epoch_millis(now),
        amount=package.price,
    )
