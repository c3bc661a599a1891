"""Read-only views derived from a snapshot, recomputed on every call."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from ..core.constants import OPEN_SESSION_GRACE_MINUTES
from ..core.enums import ActivityType, Role
from ..ledger.model import ActivityLog
from ..sessions.model import ClassSession
from ..snapshot.model import Snapshot
from ..users.model import User


@dataclass(frozen=True)
class AdminStats:
    trainees: int
    sessions_today: int
    check_ins: int
    revenue: float


@dataclass(frozen=True)
class RosterEntry:
    trainee: User
    is_present: bool


def open_sessions(snapshot: Snapshot, now: datetime) -> list[ClassSession]:
    """Sessions a trainee can still see: start + grace period is in the future."""
    grace = timedelta(minutes=OPEN_SESSION_GRACE_MINUTES)
    return [c for c in snapshot.classes if c.starts_at + grace > now]


def is_booked(snapshot: Snapshot, *, trainee_id: str, class_id: str) -> bool:
    return snapshot.find_attendance(trainee_id=trainee_id, class_id=class_id) is not None


def trainee_history(snapshot: Snapshot, trainee_id: str) -> list[ActivityLog]:
    """Logs of one trainee, most recent first."""
    return [log for log in reversed(snapshot.activity_logs) if log.trainee_id == trainee_id]


def admin_stats(snapshot: Snapshot, today: date) -> AdminStats:
    today_str = today.isoformat()
    return AdminStats(
        trainees=sum(1 for u in snapshot.users if u.role == Role.TRAINEE),
        sessions_today=sum(1 for c in snapshot.classes if c.date == today_str),
        check_ins=len(snapshot.attendance),
        revenue=sum(log.amount or 0 for log in snapshot.activity_logs if log.type == ActivityType.PURCHASE),
    )


def creator_role(snapshot: Snapshot, creator_id: Optional[str]) -> Role:
    """Role badge of the session author; ADMIN when the author is unknown."""
    creator = snapshot.find_user(creator_id) if creator_id else None
    return creator.role if creator else Role.ADMIN


def trainer_sessions(snapshot: Snapshot, trainer_id: str) -> list[ClassSession]:
    return [c for c in snapshot.classes if c.trainer_id == trainer_id or c.creator_id == trainer_id]


def roster(snapshot: Snapshot, class_id: str) -> list[RosterEntry]:
    return [
        RosterEntry(trainee=u, is_present=is_booked(snapshot, trainee_id=u.id, class_id=class_id))
        for u in snapshot.users
        if u.role == Role.TRAINEE
    ]
