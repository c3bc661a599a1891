from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import ActivityType, AttendanceMethod, AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: a held slot of one trainee in one session.

    Presence of the record is the state; ``status`` and ``method`` only tell
    how it was created.
    """

    id: str
    trainee_id: str
    class_id: str
    status: AttendanceStatus
    method: AttendanceMethod
    timestamp: int


@dataclass(frozen=True)
class ActivityLog:
    """Append-only audit entry.

    Trainee and session fields are copies taken when the event happened, not
    references, so renames and deletions do not rewrite history.
    """

    id: str
    trainee_id: str
    trainee_name: str
    class_name: str
    location: str
    date: str
    time: str
    method: AttendanceMethod
    type: ActivityType
    timestamp: int
    amount: Optional[float] = None
