from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

from ..ledger.model import ActivityLog, AttendanceRecord
from ..packages.model import CreditPackage
from ..sessions.model import ClassSession
from ..users.model import User


@dataclass(frozen=True)
class Snapshot:
    """The whole dataset at one instant; the unit of atomic read/write.

    Collections are tuples in insertion order. Changes go through
    ``dataclasses.replace`` so an older snapshot is never mutated.
    """

    users: tuple[User, ...] = field(default_factory=tuple)
    classes: tuple[ClassSession, ...] = field(default_factory=tuple)
    attendance: tuple[AttendanceRecord, ...] = field(default_factory=tuple)
    packages: tuple[CreditPackage, ...] = field(default_factory=tuple)
    activity_logs: tuple[ActivityLog, ...] = field(default_factory=tuple)

    def find_user(self, user_id: str) -> Optional[User]:
        return next((u for u in self.users if u.id == user_id), None)

    def find_class(self, class_id: str) -> Optional[ClassSession]:
        return next((c for c in self.classes if c.id == class_id), None)

    def find_package(self, package_id: str) -> Optional[CreditPackage]:
        return next((p for p in self.packages if p.id == package_id), None)

    def find_attendance(self, *, trainee_id: str, class_id: str) -> Optional[AttendanceRecord]:
        return next(
            (a for a in self.attendance if a.trainee_id == trainee_id and a.class_id == class_id),
            None,
        )

    def with_user(self, user: User) -> "Snapshot":
        """Replace the user with the same id, keeping its position."""
        return replace(self, users=tuple(user if u.id == user.id else u for u in self.users))
