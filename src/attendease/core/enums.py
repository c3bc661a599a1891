from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for dashboards and permissions."""

    ADMIN = "ADMIN"
    TRAINER = "TRAINER"
    TRAINEE = "TRAINEE"


class AttendanceStatus(str, Enum):
    """How a held slot came to exist.

    CANCELLED is part of the stored vocabulary but no operation produces it:
    cancelled records are removed.
    """

    BOOKED = "BOOKED"
    ATTENDED = "ATTENDED"
    CANCELLED = "CANCELLED"


class AttendanceMethod(str, Enum):
    SELF = "SELF"
    STAFF = "STAFF"


class ActivityType(str, Enum):
    BOOKING = "BOOKING"
    ATTENDANCE = "ATTENDANCE"
    CANCELLATION = "CANCELLATION"
    REFUND = "REFUND"
    PURCHASE = "PURCHASE"
