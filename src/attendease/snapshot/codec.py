"""Plain-data (JSON friendly) form of a snapshot.

Field names and shapes follow the stored format: camelCase keys,
``activityLogs`` for the log collection, epoch-millisecond timestamps and
optional keys omitted when empty.
"""

from __future__ import annotations

from typing import Any

from ..core.enums import ActivityType, AttendanceMethod, AttendanceStatus, Role
from ..ledger.model import ActivityLog, AttendanceRecord
from ..packages.model import CreditPackage
from ..sessions.model import ClassSession
from ..users.model import User
from .model import Snapshot


def user_to_dict(u: User) -> dict[str, Any]:
    data = {
        "id": u.id,
        "email": u.email,
        "name": u.name,
        "role": u.role.value,
        "phoneNumber": u.phone_number,
        "password": u.password,
        "credits": u.credits,
    }
    if u.profile_image:
        data["profileImage"] = u.profile_image
    return data


def user_from_dict(d: dict[str, Any]) -> User:
    return User(
        id=str(d["id"]),
        email=str(d.get("email", "")),
        name=str(d.get("name", "")),
        phone_number=str(d.get("phoneNumber", "")),
        password=str(d.get("password", "")),
        role=Role(d["role"]),
        credits=int(d.get("credits") or 0),
        profile_image=d.get("profileImage") or None,
    )


def class_to_dict(c: ClassSession) -> dict[str, Any]:
    data = {
        "id": c.id,
        "name": c.name,
        "date": c.date,
        "time": c.time,
        "location": c.location,
        "trainerId": c.trainer_id,
    }
    if c.creator_id:
        data["creatorId"] = c.creator_id
    return data


def class_from_dict(d: dict[str, Any]) -> ClassSession:
    return ClassSession(
        id=str(d["id"]),
        name=str(d.get("name", "")),
        date=str(d.get("date", "")),
        time=str(d.get("time", "")),
        location=str(d.get("location", "")),
        trainer_id=str(d.get("trainerId") or ""),
        creator_id=d.get("creatorId") or None,
    )


def attendance_to_dict(a: AttendanceRecord) -> dict[str, Any]:
    return {
        "id": a.id,
        "traineeId": a.trainee_id,
        "classId": a.class_id,
        "status": a.status.value,
        "method": a.method.value,
        "timestamp": a.timestamp,
    }


def attendance_from_dict(d: dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        id=str(d["id"]),
        trainee_id=str(d["traineeId"]),
        class_id=str(d["classId"]),
        status=AttendanceStatus(d["status"]),
        method=AttendanceMethod(d["method"]),
        timestamp=int(d["timestamp"]),
    )


def package_to_dict(p: CreditPackage) -> dict[str, Any]:
    return {"id": p.id, "name": p.name, "credits": p.credits, "price": p.price}


def package_from_dict(d: dict[str, Any]) -> CreditPackage:
    return CreditPackage(id=str(d["id"]), name=str(d["name"]), credits=int(d["credits"]), price=d["price"])


def log_to_dict(log: ActivityLog) -> dict[str, Any]:
    data = {
        "id": log.id,
        "traineeId": log.trainee_id,
        "traineeName": log.trainee_name,
        "className": log.class_name,
        "location": log.location,
        "date": log.date,
        "time": log.time,
        "method": log.method.value,
        "type": log.type.value,
        "timestamp": log.timestamp,
    }
    if log.amount is not None:
        data["amount"] = log.amount
    return data


def log_from_dict(d: dict[str, Any]) -> ActivityLog:
    return ActivityLog(
        id=str(d["id"]),
        trainee_id=str(d["traineeId"]),
        trainee_name=str(d.get("traineeName", "")),
        class_name=str(d.get("className", "")),
        location=str(d.get("location", "")),
        date=str(d.get("date", "")),
        time=str(d.get("time", "")),
        method=AttendanceMethod(d["method"]),
        type=ActivityType(d["type"]),
        timestamp=int(d["timestamp"]),
        amount=d.get("amount"),
    )


def snapshot_to_dict(snapshot: Snapshot) -> dict[str, Any]:
    return {
        "users": [user_to_dict(u) for u in snapshot.users],
        "classes": [class_to_dict(c) for c in snapshot.classes],
        "attendance": [attendance_to_dict(a) for a in snapshot.attendance],
        "packages": [package_to_dict(p) for p in snapshot.packages],
        "activityLogs": [log_to_dict(log) for log in snapshot.activity_logs],
    }


def snapshot_from_dict(data: dict[str, Any]) -> Snapshot:
    return Snapshot(
        users=tuple(user_from_dict(d) for d in data.get("users", [])),
        classes=tuple(class_from_dict(d) for d in data.get("classes", [])),
        attendance=tuple(attendance_from_dict(d) for d in data.get("attendance", [])),
        packages=tuple(package_from_dict(d) for d in data.get("packages", [])),
        activity_logs=tuple(log_from_dict(d) for d in data.get("activityLogs", [])),
    )
