"""Dataset persisted the first time an empty store is loaded."""

from __future__ import annotations

from ..core.enums import Role
from ..packages.model import CreditPackage
from ..sessions.model import ClassSession
from ..users.model import User
from .model import Snapshot

DEMO_PASSWORD = "password123"


def initial_snapshot() -> Snapshot:
    return Snapshot(
        users=(
            User(id="u1", email="admin@test.com", name="System Admin", role=Role.ADMIN,
                 phone_number="+6597638361", password=DEMO_PASSWORD, credits=0),
            User(id="u2", email="trainer@test.com", name="John Trainer", role=Role.TRAINER,
                 phone_number="+6597638362", password=DEMO_PASSWORD, credits=0),
            User(id="u3", email="trainee@test.com", name="Alice Trainee", role=Role.TRAINEE,
                 phone_number="+6597638363", password=DEMO_PASSWORD, credits=10),
        ),
        classes=(
            ClassSession(id="c1", name="Morning Yoga", date="2025-05-20", time="08:00",
                         location="Studio A", trainer_id="u2", creator_id="u1"),
            ClassSession(id="c2", name="HIIT Intensive", date="2025-05-21", time="18:30",
                         location="Main Gym", trainer_id="u2", creator_id="u1"),
        ),
        packages=(
            CreditPackage(id="p1", name="Starter Pack", credits=10, price=180),
            CreditPackage(id="p2", name="Value Pack", credits=20, price=300),
            CreditPackage(id="p3", name="One-Time Pass", credits=1, price=30),
        ),
    )
