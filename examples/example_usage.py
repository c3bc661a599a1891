"""Example: drive the services directly (no Flask).

Controllers are a thin layer; the credit rules live in the services and the
ledger engine.
"""

import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from attendease.container import build_container
from attendease.projections.views import trainee_history
from attendease.storage.memory_store import InMemorySnapshotStore


def main():
    container = build_container(store=InMemorySnapshotStore(), clock=lambda: datetime(2025, 5, 19, 12, 0))

    container.ledger_service.purchase(trainee_id="u3", package_id="p1")
    snapshot = container.ledger_service.book(trainee_id="u3", session_id="c1")

    print("credits:", snapshot.find_user("u3").credits)
    for log in trainee_history(snapshot, "u3"):
        print(log.type.value, log.class_name, log.amount)


if __name__ == "__main__":
    main()
