from __future__ import annotations

from datetime import datetime

import pytest

from attendease.snapshot.seed import initial_snapshot
from attendease.storage.memory_store import InMemorySnapshotStore


class SequentialIds:
    """Deterministic replacement for the timestamp id factory."""

    def __init__(self):
        self._n = 0

    def __call__(self, prefix: str) -> str:
        self._n += 1
        return f"{prefix}{self._n}"


@pytest.fixture
def fixed_now() -> datetime:
    # The day before the seeded "Morning Yoga" (2025-05-20 08:00)
    return datetime(2025, 5, 19, 12, 0, 0)


@pytest.fixture
def ids() -> SequentialIds:
    return SequentialIds()


@pytest.fixture
def seed():
    return initial_snapshot()


@pytest.fixture
def store(seed) -> InMemorySnapshotStore:
    return InMemorySnapshotStore(seed)
