from __future__ import annotations

import json
from datetime import datetime

from attendease.ledger import engine
from attendease.snapshot.codec import snapshot_from_dict, snapshot_to_dict
from attendease.storage.memory_store import InMemorySnapshotStore
from attendease.storage.mysql_snapshot_store import MySQLSnapshotStore


class FakeCursor:
    def __init__(self, rows: dict):
        self._rows = rows
        self._result = None

    def execute(self, sql: str, params=()):
        if sql.lstrip().upper().startswith("SELECT"):
            payload = self._rows.get(params[0])
            self._result = {"payload": payload} if payload is not None else None
        else:
            key, payload = params
            self._rows[key] = payload

    def fetchone(self):
        return self._result

    def close(self):
        pass


class FakeConnection:
    def __init__(self, rows: dict):
        self._rows = rows
        self.commits = 0

    def cursor(self, dictionary: bool = True):
        return FakeCursor(self._rows)

    def commit(self):
        self.commits += 1

    def rollback(self):
        pass

    def close(self):
        pass


class FakeConnectionFactory:
    def __init__(self):
        self.rows: dict[str, str] = {}

    def connect(self):
        return FakeConnection(self.rows)


def test_memory_store_seeds_on_first_load():
    store = InMemorySnapshotStore()

    snapshot = store.load()

    assert [u.email for u in snapshot.users] == ["admin@test.com", "trainer@test.com", "trainee@test.com"]
    assert [p.credits for p in snapshot.packages] == [10, 20, 1]
    assert store.save_count == 1


def test_stored_shape_uses_camel_case_fields(seed, ids):
    snapshot = engine.purchase_package(seed, package_id="p1", trainee_id="u3", now=datetime(2025, 5, 19, 9, 5), id_factory=ids)
    snapshot = engine.book(snapshot, session_id="c1", trainee_id="u3", now=datetime(2025, 5, 19, 9, 6), id_factory=ids)

    data = json.loads(json.dumps(snapshot_to_dict(snapshot)))

    assert set(data) == {"users", "classes", "attendance", "packages", "activityLogs"}
    assert data["users"][2]["phoneNumber"] == "+6597638363"
    assert data["classes"][0]["creatorId"] == "u1"
    assert data["attendance"][0]["traineeId"] == "u3"
    purchase, booking = data["activityLogs"]
    assert purchase["amount"] == 180
    assert "amount" not in booking
    assert snapshot_from_dict(data) == snapshot


def test_mysql_store_persists_one_json_document():
    factory = FakeConnectionFactory()
    store = MySQLSnapshotStore(factory, storage_key="gym")

    seeded = store.load()
    assert json.loads(factory.rows["gym"])["users"][0]["id"] == "u1"

    updated = engine.purchase_package(seeded, package_id="p3", trainee_id="u3")
    store.save(updated)

    assert store.load().find_user("u3").credits == 11
