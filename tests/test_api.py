from __future__ import annotations

from datetime import datetime

import pytest

from attendease.container import build_container
from attendease.main import create_app
from attendease.storage.memory_store import InMemorySnapshotStore


@pytest.fixture
def store():
    return InMemorySnapshotStore()


@pytest.fixture
def app(store):
    container = build_container(store=store, clock=lambda: datetime(2025, 5, 19, 12, 0))
    application = create_app("attendease.config.testing", container=container)
    yield application


@pytest.fixture
def client(app):
    return app.test_client()


def _login(client, email: str, password: str = "password123"):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def test_login_rejects_bad_password(client):
    response = _login(client, "admin@test.com", "nope")

    assert response.status_code == 401
    assert response.get_json()["error"] == "InvalidCredentials"


def test_reset_eligibility(client):
    ok = client.post("/api/auth/reset", json={"email": "trainee@test.com", "phoneNumber": "+6597638363"})
    missing = client.post("/api/auth/reset", json={"email": "trainee@test.com", "phoneNumber": "+650"})

    assert ok.status_code == 200
    assert missing.status_code == 404
    assert missing.get_json()["error"] == "NoMatchingRecord"


def test_requires_login(client):
    assert client.get("/api/trainee/sessions").status_code == 401


def test_trainee_books_and_cancels(client):
    _login(client, "TRAINEE@test.com")

    sessions = client.get("/api/trainee/sessions").get_json()
    assert [s["id"] for s in sessions] == ["c1", "c2"]
    assert sessions[0]["canCancel"] is True

    booked = client.post("/api/trainee/sessions/c1/book").get_json()
    assert booked["trainee"]["credits"] == 9
    assert booked["held"] is True

    again = client.post("/api/trainee/sessions/c1/book")
    assert again.status_code == 409
    assert again.get_json()["error"] == "AlreadyBooked"

    cancelled = client.post("/api/trainee/sessions/c1/cancel").get_json()
    assert cancelled["trainee"]["credits"] == 10

    logs = client.get("/api/trainee/logs").get_json()
    assert [log["type"] for log in logs] == ["CANCELLATION", "BOOKING"]


def test_trainee_purchase_shows_in_admin_revenue(client):
    _login(client, "trainee@test.com")
    assert client.post("/api/trainee/packages/p2/purchase").get_json()["trainee"]["credits"] == 30
    client.post("/api/auth/logout")

    _login(client, "admin@test.com")
    stats = client.get("/api/admin/stats").get_json()

    assert stats == {"trainees": 1, "sessionsToday": 0, "checkIn": 0, "revenue": 300}


def test_trainer_toggles_roster(client):
    _login(client, "trainer@test.com")

    marked = client.post("/api/sessions/c1/roster/u3").get_json()
    assert marked["held"] is True
    assert marked["trainee"]["credits"] == 9

    roster = client.get("/api/sessions/c1/roster").get_json()
    assert roster == [{"trainee": marked["trainee"], "present": True}]

    undone = client.post("/api/sessions/c1/roster/u3").get_json()
    assert undone["held"] is False
    assert undone["trainee"]["credits"] == 10


def test_trainee_cannot_use_roster(client):
    _login(client, "trainee@test.com")

    response = client.post("/api/sessions/c1/roster/u3")

    assert response.status_code == 403


def test_duplicate_session_is_a_conflict(client):
    _login(client, "admin@test.com")

    response = client.post(
        "/api/sessions",
        json={"name": "Morning Yoga ", "date": "2025-05-20", "time": "08:00", "location": ""},
    )

    assert response.status_code == 409
    assert response.get_json()["error"] == "DuplicateSession"


def test_trainer_schedule_lists_creator_badge(client):
    _login(client, "trainer@test.com")
    created = client.post(
        "/api/sessions",
        json={"name": "Spin", "date": "2025-06-01", "time": "07:00", "location": "Bike Room"},
    )
    assert created.status_code == 201

    rows = client.get("/api/sessions").get_json()

    assert [(r["name"], r["creatorRole"], r["canEdit"]) for r in rows] == [
        ("Morning Yoga", "ADMIN", False),
        ("HIIT Intensive", "ADMIN", False),
        ("Spin", "TRAINER", True),
    ]


def test_email_change_needs_second_save(client, store):
    _login(client, "trainee@test.com")

    first = client.put("/api/me", json={"email": "alice@x.com"})
    assert first.status_code == 409
    assert first.get_json()["error"] == "IdentityChangePending"
    assert store.load().find_user("u3").email == "trainee@test.com"

    second = client.put("/api/me", json={"email": "alice@x.com"})
    assert second.status_code == 200
    assert store.load().find_user("u3").email == "alice@x.com"


def test_admin_creates_user_with_generated_password(client):
    _login(client, "admin@test.com")

    response = client.post("/api/admin/users", json={"name": "Bob", "email": "bob@x.com", "phoneNumber": "1"})

    assert response.status_code == 201
    body = response.get_json()
    assert body["role"] == "TRAINEE"
    assert len(body["password"]) == 8


def test_malformed_session_date_is_a_bad_request(client):
    _login(client, "admin@test.com")

    response = client.post(
        "/api/sessions",
        json={"name": "Spin", "date": "tomorrow", "time": "07:00", "location": "Bike Room"},
    )

    assert response.status_code == 400
    assert response.get_json()["error"] == "ValidationError"
    client.post("/api/auth/logout")

    _login(client, "trainee@test.com")
    assert client.get("/api/trainee/sessions").status_code == 200


def test_unpadded_session_slot_is_a_duplicate(client):
    _login(client, "admin@test.com")

    response = client.post(
        "/api/sessions",
        json={"name": "Morning Yoga", "date": "2025-5-20", "time": "8:00", "location": "Studio B"},
    )

    assert response.status_code == 409
    assert response.get_json()["error"] == "DuplicateSession"


@pytest.mark.parametrize(
    "body",
    [
        '{"name": "Mega", "credits": 10, "price": NaN}',
        '{"name": "Mega", "credits": 10, "price": Infinity}',
        '{"name": "Mega", "credits": 2.9, "price": 100}',
        '{"name": "Mega", "credits": true, "price": 100}',
    ],
)
def test_package_numbers_must_be_well_formed(client, body):
    _login(client, "admin@test.com")

    response = client.post("/api/packages", data=body, content_type="application/json")

    assert response.status_code == 400
    assert response.get_json()["error"] == "BadRequest"
    assert len(client.get("/api/packages").get_json()) == 3
