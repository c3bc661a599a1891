from __future__ import annotations

from dataclasses import replace
from datetime import datetime

import pytest

from attendease.core.enums import ActivityType, AttendanceMethod, AttendanceStatus
from attendease.core.exceptions import (
    AlreadyBookedError,
    CancellationLockedError,
    InsufficientCreditsError,
    NotFoundError,
    ValidationError,
)
from attendease.ledger import engine


def _with_credits(snapshot, user_id: str, credits: int):
    return snapshot.with_user(replace(snapshot.find_user(user_id), credits=credits))


def test_book_consumes_one_credit_and_logs_booking(seed, fixed_now, ids):
    after = engine.book(seed, session_id="c1", trainee_id="u3", now=fixed_now, id_factory=ids)

    assert after.find_user("u3").credits == 9
    assert seed.find_user("u3").credits == 10

    record = after.find_attendance(trainee_id="u3", class_id="c1")
    assert record is not None
    assert record.status == AttendanceStatus.BOOKED
    assert record.method == AttendanceMethod.SELF

    (log,) = after.activity_logs
    assert log.type == ActivityType.BOOKING
    assert log.trainee_name == "Alice Trainee"
    assert (log.class_name, log.location, log.date, log.time) == ("Morning Yoga", "Studio A", "2025-05-20", "08:00")
    assert log.amount is None


def test_book_without_credit_is_rejected(seed, fixed_now, ids):
    broke = _with_credits(seed, "u3", 0)

    with pytest.raises(InsufficientCreditsError):
        engine.book(broke, session_id="c1", trainee_id="u3", now=fixed_now, id_factory=ids)


def test_book_twice_never_consumes_a_second_credit(seed, fixed_now, ids):
    once = engine.book(seed, session_id="c1", trainee_id="u3", now=fixed_now, id_factory=ids)

    with pytest.raises(AlreadyBookedError):
        engine.book(once, session_id="c1", trainee_id="u3", now=fixed_now, id_factory=ids)

    assert once.find_user("u3").credits == 9
    assert len(once.attendance) == 1


def test_cancel_refunds_and_removes_record(seed, fixed_now, ids):
    booked = engine.book(seed, session_id="c1", trainee_id="u3", now=fixed_now, id_factory=ids)
    after = engine.cancel(booked, session_id="c1", trainee_id="u3", now=fixed_now, id_factory=ids)

    assert after.find_user("u3").credits == 10
    assert after.attendance == ()
    assert [log.type for log in after.activity_logs] == [ActivityType.BOOKING, ActivityType.CANCELLATION]
    assert after.activity_logs[-1].method == AttendanceMethod.SELF


def test_cancel_without_booking_is_a_no_op(seed, fixed_now, ids):
    assert engine.cancel(seed, session_id="c1", trainee_id="u3", now=fixed_now, id_factory=ids) is seed


def test_cancel_window_boundary(seed, ids):
    booked = engine.book(seed, session_id="c1", trainee_id="u3", now=datetime(2025, 5, 19), id_factory=ids)

    # Morning Yoga starts 2025-05-20 08:00
    after = engine.cancel(booked, session_id="c1", trainee_id="u3", now=datetime(2025, 5, 20, 7, 29, 59), id_factory=ids)
    assert after.find_user("u3").credits == 10

    with pytest.raises(CancellationLockedError):
        engine.cancel(booked, session_id="c1", trainee_id="u3", now=datetime(2025, 5, 20, 7, 30, 0), id_factory=ids)
    with pytest.raises(CancellationLockedError):
        engine.cancel(booked, session_id="c1", trainee_id="u3", now=datetime(2025, 5, 20, 9, 0, 0), id_factory=ids)


def test_book_cancel_pairs_conserve_credits(seed, fixed_now, ids):
    snapshot = seed
    for _ in range(3):
        snapshot = engine.book(snapshot, session_id="c2", trainee_id="u3", now=fixed_now, id_factory=ids)
        snapshot = engine.cancel(snapshot, session_id="c2", trainee_id="u3", now=fixed_now, id_factory=ids)

    assert snapshot.find_user("u3").credits == 10
    assert len(snapshot.activity_logs) == 6
    assert snapshot.attendance == ()


def test_staff_toggle_marks_then_refunds(seed, fixed_now, ids):
    five = _with_credits(seed, "u3", 5)

    marked = engine.mark_attendance(five, session_id="c1", trainee_id="u3", now=fixed_now, id_factory=ids)
    assert marked.find_user("u3").credits == 4
    record = marked.find_attendance(trainee_id="u3", class_id="c1")
    assert (record.status, record.method) == (AttendanceStatus.ATTENDED, AttendanceMethod.STAFF)
    assert marked.activity_logs[-1].type == ActivityType.ATTENDANCE

    undone = engine.mark_attendance(marked, session_id="c1", trainee_id="u3", now=fixed_now, id_factory=ids)
    assert undone.find_user("u3").credits == 5
    assert undone.find_attendance(trainee_id="u3", class_id="c1") is None
    assert undone.activity_logs[-1].type == ActivityType.REFUND
    assert undone.activity_logs[-1].method == AttendanceMethod.STAFF


def test_staff_toggle_ignores_cancellation_lock(seed, ids):
    after_class = datetime(2025, 5, 20, 10, 0)

    marked = engine.mark_attendance(seed, session_id="c1", trainee_id="u3", now=after_class, id_factory=ids)
    undone = engine.mark_attendance(marked, session_id="c1", trainee_id="u3", now=after_class, id_factory=ids)

    assert undone.find_user("u3").credits == 10


def test_staff_toggle_refunds_a_self_booking(seed, fixed_now, ids):
    booked = engine.book(seed, session_id="c1", trainee_id="u3", now=fixed_now, id_factory=ids)
    refunded = engine.mark_attendance(booked, session_id="c1", trainee_id="u3", now=fixed_now, id_factory=ids)

    assert refunded.find_user("u3").credits == 10
    assert refunded.activity_logs[-1].type == ActivityType.REFUND


def test_staff_mark_requires_credit(seed, fixed_now, ids):
    broke = _with_credits(seed, "u3", 0)

    with pytest.raises(InsufficientCreditsError):
        engine.mark_attendance(broke, session_id="c1", trainee_id="u3", now=fixed_now, id_factory=ids)


def test_purchase_then_book(seed, fixed_now, ids):
    broke = _with_credits(seed, "u3", 0)

    bought = engine.purchase_package(broke, package_id="p1", trainee_id="u3", now=fixed_now, id_factory=ids)
    assert bought.find_user("u3").credits == 10
    (log,) = bought.activity_logs
    assert log.type == ActivityType.PURCHASE
    assert log.amount == 180
    assert log.class_name == "Package: Starter Pack"
    assert log.location == "Online Store"
    assert (log.date, log.time) == ("2025-05-19", "12:00")

    booked = engine.book(bought, session_id="c1", trainee_id="u3", now=fixed_now, id_factory=ids)
    assert booked.find_user("u3").credits == 9
    assert [entry.type for entry in booked.activity_logs] == [ActivityType.PURCHASE, ActivityType.BOOKING]
    assert len(booked.attendance) == 1


def test_unknown_references_are_rejected(seed, fixed_now, ids):
    with pytest.raises(NotFoundError):
        engine.purchase_package(seed, package_id="nope", trainee_id="u3", now=fixed_now, id_factory=ids)
    with pytest.raises(NotFoundError):
        engine.book(seed, session_id="nope", trainee_id="u3", now=fixed_now, id_factory=ids)
    with pytest.raises(NotFoundError):
        engine.mark_attendance(seed, session_id="c1", trainee_id="ghost", now=fixed_now, id_factory=ids)


def test_only_trainees_hold_a_wallet(seed, fixed_now, ids):
    with pytest.raises(ValidationError):
        engine.book(seed, session_id="c1", trainee_id="u2", now=fixed_now, id_factory=ids)


def test_activity_log_is_append_only_and_credits_stay_non_negative(seed, fixed_now, ids):
    snapshot = _with_credits(seed, "u3", 1)
    steps = [
        lambda s: engine.book(s, session_id="c1", trainee_id="u3", now=fixed_now, id_factory=ids),
        lambda s: engine.mark_attendance(s, session_id="c2", trainee_id="u3", now=fixed_now, id_factory=ids),
        lambda s: engine.cancel(s, session_id="c1", trainee_id="u3", now=fixed_now, id_factory=ids),
        lambda s: engine.mark_attendance(s, session_id="c2", trainee_id="u3", now=fixed_now, id_factory=ids),
        lambda s: engine.purchase_package(s, package_id="p3", trainee_id="u3", now=fixed_now, id_factory=ids),
        lambda s: engine.mark_attendance(s, session_id="c2", trainee_id="u3", now=fixed_now, id_factory=ids),
    ]

    for step in steps:
        try:
            after = step(snapshot)
        except InsufficientCreditsError:
            after = snapshot

        assert after.activity_logs[: len(snapshot.activity_logs)] == snapshot.activity_logs
        assert all(u.credits >= 0 for u in after.users)
        snapshot = after

    assert snapshot.find_user("u3").credits == 2
