"""Pre-conditions checked before any write.

Each ``ensure_*`` raises the matching domain error and changes nothing; the
plain predicates back the read-only views.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta
from typing import Iterable, Optional

from ..common.datetime_utils import parse_clock_time, parse_iso_date
from ..common.validators import is_blank
from ..core.constants import CANCELLATION_LOCK_MINUTES
from ..core.exceptions import (
    CancellationLockedError,
    DuplicateSessionError,
    InsufficientCreditsError,
    ValidationError,
)
from ..sessions.model import ClassSession, SessionForm
from ..users.model import User


def normalize_session_name(name: str) -> str:
    return (name or "").strip().lower()


def _canonical_date(value: str) -> Optional[str]:
    try:
        return parse_iso_date((value or "").strip()).strftime("%Y-%m-%d")
    except ValueError:
        return None


def _canonical_time(value: str) -> Optional[str]:
    try:
        return parse_clock_time((value or "").strip()).strftime("%H:%M")
    except ValueError:
        return None


def session_slot(date: str, time: str) -> tuple[str, str]:
    """Zero-padded (date, time); a value that does not parse is only stripped.

    ``2025-5-20`` / ``8:00`` and ``2025-05-20`` / ``08:00`` give the same slot.
    """
    return (
        _canonical_date(date) or (date or "").strip(),
        _canonical_time(time) or (time or "").strip(),
    )


def find_duplicate_session(
    classes: Iterable[ClassSession],
    *,
    name: str,
    date: str,
    time: str,
    exclude_id: Optional[str] = None,
) -> Optional[ClassSession]:
    wanted = (normalize_session_name(name), *session_slot(date, time))
    for c in classes:
        if c.id == exclude_id:
            continue
        if (normalize_session_name(c.name), *session_slot(c.date, c.time)) == wanted:
            return c
    return None


def ensure_no_duplicate_session(classes: Iterable[ClassSession], form: SessionForm, *, exclude_id: Optional[str] = None) -> None:
    if find_duplicate_session(classes, name=form.name, date=form.date, time=form.time, exclude_id=exclude_id):
        raise DuplicateSessionError("Duplicate Class: Same Name, Date, and Time already exists.")


def ensure_session_fields(form: SessionForm) -> None:
    if is_blank(form.name) or is_blank(form.date) or is_blank(form.time) or is_blank(form.location):
        raise ValidationError("All fields are mandatory.")


def ensure_session_schedule(form: SessionForm) -> None:
    if _canonical_date(form.date) is None:
        raise ValidationError("Date must be in YYYY-MM-DD format.")
    if _canonical_time(form.time) is None:
        raise ValidationError("Time must be in HH:mm format.")


def validate_session_form(
    classes: Iterable[ClassSession], form: SessionForm, *, exclude_id: Optional[str] = None
) -> SessionForm:
    """Run the session guards in order and return the form with its slot zero-padded."""
    # Duplicate detection runs before the mandatory-field check.
    ensure_no_duplicate_session(classes, form, exclude_id=exclude_id)
    ensure_session_fields(form)
    ensure_session_schedule(form)

    date, time = session_slot(form.date, form.time)
    return replace(form, date=date, time=time)


def can_cancel(session: ClassSession, now: datetime) -> bool:
    return session.starts_at - now > timedelta(minutes=CANCELLATION_LOCK_MINUTES)


def ensure_cancellable(session: ClassSession, now: datetime) -> None:
    if not can_cancel(session, now):
        raise CancellationLockedError(f"Cancellation Locked ({CANCELLATION_LOCK_MINUTES}m Rule).")


def has_credit(user: User) -> bool:
    return user.credits > 0


def ensure_sufficient_credits(user: User) -> None:
    if not has_credit(user):
        raise InsufficientCreditsError("Insufficient credits. Trainee must top up.")
