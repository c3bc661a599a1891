"""Flask helpers shared by the feature controllers."""

from __future__ import annotations

import logging
import math
from functools import wraps
from typing import Any

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import BadRequest

from ..core.enums import Role
from ..core.exceptions import (
    AlreadyBookedError,
    AuthenticationError,
    AuthorizationError,
    CancellationLockedError,
    DomainError,
    DuplicateSessionError,
    IdentityChangePendingError,
    InsufficientCreditsError,
    NoMatchingRecordError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Most specific first: subclasses of ValidationError precede it.
_ERROR_RESPONSES: tuple[tuple[type[DomainError], str, int], ...] = (
    (InsufficientCreditsError, "InsufficientCredits", 409),
    (CancellationLockedError, "CancellationLocked", 409),
    (DuplicateSessionError, "DuplicateSession", 409),
    (AlreadyBookedError, "AlreadyBooked", 409),
    (IdentityChangePendingError, "IdentityChangePending", 409),
    (NotFoundError, "NotFound", 404),
    (ValidationError, "ValidationError", 400),
    (AuthenticationError, "InvalidCredentials", 401),
    (NoMatchingRecordError, "NoMatchingRecord", 404),
    (AuthorizationError, "Forbidden", 403),
)


def error_kind(exc: DomainError) -> tuple[str, int]:
    for exc_type, kind, status in _ERROR_RESPONSES:
        if isinstance(exc, exc_type):
            return kind, status
    return "DomainError", 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        kind, status = error_kind(exc)
        logger.info("Rejected %s %s: %s", request.method, request.path, kind)
        return jsonify({"error": kind, "message": str(exc)}), status

    @app.errorhandler(BadRequest)
    def handle_bad_request(exc: BadRequest):
        return jsonify({"error": "BadRequest", "message": exc.description}), 400


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise BadRequest("Expected a JSON object")
    return data


def int_field(data: dict[str, Any], key: str, default: int = 0) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise BadRequest(f"'{key}' must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise BadRequest(f"'{key}' must be an integer")


def number_field(data: dict[str, Any], key: str, default: float = 0) -> float:
    value = data.get(key, default)
    if isinstance(value, bool):
        raise BadRequest(f"'{key}' must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise BadRequest(f"'{key}' must be a number")
    if not math.isfinite(number):
        raise BadRequest(f"'{key}' must be a finite number")
    return int(number) if number.is_integer() else number


def current_user_id() -> str:
    return str(session["user_id"])


def current_role() -> Role:
    return Role(session["role"])


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            raise AuthenticationError("Please log in to continue")
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                raise AuthenticationError("Please log in to continue")
            if Role(session.get("role")) not in roles:
                raise AuthorizationError("Permission denied")
            return view(*args, **kwargs)

        return wrapper

    return decorator
