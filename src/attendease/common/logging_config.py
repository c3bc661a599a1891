"""Logging setup shared by the Flask app and scripts.

Records go through the standard library ``logging`` package. By default they
are rendered as plain text; ``json_output`` switches to single-line JSON for
log aggregators. Extras passed with ``extra={...}`` are included in JSON
records with sensitive fields redacted.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Mapping, Optional

_REDACTED = "[REDACTED]"
_SENSITIVE_FIELDS = {"password", "email", "phonenumber", "phone_number", "profileimage"}

# Attributes populated by logging.LogRecord that are not user extras
_RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}

_TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def redact_sensitive_data(data: Any, fields: Optional[Iterable[str]] = None) -> Any:
    """Redact sensitive values from mappings or sequences, recursively."""

    fields_set = {field.lower() for field in (fields or _SENSITIVE_FIELDS)}

    if isinstance(data, Mapping):
        redacted: Dict[Any, Any] = {}
        for key, value in data.items():
            if str(key).lower() in fields_set:
                redacted[key] = _REDACTED
            else:
                redacted[key] = redact_sensitive_data(value, fields_set)
        return redacted
    if isinstance(data, (list, tuple, set)):
        return [redact_sensitive_data(item, fields_set) for item in data]
    return data


class JSONFormatter(logging.Formatter):
    """Formatter that renders log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: Dict[str, Any] = {
            "ts": timestamp.isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        extras = {key: value for key, value in vars(record).items() if key not in _RESERVED}
        if extras:
            payload.update(redact_sensitive_data(extras))

        if record.exc_info:
            payload["error_type"] = record.exc_info[0].__name__ if record.exc_info[0] else None
            payload["stack"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str, ensure_ascii=False)


def configure_logging(level: str = "INFO", *, json_output: bool = False) -> None:
    """Install a single stream handler on the ``attendease`` logger tree."""

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter() if json_output else logging.Formatter(_TEXT_FORMAT))

    root = logging.getLogger("attendease")
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())
