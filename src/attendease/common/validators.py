from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_negative(value, field_name: str):
    if value is None or value < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return value


def is_blank(value: str | None) -> bool:
    return not value or not value.strip()
