from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def optional_positive_float(value, field_name: str, default: float) -> float:
    """Parse an optional numeric field; falsy values fall back to ``default``."""
    if value in (None, "", 0):
        return float(default)
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if parsed < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return parsed


def require_id(value, field_name: str) -> int:
    if value in (None, ""):
        raise ValidationError(f"{field_name} is required")
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is not valid")
    if parsed <= 0:
        raise ValidationError(f"{field_name} is not valid")
    return parsed
