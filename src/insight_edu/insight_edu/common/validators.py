from __future__ import annotations

from ..core.constants import MAX_PERCENTAGE, MIN_PERCENTAGE
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} must not be empty")
    return str(value).strip()


def require_percentage(value: int, field_name: str = "percentage") -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field_name} must be an integer")
    if value < MIN_PERCENTAGE or value > MAX_PERCENTAGE:
        raise ValidationError(f"{field_name} must be between {MIN_PERCENTAGE} and {MAX_PERCENTAGE}")
    return value
