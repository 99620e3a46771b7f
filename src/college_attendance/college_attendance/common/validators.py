from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def require_date(value: Optional[str], field_name: str) -> date:
    value = require_non_empty(value, field_name)
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")
