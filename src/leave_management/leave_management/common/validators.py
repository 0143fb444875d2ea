from __future__ import annotations

import math

from ..core.constants import HALF_DAY, MAX_QUOTA_DAYS
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def _finite_half_days(value: float, field_name: str) -> float:
    try:
        days = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    # NaN and infinity compare False against every bound below.
    if not math.isfinite(days):
        raise ValidationError(f"{field_name} must be a finite number")
    if days % HALF_DAY != 0:
        raise ValidationError(f"{field_name} must be a multiple of {HALF_DAY:g}")
    return days


def require_positive_days(value: float, field_name: str = "Days") -> float:
    days = _finite_half_days(value, field_name)
    if days <= 0:
        raise ValidationError(f"{field_name} must be greater than 0")
    return days


def require_quota_days(value: float, field_name: str) -> float:
    """A quota total: 0..MAX_QUOTA_DAYS in half-day steps."""
    days = _finite_half_days(value, field_name)
    if days < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    if days > MAX_QUOTA_DAYS:
        raise ValidationError(f"{field_name} cannot exceed {MAX_QUOTA_DAYS:g} days")
    return days
