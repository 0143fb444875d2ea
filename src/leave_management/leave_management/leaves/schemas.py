"""Typed request bodies, validated at the HTTP boundary before reaching services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_quota_days
from ..core.exceptions import ValidationError


def _require_mapping(payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise ValidationError("Request body must be a JSON object")
    return payload


def _date_field(payload: Mapping[str, Any], name: str) -> date:
    value = payload.get(name)
    if not isinstance(value, str):
        raise ValidationError(f"{name} is required (YYYY-MM-DD)")
    try:
        # Accept full ISO timestamps too; only the calendar day matters.
        return parse_iso_date(value.strip()[:10])
    except ValueError:
        raise ValidationError(f"{name} must be a date (YYYY-MM-DD)")


def _int_field(payload: Mapping[str, Any], name: str) -> int:
    value = payload.get(name)
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(f"{name} must be an integer")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be an integer")
    if number <= 0:
        raise ValidationError(f"{name} must be positive")
    return number


def _bool_field(payload: Mapping[str, Any], name: str) -> bool:
    value = payload.get(name, False)
    if not isinstance(value, bool):
        raise ValidationError(f"{name} must be true or false")
    return value


def _optional_str(payload: Mapping[str, Any], name: str) -> Optional[str]:
    value = payload.get(name)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a string")
    return value


@dataclass(frozen=True)
class SubmitLeaveRequest:
    leave_type_id: int
    start_date: date
    end_date: date
    first_day_half: bool
    last_day_half: bool
    reason: str

    @classmethod
    def from_json(cls, payload: Any) -> "SubmitLeaveRequest":
        payload = _require_mapping(payload)
        return cls(
            leave_type_id=_int_field(payload, "leave_type_id"),
            start_date=_date_field(payload, "start_date"),
            end_date=_date_field(payload, "end_date"),
            first_day_half=_bool_field(payload, "first_day_half"),
            last_day_half=_bool_field(payload, "last_day_half"),
            reason=_optional_str(payload, "reason") or "",
        )


@dataclass(frozen=True)
class DecideLeaveRequest:
    status: str
    comments: Optional[str]

    @classmethod
    def from_json(cls, payload: Any) -> "DecideLeaveRequest":
        payload = _require_mapping(payload)
        status = _optional_str(payload, "status")
        if not status:
            raise ValidationError("status is required")
        return cls(status=status.strip().lower(), comments=_optional_str(payload, "comments"))


@dataclass(frozen=True)
class ProvisionQuotaRequest:
    year: int
    overrides: dict[int, float]

    @classmethod
    def from_json(cls, payload: Any, *, default_year: int) -> "ProvisionQuotaRequest":
        payload = _require_mapping(payload or {})
        year = _int_field(payload, "year") if "year" in payload else int(default_year)

        raw = payload.get("overrides") or {}
        if not isinstance(raw, Mapping):
            raise ValidationError("overrides must map leave_type_id to days")
        overrides: dict[int, float] = {}
        for key, days in raw.items():
            if isinstance(days, bool) or not isinstance(days, (int, float)):
                raise ValidationError("overrides must map leave_type_id to days")
            try:
                leave_type_id = int(key)
            except (TypeError, ValueError):
                raise ValidationError("overrides must map leave_type_id to days")
            overrides[leave_type_id] = require_quota_days(days, f"Override for leave type {leave_type_id}")
        return cls(year=year, overrides=overrides)


@dataclass(frozen=True)
class SetQuotaRequest:
    year: int
    total_quota: float

    @classmethod
    def from_json(cls, payload: Any) -> "SetQuotaRequest":
        payload = _require_mapping(payload)
        value = payload.get("total_quota")
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValidationError("total_quota must be a number")
        return cls(year=_int_field(payload, "year"), total_quota=require_quota_days(value, "total_quota"))
