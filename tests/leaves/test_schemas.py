from __future__ import annotations

import pytest

from src.leave_management.leave_management.core.exceptions import ValidationError
from src.leave_management.leave_management.leaves.schemas import (
    ProvisionQuotaRequest,
    SetQuotaRequest,
    SubmitLeaveRequest,
)


def _submit_body(**overrides):
    body = {"leave_type_id": 1, "start_date": "2024-03-01", "end_date": "2024-03-02", "reason": "Trip"}
    body.update(overrides)
    return body


def test_submit_request_accepts_integral_floats():
    assert SubmitLeaveRequest.from_json(_submit_body(leave_type_id=2.0)).leave_type_id == 2


@pytest.mark.parametrize("value", [1.9, float("nan"), float("inf"), True, "x"])
def test_submit_request_rejects_non_integer_ids(value):
    with pytest.raises(ValidationError):
        SubmitLeaveRequest.from_json(_submit_body(leave_type_id=value))


def test_set_quota_request_rejects_fractional_year():
    with pytest.raises(ValidationError):
        SetQuotaRequest.from_json({"year": 2024.7, "total_quota": 10})


@pytest.mark.parametrize("total", [float("nan"), float("inf"), 10000, -0.5, 3.3, "10"])
def test_set_quota_request_rejects_invalid_totals(total):
    with pytest.raises(ValidationError):
        SetQuotaRequest.from_json({"year": 2024, "total_quota": total})


def test_set_quota_request_accepts_half_days():
    assert SetQuotaRequest.from_json({"year": 2024, "total_quota": 12.5}).total_quota == 12.5


@pytest.mark.parametrize("days", ["Infinity", "NaN", float("inf"), float("nan"), 500, True])
def test_provision_request_rejects_invalid_overrides(days):
    with pytest.raises(ValidationError):
        ProvisionQuotaRequest.from_json({"overrides": {"1": days}}, default_year=2024)


def test_provision_request_defaults_year_and_parses_overrides():
    body = ProvisionQuotaRequest.from_json({"overrides": {"1": 25}}, default_year=2024)
    assert body.year == 2024
    assert body.overrides == {1: 25.0}
