from __future__ import annotations

import pytest

from src.leave_management.leave_management.core.exceptions import (
    ConflictError,
    InsufficientBalanceError,
    NotFoundError,
    ValidationError,
)
from src.leave_management.leave_management.database.memory_store import InMemoryStore
from src.leave_management.leave_management.directory.model import LeaveType
from src.leave_management.leave_management.quotas.ledger import QuotaLedger
from src.leave_management.leave_management.quotas.memory_quota_repository import InMemoryQuotaRepository

LEAVE_TYPES = [LeaveType(1, "Paid Leave", 20), LeaveType(2, "Sick Leave", 10), LeaveType(3, "Casual Leave", 5)]


def _ledger():
    repo = InMemoryQuotaRepository(InMemoryStore())
    ledger = QuotaLedger(repo)
    ledger.provision(7, 2024, LEAVE_TYPES)
    return ledger, repo


def test_provision_creates_one_row_per_leave_type_and_is_idempotent():
    ledger, repo = _ledger()
    assert [q.total_quota for q in repo.list_for_employee(employee_id=7, year=2024)] == [20, 10, 5]

    ledger.debit(7, 2, 2024, 3)
    assert ledger.provision(7, 2024, LEAVE_TYPES) == []
    assert ledger.get(7, 2, 2024).used_quota == 3


def test_provision_applies_overrides_and_rejects_negative_totals():
    ledger = QuotaLedger(InMemoryQuotaRepository(InMemoryStore()))
    created = ledger.provision(8, 2024, LEAVE_TYPES, overrides={1: 25})
    assert {q.leave_type_id: q.total_quota for q in created} == {1: 25, 2: 10, 3: 5}

    with pytest.raises(ValidationError):
        ledger.provision(9, 2024, LEAVE_TYPES, overrides={3: -1})


def test_get_remaining_unknown_quota_raises_not_found():
    ledger, _ = _ledger()
    with pytest.raises(NotFoundError):
        ledger.get_remaining(7, 1, 2025)


def test_debit_and_credit_adjust_used_quota():
    ledger, _ = _ledger()
    ledger.debit(7, 1, 2024, 4.5)
    assert ledger.get_remaining(7, 1, 2024) == 15.5

    ledger.credit(7, 1, 2024, 2)
    assert ledger.get_remaining(7, 1, 2024) == 17.5


def test_debit_beyond_remaining_is_rejected_without_change():
    ledger, _ = _ledger()
    ledger.debit(7, 3, 2024, 4)
    with pytest.raises(InsufficientBalanceError) as exc:
        ledger.debit(7, 3, 2024, 1.5)
    assert "1 days remaining" in str(exc.value)
    assert ledger.get(7, 3, 2024).used_quota == 4


def test_debit_can_exhaust_quota_exactly():
    ledger, _ = _ledger()
    ledger.debit(7, 3, 2024, 5)
    assert ledger.get_remaining(7, 3, 2024) == 0


@pytest.mark.parametrize("days", [0, -1, 0.3])
def test_debit_rejects_non_positive_or_non_half_day_amounts(days):
    ledger, _ = _ledger()
    with pytest.raises(ValidationError):
        ledger.debit(7, 1, 2024, days)


def test_credit_never_drops_used_below_zero():
    ledger, _ = _ledger()
    ledger.debit(7, 2, 2024, 1)
    ledger.credit(7, 2, 2024, 3)
    assert ledger.get(7, 2, 2024).used_quota == 0
    # Nothing left to credit: no-op.
    assert ledger.credit(7, 2, 2024, 1).used_quota == 0


def test_set_total_cannot_drop_below_used():
    ledger, _ = _ledger()
    ledger.debit(7, 1, 2024, 6)
    with pytest.raises(ValidationError):
        ledger.set_total(7, 1, 2024, 5)

    assert ledger.set_total(7, 1, 2024, 6).remaining == 0


def test_lost_compare_and_swap_raises_conflict():
    ledger, repo = _ledger()

    class StaleRepo:
        def __getattr__(self, name):
            return getattr(repo, name)

        def compare_and_set_used(self, **kwargs):
            return False

    with pytest.raises(ConflictError):
        QuotaLedger(StaleRepo()).debit(7, 1, 2024, 1)
    assert ledger.get(7, 1, 2024).used_quota == 0


@pytest.mark.parametrize("total", [float("nan"), float("inf"), -1, 367, 2.3])
def test_set_total_rejects_non_finite_out_of_range_or_fractional_totals(total):
    ledger, _ = _ledger()
    with pytest.raises(ValidationError):
        ledger.set_total(7, 1, 2024, total)
    assert ledger.get(7, 1, 2024).total_quota == 20


@pytest.mark.parametrize("total", [float("nan"), float("inf"), 1000])
def test_provision_rejects_non_finite_or_oversized_overrides(total):
    repo = InMemoryQuotaRepository(InMemoryStore())
    with pytest.raises(ValidationError):
        QuotaLedger(repo).provision(9, 2024, LEAVE_TYPES, overrides={1: total})


@pytest.mark.parametrize("days", [float("nan"), float("inf")])
def test_debit_rejects_non_finite_amounts(days):
    ledger, _ = _ledger()
    with pytest.raises(ValidationError):
        ledger.debit(7, 1, 2024, days)
    assert ledger.get(7, 1, 2024).used_quota == 0
