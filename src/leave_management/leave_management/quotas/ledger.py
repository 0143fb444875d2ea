from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional

from ..common.validators import require_positive_days, require_quota_days
from ..core.exceptions import ConflictError, InsufficientBalanceError, NotFoundError, ValidationError
from ..directory.model import LeaveType
from .model import LeaveQuota
from .repository import QuotaRepository

logger = logging.getLogger(__name__)


class QuotaLedger:
    """Authoritative entitlement/consumption record per employee, leave type and year.

    The ledger works on a repository bound to the caller's unit of work, so a
    debit commits or rolls back together with whatever else the caller wrote.
    Writes are compare-and-swap on used_quota: a lost race raises ConflictError.
    """

    def __init__(self, quotas: QuotaRepository):
        self._quotas = quotas

    def get(self, employee_id: int, leave_type_id: int, year: int) -> LeaveQuota:
        quota = self._quotas.get(employee_id=int(employee_id), leave_type_id=int(leave_type_id), year=int(year))
        if not quota:
            raise NotFoundError(
                f"No leave quota for employee {employee_id}, leave type {leave_type_id}, year {year}"
            )
        return quota

    def get_remaining(self, employee_id: int, leave_type_id: int, year: int) -> float:
        return self.get(employee_id, leave_type_id, year).remaining

    def debit(self, employee_id: int, leave_type_id: int, year: int, days: float) -> LeaveQuota:
        days = require_positive_days(days)
        quota = self.get(employee_id, leave_type_id, year)
        if days > quota.remaining:
            raise InsufficientBalanceError(
                f"Insufficient leave balance. You have {quota.remaining:g} days remaining."
            )

        new_used = quota.used_quota + days
        self._swap_used(quota, new_used)
        logger.info(
            "Debited %g day(s) from quota employee=%s leave_type=%s year=%s (used %g -> %g of %g)",
            days, quota.employee_id, quota.leave_type_id, quota.year, quota.used_quota, new_used, quota.total_quota,
        )
        return LeaveQuota(quota.employee_id, quota.leave_type_id, quota.year, quota.total_quota, new_used)

    def credit(self, employee_id: int, leave_type_id: int, year: int, days: float) -> LeaveQuota:
        days = require_positive_days(days)
        quota = self.get(employee_id, leave_type_id, year)

        new_used = max(quota.used_quota - days, 0.0)
        if new_used == quota.used_quota:
            return quota
        self._swap_used(quota, new_used)
        logger.info(
            "Credited %g day(s) to quota employee=%s leave_type=%s year=%s (used %g -> %g)",
            days, quota.employee_id, quota.leave_type_id, quota.year, quota.used_quota, new_used,
        )
        return LeaveQuota(quota.employee_id, quota.leave_type_id, quota.year, quota.total_quota, new_used)

    def provision(
        self,
        employee_id: int,
        year: int,
        leave_types: Iterable[LeaveType],
        overrides: Optional[Mapping[int, float]] = None,
    ) -> list[LeaveQuota]:
        """Create the missing quota rows of an employee for a year.

        Existing rows are left untouched, so provisioning twice is a no-op.
        """

        overrides = overrides or {}
        created: list[LeaveQuota] = []
        for leave_type in leave_types:
            total = overrides.get(leave_type.leave_type_id, leave_type.default_quota_days)
            total = require_quota_days(total, f"Quota for {leave_type.name}")
            inserted = self._quotas.insert_if_absent(
                employee_id=int(employee_id),
                leave_type_id=leave_type.leave_type_id,
                year=int(year),
                total_quota=total,
            )
            if inserted:
                created.append(LeaveQuota(int(employee_id), leave_type.leave_type_id, int(year), total, 0.0))

        if created:
            logger.info("Provisioned %d quota row(s) for employee=%s year=%s", len(created), employee_id, year)
        return created

    def set_total(self, employee_id: int, leave_type_id: int, year: int, total_quota: float) -> LeaveQuota:
        total_quota = require_quota_days(total_quota, "Total quota")
        quota = self.get(employee_id, leave_type_id, year)
        if total_quota < quota.used_quota:
            raise ValidationError(
                f"Total quota cannot be lower than the {quota.used_quota:g} day(s) already used"
            )

        ok = self._quotas.set_total_quota(
            employee_id=quota.employee_id,
            leave_type_id=quota.leave_type_id,
            year=quota.year,
            total_quota=total_quota,
        )
        if not ok:
            raise ConflictError("Leave quota changed while updating, please try again")
        return LeaveQuota(quota.employee_id, quota.leave_type_id, quota.year, total_quota, quota.used_quota)

    def _swap_used(self, quota: LeaveQuota, new_used: float) -> None:
        ok = self._quotas.compare_and_set_used(
            employee_id=quota.employee_id,
            leave_type_id=quota.leave_type_id,
            year=quota.year,
            expected_used=quota.used_quota,
            new_used=new_used,
        )
        if not ok:
            raise ConflictError("Leave quota changed concurrently, please try again")
