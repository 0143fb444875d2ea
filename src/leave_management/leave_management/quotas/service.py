from __future__ import annotations

from typing import Mapping, Optional

from ..core.constants import DEFAULT_MAX_ATTEMPTS
from ..core.enums import APPROVER_ROLES, Role
from ..core.exceptions import AuthorizationError, NotFoundError
from ..database.unit_of_work import UnitOfWorkFactory, run_in_transaction
from ..directory.repository import EmployeeRepository, LeaveTypeRepository
from .ledger import QuotaLedger
from .model import LeaveQuota


def _quota_json(quota: LeaveQuota, leave_type_name: str) -> dict:
    return {
        "employee_id": quota.employee_id,
        "leave_type_id": quota.leave_type_id,
        "leave_type": leave_type_name,
        "year": quota.year,
        "total_quota": quota.total_quota,
        "used_quota": quota.used_quota,
        "remaining_quota": quota.remaining,
    }


def _utilization_percentage(used: float, total: float) -> int:
    if total <= 0:
        return 0
    return int(used * 100 / total + 0.5)


class QuotaService:
    """Use cases around leave balances: provisioning, reads and admin overrides."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        employees: EmployeeRepository,
        leave_types: LeaveTypeRepository,
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        self._uow_factory = uow_factory
        self._employees = employees
        self._leave_types = leave_types
        self._max_attempts = int(max_attempts)

    def _require_employee(self, employee_id: int) -> None:
        if not self._employees.get_by_id(int(employee_id)):
            raise NotFoundError("Employee not found")

    @staticmethod
    def _require_approver(current_role: Role) -> None:
        if current_role not in APPROVER_ROLES:
            raise AuthorizationError("You do not have permission to manage leave quotas")

    def provision(self, employee_id: int, year: int, overrides: Optional[Mapping[int, float]] = None) -> list[LeaveQuota]:
        """Onboarding hook: one quota row per known leave type for `year`."""

        self._require_employee(employee_id)
        leave_types = list(self._leave_types.list_all())

        def work(uow):
            uow.quotas.lock_employee(employee_id=int(employee_id))
            return QuotaLedger(uow.quotas).provision(employee_id, year, leave_types, overrides)

        return run_in_transaction(self._uow_factory, work, attempts=self._max_attempts)

    def provision_employee(
        self,
        *,
        current_role: Role,
        employee_id: int,
        year: int,
        overrides: Optional[Mapping[int, float]] = None,
    ) -> list[LeaveQuota]:
        self._require_approver(current_role)
        return self.provision(employee_id, year, overrides)

    def get_remaining(self, employee_id: int, leave_type_id: int, year: int) -> float:
        with self._uow_factory() as uow:
            return QuotaLedger(uow.quotas).get_remaining(employee_id, leave_type_id, year)

    def list_balances(
        self,
        *,
        current_role: Role,
        current_employee_id: int,
        employee_id: Optional[int] = None,
        year: Optional[int] = None,
    ) -> list[dict]:
        target = int(employee_id) if employee_id is not None else int(current_employee_id)
        if target != int(current_employee_id) and current_role not in APPROVER_ROLES:
            raise AuthorizationError("You can only view your own leave balance")
        self._require_employee(target)

        names = {t.leave_type_id: t.name for t in self._leave_types.list_all()}
        with self._uow_factory() as uow:
            quotas = uow.quotas.list_for_employee(employee_id=target, year=year)
        return [_quota_json(q, names.get(q.leave_type_id, "Unknown")) for q in quotas]

    def set_total_quota(
        self,
        *,
        current_role: Role,
        employee_id: int,
        leave_type_id: int,
        year: int,
        total_quota: float,
    ) -> dict:
        self._require_approver(current_role)
        leave_type = self._leave_types.get_by_id(int(leave_type_id))
        if not leave_type:
            raise NotFoundError("Leave type not found")

        def work(uow):
            uow.quotas.lock_employee(employee_id=int(employee_id))
            return QuotaLedger(uow.quotas).set_total(employee_id, leave_type_id, year, total_quota)

        quota = run_in_transaction(self._uow_factory, work, attempts=self._max_attempts)
        return _quota_json(quota, leave_type.name)

    def utilization_report(self, *, current_role: Role, year: int) -> list[dict]:
        """Per active employee and leave type: entitlement, usage and usage percentage."""

        self._require_approver(current_role)
        leave_types = list(self._leave_types.list_all())
        employees = list(self._employees.list_active())

        with self._uow_factory() as uow:
            quotas = {(q.employee_id, q.leave_type_id): q for q in uow.quotas.list_for_year(year=int(year))}

        report: list[dict] = []
        for employee in employees:
            utilization = []
            for leave_type in leave_types:
                q = quotas.get((employee.employee_id, leave_type.leave_type_id))
                total = q.total_quota if q else 0.0
                used = q.used_quota if q else 0.0
                utilization.append(
                    {
                        "leave_type_id": leave_type.leave_type_id,
                        "leave_type": leave_type.name,
                        "total_quota": total,
                        "used_quota": used,
                        "remaining_quota": total - used,
                        "utilization_percentage": _utilization_percentage(used, total),
                    }
                )
            report.append(
                {
                    "employee_id": employee.employee_id,
                    "full_name": employee.full_name,
                    "department": employee.department or "-",
                    "leave_utilization": utilization,
                }
            )
        return report
