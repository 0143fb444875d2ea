from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import as_calendar_date, now_local
from ..common.locks import KeyedLock
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_ADMIN_LIST_LIMIT, DEFAULT_LIST_LIMIT, DEFAULT_MAX_ATTEMPTS
from ..core.enums import ACTIVE_STATUSES, APPROVER_ROLES, DECISIONS, LeaveStatus, Role
from ..core.exceptions import (
    AuthorizationError,
    ConflictError,
    InsufficientBalanceError,
    InvalidTransitionError,
    NotFoundError,
    OverlappingRequestError,
    ValidationError,
)
from ..database.unit_of_work import UnitOfWorkFactory, run_in_transaction
from ..directory.repository import EmployeeRepository, LeaveTypeRepository
from ..quotas.ledger import QuotaLedger
from .model import LeaveApplication
from .validators import days_between_inclusive, ensure_sufficient_balance

logger = logging.getLogger(__name__)


class LeaveService:
    """Leave application lifecycle: pending -> approved | rejected | cancelled.

    This is the only caller of quota ledger mutations. Quota is debited when a
    leave is approved, never at submission, so pending and cancelled
    applications leave the ledger untouched.

    submit() and decide() serialize per employee: in-process through a keyed
    lock and across processes through the unit of work's employee row lock.
    A lost write race is retried up to `max_attempts` times before
    ConflictError reaches the caller.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        employees: EmployeeRepository,
        leave_types: LeaveTypeRepository,
        *,
        locks: Optional[KeyedLock] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        clock: Callable[[], datetime] = now_local,
    ):
        self._uow_factory = uow_factory
        self._employees = employees
        self._leave_types = leave_types
        self._locks = locks or KeyedLock()
        self._max_attempts = int(max_attempts)
        self._clock = clock

    def _transaction(self, work):
        return run_in_transaction(self._uow_factory, work, attempts=self._max_attempts)

    def submit(
        self,
        *,
        employee_id: int,
        leave_type_id: int,
        start_date: date,
        end_date: date,
        first_day_half: bool = False,
        last_day_half: bool = False,
        reason: str,
    ) -> LeaveApplication:
        employee_id = int(employee_id)
        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("Employee not found")
        leave_type = self._leave_types.get_by_id(int(leave_type_id))
        if not leave_type:
            raise NotFoundError("Leave type not found")

        reason = require_non_empty(reason, "Reason")
        total_days = days_between_inclusive(start_date, end_date, first_day_half, last_day_half)
        start = as_calendar_date(start_date)
        end = as_calendar_date(end_date)

        def work(uow) -> LeaveApplication:
            uow.quotas.lock_employee(employee_id=employee_id)

            overlapping = uow.applications.find_overlapping(
                employee_id=employee_id,
                start_date=start,
                end_date=end,
                statuses=ACTIVE_STATUSES,
            )
            if overlapping:
                raise OverlappingRequestError("You have an overlapping leave request for these dates")

            try:
                remaining = QuotaLedger(uow.quotas).get_remaining(employee_id, leave_type.leave_type_id, start.year)
            except NotFoundError as exc:
                raise InsufficientBalanceError(
                    f"No {leave_type.name} quota has been provisioned for {start.year}"
                ) from exc
            ensure_sufficient_balance(total_days, remaining)

            application_id = uow.applications.create(
                employee_id=employee_id,
                leave_type_id=leave_type.leave_type_id,
                start_date=start,
                end_date=end,
                first_day_half=bool(first_day_half),
                last_day_half=bool(last_day_half),
                total_days=total_days,
                reason=reason,
                applied_at=self._clock(),
            )
            return uow.applications.get(application_id=application_id)

        with self._locks.hold(employee_id):
            application = self._transaction(work)

        logger.info(
            "Leave application %s submitted: employee=%s type=%s %s..%s (%g day(s))",
            application.application_id, employee_id, leave_type.name, start, end, total_days,
        )
        return application

    def decide(
        self,
        *,
        current_role: Role,
        application_id: int,
        approver_id: int,
        decision: LeaveStatus | str,
        comments: Optional[str] = None,
    ) -> LeaveApplication:
        if current_role not in APPROVER_ROLES:
            raise AuthorizationError("You do not have permission to decide leave applications")

        try:
            decision = LeaveStatus(decision)
        except ValueError:
            raise ValidationError("Invalid status")
        if decision not in DECISIONS:
            raise ValidationError("Invalid status")

        comments = (comments or "").strip() or None
        employee_id = self._owner_of(application_id)

        def work(uow) -> LeaveApplication:
            uow.quotas.lock_employee(employee_id=employee_id)

            application = uow.applications.get(application_id=int(application_id), for_update=True)
            if not application:
                raise NotFoundError("Leave application not found")
            if application.status != LeaveStatus.PENDING:
                raise InvalidTransitionError(
                    f"Cannot update a non-pending leave request (status: {application.status.value})"
                )

            if decision == LeaveStatus.APPROVED:
                QuotaLedger(uow.quotas).debit(
                    application.employee_id,
                    application.leave_type_id,
                    application.quota_year,
                    application.total_days,
                )

            ok = uow.applications.update_status(
                application_id=application.application_id,
                expected_status=LeaveStatus.PENDING,
                status=decision,
                decided_by=int(approver_id),
                decided_at=self._clock(),
                comments=comments,
            )
            if not ok:
                raise ConflictError("Leave application changed concurrently")
            return uow.applications.get(application_id=application.application_id)

        with self._locks.hold(employee_id):
            application = self._transaction(work)

        logger.info("Leave application %s %s by %s", application.application_id, decision.value, approver_id)
        return application

    def cancel(self, *, application_id: int, requester_id: int) -> LeaveApplication:
        def work(uow) -> LeaveApplication:
            application = uow.applications.get(application_id=int(application_id), for_update=True)
            if not application:
                raise NotFoundError("Leave application not found")
            if application.employee_id != int(requester_id):
                raise AuthorizationError("You are not authorized to cancel this leave request")
            if application.status != LeaveStatus.PENDING:
                raise InvalidTransitionError("Cannot cancel a non-pending leave request")

            ok = uow.applications.update_status(
                application_id=application.application_id,
                expected_status=LeaveStatus.PENDING,
                status=LeaveStatus.CANCELLED,
                decided_by=None,
                decided_at=self._clock(),
            )
            if not ok:
                raise ConflictError("Leave application changed concurrently")
            return uow.applications.get(application_id=application.application_id)

        application = self._transaction(work)
        logger.info("Leave application %s cancelled by employee %s", application.application_id, requester_id)
        return application

    def get(self, *, application_id: int, requester_id: int, current_role: Role) -> LeaveApplication:
        with self._uow_factory() as uow:
            application = uow.applications.get(application_id=int(application_id))
        if not application:
            raise NotFoundError("Leave application not found")
        if application.employee_id != int(requester_id) and current_role not in APPROVER_ROLES:
            raise AuthorizationError("You are not authorized to view this leave request")
        return application

    def list_for_employee(self, *, employee_id: int, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[LeaveApplication]:
        with self._uow_factory() as uow:
            return uow.applications.list_applications(employee_id=int(employee_id), limit=limit)

    def list_all(
        self,
        *,
        current_role: Role,
        status: Optional[LeaveStatus] = None,
        employee_id: Optional[int] = None,
        limit: int = DEFAULT_ADMIN_LIST_LIMIT,
    ) -> Sequence[LeaveApplication]:
        if current_role not in APPROVER_ROLES:
            raise AuthorizationError("You do not have permission to view all leave applications")
        with self._uow_factory() as uow:
            return uow.applications.list_applications(status=status, employee_id=employee_id, limit=limit)

    def _owner_of(self, application_id: int) -> int:
        with self._uow_factory() as uow:
            application = uow.applications.get(application_id=int(application_id))
        if not application:
            raise NotFoundError("Leave application not found")
        return application.employee_id
