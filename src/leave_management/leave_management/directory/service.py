from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import now_local
from ..common.validators import require_min_length, require_non_empty
from ..core.enums import APPROVER_ROLES, Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from ..quotas.service import QuotaService
from .model import LeaveType
from .repository import EmployeeRepository, LeaveTypeRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    employee_id: int
    full_name: str
    role: Role


class AuthService:
    """Use case: authenticate an employee (login)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def authenticate(self, username: str, password: str) -> SessionUser:
        employee = self._employees.get_by_username((username or "").strip())
        if not employee or not employee.is_active:
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(employee.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME'
            ok = False

        if not ok:
            raise AuthenticationError("Invalid username or password")

        return SessionUser(employee_id=employee.employee_id, full_name=employee.full_name, role=employee.role)


class DirectoryService:
    """Use case: onboard employees and read leave types."""

    def __init__(self, employees: EmployeeRepository, leave_types: LeaveTypeRepository, quotas: QuotaService):
        self._employees = employees
        self._leave_types = leave_types
        self._quotas = quotas

    def list_leave_types(self) -> Sequence[LeaveType]:
        return self._leave_types.list_all()

    def onboard_employee(
        self,
        *,
        current_role: Role,
        full_name: str,
        username: str,
        password: str,
        role: Role = Role.EMPLOYEE,
        department: Optional[str] = None,
        position: Optional[str] = None,
        join_date: Optional[date] = None,
    ) -> int:
        """Create the employee and provision this year's leave quotas."""

        if current_role not in APPROVER_ROLES:
            raise AuthorizationError("You do not have permission to add employees")

        full_name = require_non_empty(full_name, "Full name")
        username = require_non_empty(username, "Username")
        require_min_length(password, "Password", 6)

        if self._employees.get_by_username(username):
            raise ValidationError("Username already exists")
        if role == Role.ADMIN and current_role != Role.ADMIN:
            raise AuthorizationError("Only an admin can create another admin")

        employee_id = self._employees.create_employee(
            full_name=full_name,
            username=username,
            password_hash=generate_password_hash(password),
            role=role,
            department=(department or "").strip() or None,
            position=(position or "").strip() or None,
            join_date=join_date,
        )
        year = now_local().year
        created = self._quotas.provision(employee_id, year)
        logger.info("Onboarded employee %s (%s) with %d quota row(s) for %s", employee_id, username, len(created), year)
        return employee_id
