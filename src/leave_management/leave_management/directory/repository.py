from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Employee, LeaveType


class EmployeeRepository(Protocol):
    """Read side of the employee directory.

    Note (DIP): services depend on this interface, never on a concrete DB.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_active(self) -> Sequence[Employee]:
        raise NotImplementedError

    def create_employee(
        self,
        *,
        full_name: str,
        username: str,
        password_hash: str,
        role: Role,
        department: Optional[str] = None,
        position: Optional[str] = None,
        join_date: Optional[date] = None,
    ) -> int:
        raise NotImplementedError


class LeaveTypeRepository(Protocol):
    def get_by_id(self, leave_type_id: int) -> Optional[LeaveType]:
        raise NotImplementedError

    def list_all(self) -> Sequence[LeaveType]:
        raise NotImplementedError

    def create(self, *, name: str, default_quota_days: float, description: Optional[str] = None) -> int:
        raise NotImplementedError
