from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Owned by the employee directory; the leave core only reads it.
    """

    employee_id: int
    full_name: str
    username: str
    password_hash: str
    role: Role
    department: Optional[str]
    position: Optional[str]
    join_date: Optional[date]
    is_active: bool = True


@dataclass(frozen=True)
class LeaveType:
    leave_type_id: int
    name: str
    default_quota_days: float
    description: Optional[str] = None
