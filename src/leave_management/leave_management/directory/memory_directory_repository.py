from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import Role
from ..database.memory_store import InMemoryStore
from .model import Employee, LeaveType
from .repository import EmployeeRepository, LeaveTypeRepository


class InMemoryEmployeeRepository(EmployeeRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    @property
    def _rows(self) -> dict[int, Employee]:
        return self._store.tables["employees"]

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._rows.get(int(employee_id))

    def get_by_username(self, username: str) -> Optional[Employee]:
        with self._store.lock:
            for employee in self._rows.values():
                if employee.username == username:
                    return employee
        return None

    def list_active(self) -> Sequence[Employee]:
        with self._store.lock:
            return sorted((e for e in self._rows.values() if e.is_active), key=lambda e: e.employee_id)

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
        with self._store.lock:
            employee_id = self._store.next_id("employees")
            self._rows[employee_id] = Employee(
                employee_id=employee_id,
                full_name=full_name,
                username=username,
                password_hash=password_hash,
                role=role,
                department=department,
                position=position,
                join_date=join_date,
            )
            return employee_id


class InMemoryLeaveTypeRepository(LeaveTypeRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    @property
    def _rows(self) -> dict[int, LeaveType]:
        return self._store.tables["leave_types"]

    def get_by_id(self, leave_type_id: int) -> Optional[LeaveType]:
        return self._rows.get(int(leave_type_id))

    def list_all(self) -> Sequence[LeaveType]:
        with self._store.lock:
            return sorted(self._rows.values(), key=lambda t: t.leave_type_id)

    def create(self, *, name: str, default_quota_days: float, description: Optional[str] = None) -> int:
        with self._store.lock:
            leave_type_id = self._store.next_id("leave_types")
            self._rows[leave_type_id] = LeaveType(
                leave_type_id=leave_type_id,
                name=name,
                default_quota_days=float(default_quota_days),
                description=description,
            )
            return leave_type_id
