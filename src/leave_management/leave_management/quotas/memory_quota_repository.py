from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

from ..database.memory_store import InMemoryStore
from .model import LeaveQuota
from .repository import QuotaRepository


class InMemoryQuotaRepository(QuotaRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    @property
    def _rows(self) -> dict[tuple[int, int, int], LeaveQuota]:
        return self._store.tables["leave_quotas"]

    def lock_employee(self, *, employee_id: int) -> None:
        # The unit of work already holds the store lock.
        return None

    def get(self, *, employee_id: int, leave_type_id: int, year: int) -> Optional[LeaveQuota]:
        return self._rows.get((int(employee_id), int(leave_type_id), int(year)))

    def list_for_employee(self, *, employee_id: int, year: Optional[int] = None) -> Sequence[LeaveQuota]:
        items = [
            q for q in self._rows.values()
            if q.employee_id == int(employee_id) and (year is None or q.year == int(year))
        ]
        items.sort(key=lambda q: (-q.year, q.leave_type_id))
        return items

    def list_for_year(self, *, year: int) -> Sequence[LeaveQuota]:
        items = [q for q in self._rows.values() if q.year == int(year)]
        items.sort(key=lambda q: (q.employee_id, q.leave_type_id))
        return items

    def insert_if_absent(self, *, employee_id: int, leave_type_id: int, year: int, total_quota: float) -> bool:
        key = (int(employee_id), int(leave_type_id), int(year))
        if key in self._rows:
            return False
        self._rows[key] = LeaveQuota(*key, total_quota=float(total_quota), used_quota=0.0)
        return True

    def compare_and_set_used(
        self,
        *,
        employee_id: int,
        leave_type_id: int,
        year: int,
        expected_used: float,
        new_used: float,
    ) -> bool:
        key = (int(employee_id), int(leave_type_id), int(year))
        quota = self._rows.get(key)
        if not quota or quota.used_quota != float(expected_used) or float(new_used) > quota.total_quota:
            return False
        self._rows[key] = replace(quota, used_quota=float(new_used))
        return True

    def set_total_quota(self, *, employee_id: int, leave_type_id: int, year: int, total_quota: float) -> bool:
        key = (int(employee_id), int(leave_type_id), int(year))
        quota = self._rows.get(key)
        if not quota or quota.used_quota > float(total_quota):
            return False
        self._rows[key] = replace(quota, total_quota=float(total_quota))
        return True
