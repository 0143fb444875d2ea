from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import LeaveQuota


class QuotaRepository(Protocol):
    """Storage of LeaveQuota rows keyed by (employee_id, leave_type_id, year).

    Implementations are bound to one unit of work; every method runs inside
    its transaction.
    """

    def lock_employee(self, *, employee_id: int) -> None:
        """Block other units of work touching this employee's quota rows."""

        raise NotImplementedError

    def get(self, *, employee_id: int, leave_type_id: int, year: int) -> Optional[LeaveQuota]:
        raise NotImplementedError

    def list_for_employee(self, *, employee_id: int, year: Optional[int] = None) -> Sequence[LeaveQuota]:
        raise NotImplementedError

    def list_for_year(self, *, year: int) -> Sequence[LeaveQuota]:
        raise NotImplementedError

    def insert_if_absent(self, *, employee_id: int, leave_type_id: int, year: int, total_quota: float) -> bool:
        """Create a row with used_quota=0. Returns False when the row already exists."""

        raise NotImplementedError

    def compare_and_set_used(
        self,
        *,
        employee_id: int,
        leave_type_id: int,
        year: int,
        expected_used: float,
        new_used: float,
    ) -> bool:
        """Write used_quota only if it still equals expected_used."""

        raise NotImplementedError

    def set_total_quota(self, *, employee_id: int, leave_type_id: int, year: int, total_quota: float) -> bool:
        """Write total_quota unless the row is missing or already uses more than that."""

        raise NotImplementedError
