from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LeaveQuota:
    """Entitlement and consumption of one leave type for one employee in one year."""

    employee_id: int
    leave_type_id: int
    year: int
    total_quota: float
    used_quota: float = 0.0

    @property
    def remaining(self) -> float:
        return self.total_quota - self.used_quota
