from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class LeaveApplication:
    application_id: int
    employee_id: int
    leave_type_id: int
    start_date: date
    end_date: date
    total_days: float
    reason: str
    status: LeaveStatus
    applied_at: datetime
    first_day_half: bool = False
    last_day_half: bool = False
    decided_by: Optional[int] = None
    decided_at: Optional[datetime] = None
    comments: Optional[str] = None

    @property
    def quota_year(self) -> int:
        """Year of the quota row charged when this leave is approved."""

        return self.start_date.year
