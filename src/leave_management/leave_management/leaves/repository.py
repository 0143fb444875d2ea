from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveApplication


class LeaveApplicationRepository(Protocol):
    def create(
        self,
        *,
        employee_id: int,
        leave_type_id: int,
        start_date: date,
        end_date: date,
        first_day_half: bool,
        last_day_half: bool,
        total_days: float,
        reason: str,
        applied_at: datetime,
    ) -> int:
        """Insert a pending application and return its id."""

        raise NotImplementedError

    def get(self, *, application_id: int, for_update: bool = False) -> Optional[LeaveApplication]:
        raise NotImplementedError

    def find_overlapping(
        self,
        *,
        employee_id: int,
        start_date: date,
        end_date: date,
        statuses: Iterable[LeaveStatus],
    ) -> Sequence[LeaveApplication]:
        """Applications of the employee in one of `statuses` sharing a calendar day with the range."""

        raise NotImplementedError

    def update_status(
        self,
        *,
        application_id: int,
        expected_status: LeaveStatus,
        status: LeaveStatus,
        decided_by: Optional[int],
        decided_at: datetime,
        comments: Optional[str] = None,
    ) -> bool:
        """Conditional transition: only applies while the row is still in expected_status."""

        raise NotImplementedError

    def list_applications(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        employee_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[LeaveApplication]:
        """Newest first."""

        raise NotImplementedError
