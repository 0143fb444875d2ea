from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..core.enums import LeaveStatus
from ..database.memory_store import InMemoryStore
from .model import LeaveApplication
from .repository import LeaveApplicationRepository
from .validators import intervals_overlap


class InMemoryLeaveApplicationRepository(LeaveApplicationRepository):
    """Full-scan filtering over the in-memory table."""

    def __init__(self, store: InMemoryStore):
        self._store = store

    @property
    def _rows(self) -> dict[int, LeaveApplication]:
        return self._store.tables["leave_applications"]

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
        application_id = self._store.next_id("leave_applications")
        self._rows[application_id] = LeaveApplication(
            application_id=application_id,
            employee_id=int(employee_id),
            leave_type_id=int(leave_type_id),
            start_date=start_date,
            end_date=end_date,
            total_days=float(total_days),
            reason=reason,
            status=LeaveStatus.PENDING,
            applied_at=applied_at,
            first_day_half=bool(first_day_half),
            last_day_half=bool(last_day_half),
        )
        return application_id

    def get(self, *, application_id: int, for_update: bool = False) -> Optional[LeaveApplication]:
        return self._rows.get(int(application_id))

    def find_overlapping(
        self,
        *,
        employee_id: int,
        start_date: date,
        end_date: date,
        statuses: Iterable[LeaveStatus],
    ) -> Sequence[LeaveApplication]:
        wanted = set(statuses)
        items = [
            a for a in self._rows.values()
            if a.employee_id == int(employee_id)
            and a.status in wanted
            and intervals_overlap(a.start_date, a.end_date, start_date, end_date)
        ]
        items.sort(key=lambda a: a.start_date)
        return items

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
        current = self._rows.get(int(application_id))
        if not current or current.status != expected_status:
            return False
        self._rows[int(application_id)] = replace(
            current,
            status=status,
            decided_by=decided_by,
            decided_at=decided_at,
            comments=comments,
        )
        return True

    def list_applications(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        employee_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[LeaveApplication]:
        items = [
            a for a in self._rows.values()
            if (status is None or a.status == status) and (employee_id is None or a.employee_id == int(employee_id))
        ]
        items.sort(key=lambda a: (a.applied_at, a.application_id), reverse=True)
        return items[: int(limit)]
