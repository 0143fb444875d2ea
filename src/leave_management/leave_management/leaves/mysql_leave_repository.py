from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..core.enums import LeaveStatus
from ..database.mysql_base import fetchall, fetchone, to_days
from .model import LeaveApplication
from .repository import LeaveApplicationRepository

_COLUMNS = """
    application_id, employee_id, leave_type_id, start_date, end_date,
    first_day_half, last_day_half, total_days, reason, status, applied_at,
    decided_by, decided_at, comments
"""


def _row_to_application(r: dict) -> LeaveApplication:
    return LeaveApplication(
        application_id=int(r["application_id"]),
        employee_id=int(r["employee_id"]),
        leave_type_id=int(r["leave_type_id"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        total_days=to_days(r["total_days"]),
        reason=r["reason"],
        status=LeaveStatus(r["status"]),
        applied_at=r["applied_at"],
        first_day_half=bool(r.get("first_day_half")),
        last_day_half=bool(r.get("last_day_half")),
        decided_by=r.get("decided_by"),
        decided_at=r.get("decided_at"),
        comments=r.get("comments"),
    )


class MySQLLeaveApplicationRepository(LeaveApplicationRepository):
    """Leave applications read and written through the cursor of an open transaction."""

    def __init__(self, cur):
        self._cur = cur

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
        self._cur.execute(
            """
            INSERT INTO leave_applications(
                employee_id, leave_type_id, start_date, end_date,
                first_day_half, last_day_half, total_days, reason, status, applied_at
            )
            VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
            """,
            (
                int(employee_id),
                int(leave_type_id),
                start_date,
                end_date,
                int(bool(first_day_half)),
                int(bool(last_day_half)),
                float(total_days),
                reason,
                LeaveStatus.PENDING.value,
                applied_at,
            ),
        )
        return int(self._cur.lastrowid)

    def get(self, *, application_id: int, for_update: bool = False) -> Optional[LeaveApplication]:
        self._cur.execute(
            f"""
            SELECT {_COLUMNS}
            FROM leave_applications
            WHERE application_id=%s
            {"FOR UPDATE" if for_update else ""}
            """,
            (int(application_id),),
        )
        r = fetchone(self._cur)
        if not r:
            return None
        return _row_to_application(r)

    def find_overlapping(
        self,
        *,
        employee_id: int,
        start_date: date,
        end_date: date,
        statuses: Iterable[LeaveStatus],
    ) -> Sequence[LeaveApplication]:
        status_values = [s.value for s in statuses]
        if not status_values:
            return []
        placeholders = ",".join(["%s"] * len(status_values))

        self._cur.execute(
            f"""
            SELECT {_COLUMNS}
            FROM leave_applications
            WHERE employee_id=%s
              AND status IN ({placeholders})
              AND start_date <= %s
              AND end_date >= %s
            ORDER BY start_date
            """,
            tuple([int(employee_id)] + status_values + [end_date, start_date]),
        )
        return [_row_to_application(r) for r in fetchall(self._cur)]

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
        self._cur.execute(
            """
            UPDATE leave_applications
            SET status=%s, decided_by=%s, decided_at=%s, comments=%s
            WHERE application_id=%s AND status=%s
            """,
            (
                status.value,
                int(decided_by) if decided_by is not None else None,
                decided_at,
                comments,
                int(application_id),
                expected_status.value,
            ),
        )
        return self._cur.rowcount > 0

    def list_applications(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        employee_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[LeaveApplication]:
        clauses = ["1=1"]
        params: list[object] = []

        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))

        where = " AND ".join(clauses)

        self._cur.execute(
            f"""
            SELECT {_COLUMNS}
            FROM leave_applications
            WHERE {where}
            ORDER BY applied_at DESC, application_id DESC
            LIMIT %s
            """,
            tuple(params + [int(limit)]),
        )
        return [_row_to_application(r) for r in fetchall(self._cur)]
