from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_days
from .model import LeaveType
from .repository import LeaveTypeRepository


def _row_to_leave_type(r: dict) -> LeaveType:
    return LeaveType(
        leave_type_id=int(r["leave_type_id"]),
        name=r["name"],
        default_quota_days=to_days(r["default_quota_days"]),
        description=r.get("description"),
    )


class MySQLLeaveTypeRepository(LeaveTypeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, leave_type_id: int) -> Optional[LeaveType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT leave_type_id, name, default_quota_days, description FROM leave_types WHERE leave_type_id=%s",
                (int(leave_type_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return _row_to_leave_type(r)

    def list_all(self) -> Sequence[LeaveType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT leave_type_id, name, default_quota_days, description FROM leave_types ORDER BY leave_type_id")
            return [_row_to_leave_type(r) for r in fetchall(cur)]

    def create(self, *, name: str, default_quota_days: float, description: Optional[str] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO leave_types(name, default_quota_days, description) VALUES(%s,%s,%s)",
                (name, float(default_quota_days), description),
            )
            return int(cur.lastrowid)
