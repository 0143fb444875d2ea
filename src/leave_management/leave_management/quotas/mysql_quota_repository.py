from __future__ import annotations

from typing import Optional, Sequence

from ..database.mysql_base import fetchall, fetchone, to_days
from .model import LeaveQuota
from .repository import QuotaRepository


def _row_to_quota(r: dict) -> LeaveQuota:
    return LeaveQuota(
        employee_id=int(r["employee_id"]),
        leave_type_id=int(r["leave_type_id"]),
        year=int(r["year"]),
        total_quota=to_days(r["total_quota"]),
        used_quota=to_days(r["used_quota"]),
    )


class MySQLQuotaRepository(QuotaRepository):
    """Quota rows read and written through the cursor of an open transaction."""

    def __init__(self, cur):
        self._cur = cur

    def lock_employee(self, *, employee_id: int) -> None:
        self._cur.execute(
            "SELECT employee_id FROM employees WHERE employee_id=%s FOR UPDATE",
            (int(employee_id),),
        )
        fetchall(self._cur)

    def get(self, *, employee_id: int, leave_type_id: int, year: int) -> Optional[LeaveQuota]:
        self._cur.execute(
            """
            SELECT employee_id, leave_type_id, year, total_quota, used_quota
            FROM leave_quotas
            WHERE employee_id=%s AND leave_type_id=%s AND year=%s
            FOR UPDATE
            """,
            (int(employee_id), int(leave_type_id), int(year)),
        )
        r = fetchone(self._cur)
        if not r:
            return None
        return _row_to_quota(r)

    def list_for_employee(self, *, employee_id: int, year: Optional[int] = None) -> Sequence[LeaveQuota]:
        clauses = ["employee_id=%s"]
        params: list[object] = [int(employee_id)]
        if year is not None:
            clauses.append("year=%s")
            params.append(int(year))

        self._cur.execute(
            f"""
            SELECT employee_id, leave_type_id, year, total_quota, used_quota
            FROM leave_quotas
            WHERE {" AND ".join(clauses)}
            ORDER BY year DESC, leave_type_id
            """,
            tuple(params),
        )
        return [_row_to_quota(r) for r in fetchall(self._cur)]

    def list_for_year(self, *, year: int) -> Sequence[LeaveQuota]:
        self._cur.execute(
            """
            SELECT employee_id, leave_type_id, year, total_quota, used_quota
            FROM leave_quotas
            WHERE year=%s
            ORDER BY employee_id, leave_type_id
            """,
            (int(year),),
        )
        return [_row_to_quota(r) for r in fetchall(self._cur)]

    def insert_if_absent(self, *, employee_id: int, leave_type_id: int, year: int, total_quota: float) -> bool:
        self._cur.execute(
            """
            INSERT IGNORE INTO leave_quotas(employee_id, leave_type_id, year, total_quota, used_quota)
            VALUES(%s,%s,%s,%s,0)
            """,
            (int(employee_id), int(leave_type_id), int(year), float(total_quota)),
        )
        return self._cur.rowcount > 0

    def compare_and_set_used(
        self,
        *,
        employee_id: int,
        leave_type_id: int,
        year: int,
        expected_used: float,
        new_used: float,
    ) -> bool:
        self._cur.execute(
            """
            UPDATE leave_quotas
            SET used_quota=%s
            WHERE employee_id=%s AND leave_type_id=%s AND year=%s
              AND used_quota=%s AND %s <= total_quota
            """,
            (
                float(new_used),
                int(employee_id),
                int(leave_type_id),
                int(year),
                float(expected_used),
                float(new_used),
            ),
        )
        return self._cur.rowcount > 0

    def set_total_quota(self, *, employee_id: int, leave_type_id: int, year: int, total_quota: float) -> bool:
        self._cur.execute(
            """
            UPDATE leave_quotas
            SET total_quota=%s
            WHERE employee_id=%s AND leave_type_id=%s AND year=%s AND used_quota <= %s
            """,
            (float(total_quota), int(employee_id), int(leave_type_id), int(year), float(total_quota)),
        )
        if self._cur.rowcount > 0:
            return True

        # Without FOUND_ROWS an unchanged value reports 0 affected rows.
        current = self.get(employee_id=employee_id, leave_type_id=leave_type_id, year=year)
        return current is not None and current.total_quota == float(total_quota)
