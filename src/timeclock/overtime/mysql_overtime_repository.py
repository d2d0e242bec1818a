from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.constants import OVERTIME_MULTIPLIER
from ..core.enums import RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone, where_clause
from .model import Overtime, OvertimeData
from .repository import OvertimeRepository

_COLUMNS = """
    overtime_id, employee_id, work_date, hours, reason,
    status, admin_comment, approved_by, created_at, updated_at
"""


def _to_overtime(r: dict) -> Overtime:
    return Overtime(
        overtime_id=int(r["overtime_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        hours=as_float(r["hours"]),
        reason=r["reason"],
        status=RequestStatus(r["status"]),
        admin_comment=r.get("admin_comment"),
        approved_by=r.get("approved_by"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLOvertimeRepository(OvertimeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, employee_id: int, data: OvertimeData, approved_by: Optional[str] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO overtimes(employee_id, work_date, hours, reason, status, admin_comment, approved_by)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    data.work_date,
                    data.hours,
                    data.reason,
                    data.status.value,
                    data.admin_comment,
                    approved_by,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, overtime_id: int) -> Optional[Overtime]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM overtimes WHERE overtime_id=%s", (int(overtime_id),))
            r = fetchone(cur)
            return _to_overtime(r) if r else None

    def update(self, overtime_id: int, data: OvertimeData, *, approved_by: Optional[str] = None) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE overtimes
                SET work_date=%s, hours=%s, reason=%s, status=%s, admin_comment=%s,
                    approved_by=COALESCE(%s, approved_by)
                WHERE overtime_id=%s
                """,
                (
                    data.work_date,
                    data.hours,
                    data.reason,
                    data.status.value,
                    data.admin_comment,
                    approved_by,
                    int(overtime_id),
                ),
            )

    def decide(
        self,
        *,
        overtime_id: int,
        status: RequestStatus,
        admin_comment: Optional[str],
        approved_by: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE overtimes
                SET status=%s, admin_comment=%s, approved_by=%s
                WHERE overtime_id=%s AND status=%s
                """,
                (status.value, admin_comment, approved_by, int(overtime_id), RequestStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def delete_by_id(self, overtime_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM overtimes WHERE overtime_id=%s", (int(overtime_id),))
            return cur.rowcount > 0

    def list_all(
        self,
        *,
        employee_id: Optional[int] = None,
        status: Optional[RequestStatus] = None,
        limit: int = 200,
    ) -> Sequence[dict]:
        where, params = where_clause({"o.employee_id": employee_id, "o.status": status})

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT o.overtime_id, o.employee_id, e.name, e.dept, e.role, e.hourly_rate,
                       o.work_date, o.hours, o.reason, o.status, o.admin_comment, o.approved_by, o.created_at
                FROM overtimes o
                JOIN employees e ON e.employee_id = o.employee_id
                WHERE {where}
                ORDER BY o.work_date DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            out: list[dict] = []
            for r in fetchall(cur):
                hours = as_float(r["hours"])
                rate = as_float(r.get("hourly_rate"))
                out.append(
                    {
                        "overtime_id": int(r["overtime_id"]),
                        "employee_id": int(r["employee_id"]),
                        "name": r["name"],
                        "dept": r.get("dept"),
                        "role": r.get("role"),
                        "hourly_rate": rate,
                        "work_date": r["work_date"].strftime("%Y-%m-%d"),
                        "hours": hours,
                        "pay": round(hours * rate * OVERTIME_MULTIPLIER, 2),
                        "reason": r["reason"],
                        "status": r["status"],
                        "admin_comment": r.get("admin_comment") or "",
                        "approved_by": r.get("approved_by") or "",
                        "created_at": r["created_at"].strftime("%Y-%m-%d %H:%M"),
                    }
                )
            return out

    def find_active_for_date(
        self,
        employee_id: int,
        work_date: date,
        *,
        exclude_id: Optional[int] = None,
    ) -> Optional[Overtime]:
        sql = f"SELECT {_COLUMNS} FROM overtimes WHERE employee_id=%s AND work_date=%s AND status<>%s"
        params: list[object] = [int(employee_id), work_date, RequestStatus.REJECTED.value]
        if exclude_id is not None:
            sql += " AND overtime_id<>%s"
            params.append(int(exclude_id))
        sql += " LIMIT 1"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            r = fetchone(cur)
            return _to_overtime(r) if r else None

    def approved_hours(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> dict[int, float]:
        sql = """
            SELECT employee_id, SUM(hours) AS total
            FROM overtimes
            WHERE status=%s AND work_date BETWEEN %s AND %s
        """
        params: list[object] = [RequestStatus.APPROVED.value, start_date, end_date]
        if employee_id is not None:
            sql += " AND employee_id=%s"
            params.append(int(employee_id))
        sql += " GROUP BY employee_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return {int(r["employee_id"]): as_float(r["total"]) for r in fetchall(cur)}
