from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import RequestStatus, TimeOffType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, where_clause
from .model import TimeOff, TimeOffData
from .repository import TimeOffRepository

_COLUMNS = """
    timeoff_id, employee_id, start_date, end_date, type, reason,
    status, admin_comment, approved_by, created_at, updated_at
"""


def _to_timeoff(r: dict) -> TimeOff:
    return TimeOff(
        timeoff_id=int(r["timeoff_id"]),
        employee_id=int(r["employee_id"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        type=TimeOffType(r["type"]),
        status=RequestStatus(r["status"]),
        reason=r.get("reason"),
        admin_comment=r.get("admin_comment"),
        approved_by=r.get("approved_by"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLTimeOffRepository(TimeOffRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, employee_id: int, data: TimeOffData, approved_by: Optional[str] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_offs(employee_id, start_date, end_date, type, reason, status, admin_comment, approved_by)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    data.start_date,
                    data.end_date,
                    data.type.value,
                    data.reason,
                    data.status.value,
                    data.admin_comment,
                    approved_by,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, timeoff_id: int) -> Optional[TimeOff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM time_offs WHERE timeoff_id=%s", (int(timeoff_id),))
            r = fetchone(cur)
            return _to_timeoff(r) if r else None

    def update(self, timeoff_id: int, data: TimeOffData) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE time_offs
                SET start_date=%s, end_date=%s, type=%s, reason=%s, status=%s, admin_comment=%s
                WHERE timeoff_id=%s
                """,
                (
                    data.start_date,
                    data.end_date,
                    data.type.value,
                    data.reason,
                    data.status.value,
                    data.admin_comment,
                    int(timeoff_id),
                ),
            )

    def decide(
        self,
        *,
        timeoff_id: int,
        status: RequestStatus,
        admin_comment: Optional[str],
        approved_by: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE time_offs
                SET status=%s, admin_comment=%s, approved_by=%s
                WHERE timeoff_id=%s AND status=%s
                """,
                (status.value, admin_comment, approved_by, int(timeoff_id), RequestStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def delete_by_id(self, timeoff_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM time_offs WHERE timeoff_id=%s", (int(timeoff_id),))
            return cur.rowcount > 0

    def list_all(
        self,
        *,
        employee_id: Optional[int] = None,
        status: Optional[RequestStatus] = None,
        limit: int = 200,
    ) -> Sequence[dict]:
        where, params = where_clause({"t.employee_id": employee_id, "t.status": status})

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT t.timeoff_id, t.employee_id, e.name, e.dept, e.role, e.email,
                       t.start_date, t.end_date, t.type, t.reason, t.status,
                       t.admin_comment, t.approved_by, t.created_at
                FROM time_offs t
                JOIN employees e ON e.employee_id = t.employee_id
                WHERE {where}
                ORDER BY t.start_date DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [
                {
                    "timeoff_id": int(r["timeoff_id"]),
                    "employee_id": int(r["employee_id"]),
                    "name": r["name"],
                    "dept": r.get("dept"),
                    "role": r.get("role"),
                    "email": r.get("email"),
                    "start_date": r["start_date"].strftime("%Y-%m-%d"),
                    "end_date": r["end_date"].strftime("%Y-%m-%d"),
                    "type": r["type"],
                    "reason": r.get("reason") or "",
                    "status": r["status"],
                    "admin_comment": r.get("admin_comment") or "",
                    "approved_by": r.get("approved_by") or "",
                    "created_at": r["created_at"].strftime("%Y-%m-%d %H:%M"),
                }
                for r in fetchall(cur)
            ]

    def find_overlapping_approved(
        self,
        employee_id: int,
        start_date: date,
        end_date: date,
        *,
        exclude_id: Optional[int] = None,
    ) -> Optional[TimeOff]:
        sql = f"""
            SELECT {_COLUMNS} FROM time_offs
            WHERE employee_id=%s AND status=%s AND start_date <= %s AND end_date >= %s
        """
        params: list[object] = [int(employee_id), RequestStatus.APPROVED.value, end_date, start_date]
        if exclude_id is not None:
            sql += " AND timeoff_id <> %s"
            params.append(int(exclude_id))
        sql += " LIMIT 1"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            r = fetchone(cur)
            return _to_timeoff(r) if r else None

    def approved_covering(self, day: date) -> Sequence[TimeOff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM time_offs WHERE status=%s AND start_date <= %s AND end_date >= %s",
                (RequestStatus.APPROVED.value, day, day),
            )
            return [_to_timeoff(r) for r in fetchall(cur)]
