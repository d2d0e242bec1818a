from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import PunchType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone
from .model import AttendanceReportRow, DailyRecord
from .repository import AttendanceRepository

# Column names are never taken from user input; only from this whitelist.
_COLUMN_BY_TYPE = {
    PunchType.ENTRY: "entry_at",
    PunchType.LUNCH_START: "lunch_start_at",
    PunchType.LUNCH_END: "lunch_end_at",
    PunchType.EXIT: "exit_at",
}

_RECORD_COLUMNS = """
    record_id, employee_id, work_date,
    entry_at, lunch_start_at, lunch_end_at, exit_at,
    created_at, updated_at
"""


def _to_record(r: dict) -> DailyRecord:
    return DailyRecord(
        record_id=int(r["record_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        entry=r.get("entry_at"),
        lunch_start=r.get("lunch_start_at"),
        lunch_end=r.get("lunch_end_at"),
        exit=r.get("exit_at"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[DailyRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_RECORD_COLUMNS} FROM daily_records WHERE employee_id=%s AND work_date=%s",
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_employee(self, employee_id: int, *, start_date: date, end_date: date) -> Sequence[DailyRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM daily_records
                WHERE employee_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date DESC
                """,
                (int(employee_id), start_date, end_date),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def set_punch(
        self,
        *,
        employee_id: int,
        work_date: date,
        punch_type: PunchType,
        value: datetime,
    ) -> DailyRecord:
        column = _COLUMN_BY_TYPE[PunchType(punch_type)]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO daily_records(employee_id, work_date, {column})
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE {column}=VALUES({column})
                """,
                (int(employee_id), work_date, value),
            )
            cur.execute(
                f"SELECT {_RECORD_COLUMNS} FROM daily_records WHERE employee_id=%s AND work_date=%s",
                (int(employee_id), work_date),
            )
            return _to_record(fetchone(cur))

    def get_report_rows(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        clauses = ["1=1"]
        params: list[object] = []

        if start_date is not None:
            clauses.append("dr.work_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("dr.work_date <= %s")
            params.append(end_date)
        if employee_id is not None:
            clauses.append("dr.employee_id=%s")
            params.append(int(employee_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    e.employee_id, e.name, e.dept, e.role, e.hourly_rate,
                    dr.work_date, dr.entry_at, dr.lunch_start_at, dr.lunch_end_at, dr.exit_at
                FROM daily_records dr
                JOIN employees e ON e.employee_id = dr.employee_id
                WHERE {where}
                ORDER BY dr.work_date DESC, e.name ASC
                """,
                tuple(params),
            )
            return [
                AttendanceReportRow(
                    employee_id=int(r["employee_id"]),
                    name=r["name"],
                    dept=r.get("dept"),
                    role=r.get("role"),
                    hourly_rate=as_float(r.get("hourly_rate")),
                    work_date=r["work_date"],
                    entry=r.get("entry_at"),
                    lunch_start=r.get("lunch_start_at"),
                    lunch_end=r.get("lunch_end_at"),
                    exit=r.get("exit_at"),
                )
                for r in fetchall(cur)
            ]

    def count(self, *, work_date: Optional[date] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            if work_date is None:
                cur.execute("SELECT COUNT(*) AS n FROM daily_records")
            else:
                cur.execute("SELECT COUNT(*) AS n FROM daily_records WHERE work_date=%s", (work_date,))
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def employee_ids_with_entry(self, work_date: date) -> set[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT DISTINCT employee_id FROM daily_records WHERE work_date=%s AND entry_at IS NOT NULL",
                (work_date,),
            )
            return {int(r["employee_id"]) for r in fetchall(cur)}

    def employee_ids_with_record(self, work_date: date) -> set[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT DISTINCT employee_id FROM daily_records WHERE work_date=%s", (work_date,))
            return {int(r["employee_id"]) for r in fetchall(cur)}

    def recent_for_dates(self, dates: Sequence[date], *, limit: int) -> Sequence[dict]:
        if not dates:
            return []
        placeholders = ",".join(["%s"] * len(dates))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT dr.record_id, dr.employee_id, e.name, e.dept, dr.work_date,
                       dr.entry_at, dr.lunch_start_at, dr.lunch_end_at, dr.exit_at, dr.updated_at
                FROM daily_records dr
                JOIN employees e ON e.employee_id = dr.employee_id
                WHERE dr.work_date IN ({placeholders})
                ORDER BY dr.updated_at DESC
                LIMIT %s
                """,
                tuple(list(dates) + [int(limit)]),
            )
            return [
                {
                    "record_id": int(r["record_id"]),
                    "employee_id": int(r["employee_id"]),
                    "name": r["name"],
                    "dept": r.get("dept"),
                    "work_date": r["work_date"],
                    "entry": r.get("entry_at"),
                    "lunch_start": r.get("lunch_start_at"),
                    "lunch_end": r.get("lunch_end_at"),
                    "exit": r.get("exit_at"),
                    "updated_at": r.get("updated_at"),
                }
                for r in fetchall(cur)
            ]

    def last_entry(self, employee_id: int) -> Optional[datetime]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT entry_at FROM daily_records
                WHERE employee_id=%s AND entry_at IS NOT NULL
                ORDER BY work_date DESC
                LIMIT 1
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            return r["entry_at"] if r else None
