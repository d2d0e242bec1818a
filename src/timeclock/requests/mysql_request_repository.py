from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..core.enums import PunchType, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time, where_clause
from .model import CorrectionRequest, JustificationRequest
from .repository import RequestRepository


def _to_correction(r: dict) -> CorrectionRequest:
    return CorrectionRequest(
        request_id=int(r["request_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        field=PunchType(r["field"]),
        requested_time=normalize_mysql_time(r["requested_time"]),
        reason=r["reason"],
        status=RequestStatus(r["status"]),
        created_at=r.get("created_at"),
        admin_comment=r.get("admin_comment"),
        decided_at=r.get("decided_at"),
    )


def _to_justification(r: dict) -> JustificationRequest:
    return JustificationRequest(
        request_id=int(r["request_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        reason=r["reason"],
        status=RequestStatus(r["status"]),
        created_at=r.get("created_at"),
        admin_comment=r.get("admin_comment"),
        decided_at=r.get("decided_at"),
    )


class MySQLRequestRepository(RequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    # -------- Corrections --------
    def create_correction(
        self,
        *,
        employee_id: int,
        work_date: date,
        field: PunchType,
        requested_time: time,
        reason: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO correction_requests(employee_id, work_date, field, requested_time, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(employee_id), work_date, PunchType(field).value, requested_time, reason, RequestStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def get_correction(self, request_id: int) -> Optional[CorrectionRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT request_id, employee_id, work_date, field, requested_time, reason,
                       status, created_at, admin_comment, decided_at
                FROM correction_requests
                WHERE request_id=%s
                """,
                (int(request_id),),
            )
            r = fetchone(cur)
            return _to_correction(r) if r else None

    def list_corrections(
        self,
        *,
        status: Optional[RequestStatus] = None,
        employee_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[dict]:
        where, params = where_clause({"r.status": status, "r.employee_id": employee_id})

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT r.request_id, r.employee_id, e.name, e.dept,
                       r.work_date, r.field, r.requested_time, r.reason,
                       r.status, r.created_at, r.admin_comment, r.decided_at
                FROM correction_requests r
                JOIN employees e ON e.employee_id = r.employee_id
                WHERE {where}
                ORDER BY r.created_at DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            out: list[dict] = []
            for r in fetchall(cur):
                requested = normalize_mysql_time(r["requested_time"])
                out.append(
                    {
                        "request_id": int(r["request_id"]),
                        "kind": "correction",
                        "employee_id": int(r["employee_id"]),
                        "name": r["name"],
                        "dept": r.get("dept"),
                        "work_date": r["work_date"].strftime("%Y-%m-%d"),
                        "field": r["field"],
                        "requested_time": requested.strftime("%H:%M") if requested else "-",
                        "reason": r["reason"],
                        "status": r["status"],
                        "created_at": r["created_at"].strftime("%Y-%m-%d %H:%M"),
                        "admin_comment": r.get("admin_comment") or "",
                    }
                )
            return out

    def decide_correction(self, *, request_id: int, status: RequestStatus, admin_comment: Optional[str] = None) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE correction_requests
                SET status=%s, admin_comment=%s, decided_at=NOW()
                WHERE request_id=%s AND status=%s
                """,
                (status.value, admin_comment, int(request_id), RequestStatus.PENDING.value),
            )
            return cur.rowcount > 0

    # -------- Justifications --------
    def create_justification(self, *, employee_id: int, work_date: date, reason: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO justification_requests(employee_id, work_date, reason, status)
                VALUES(%s,%s,%s,%s)
                """,
                (int(employee_id), work_date, reason, RequestStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def get_justification(self, request_id: int) -> Optional[JustificationRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT request_id, employee_id, work_date, reason,
                       status, created_at, admin_comment, decided_at
                FROM justification_requests
                WHERE request_id=%s
                """,
                (int(request_id),),
            )
            r = fetchone(cur)
            return _to_justification(r) if r else None

    def list_justifications(
        self,
        *,
        status: Optional[RequestStatus] = None,
        employee_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[dict]:
        where, params = where_clause({"r.status": status, "r.employee_id": employee_id})

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT r.request_id, r.employee_id, e.name, e.dept,
                       r.work_date, r.reason, r.status, r.created_at, r.admin_comment
                FROM justification_requests r
                JOIN employees e ON e.employee_id = r.employee_id
                WHERE {where}
                ORDER BY r.created_at DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [
                {
                    "request_id": int(r["request_id"]),
                    "kind": "justification",
                    "employee_id": int(r["employee_id"]),
                    "name": r["name"],
                    "dept": r.get("dept"),
                    "work_date": r["work_date"].strftime("%Y-%m-%d"),
                    "reason": r["reason"],
                    "status": r["status"],
                    "created_at": r["created_at"].strftime("%Y-%m-%d %H:%M"),
                    "admin_comment": r.get("admin_comment") or "",
                }
                for r in fetchall(cur)
            ]

    def decide_justification(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        admin_comment: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE justification_requests
                SET status=%s, admin_comment=%s, decided_at=NOW()
                WHERE request_id=%s AND status=%s
                """,
                (status.value, admin_comment, int(request_id), RequestStatus.PENDING.value),
            )
            return cur.rowcount > 0
