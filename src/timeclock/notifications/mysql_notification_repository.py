from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import NotificationType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Notification
from .repository import NotificationRepository

_COLUMNS = "notification_id, employee_id, title, message, type, is_read, created_at"


def _to_notification(r: dict) -> Notification:
    return Notification(
        notification_id=int(r["notification_id"]),
        employee_id=int(r["employee_id"]),
        title=r["title"],
        message=r["message"],
        type=NotificationType(r["type"]),
        read=bool(r.get("is_read")),
        created_at=r.get("created_at"),
    )


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, employee_id: int, title: str, message: str, type: NotificationType) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO notifications(employee_id, title, message, type) VALUES(%s,%s,%s,%s)",
                (int(employee_id), title, message, NotificationType(type).value),
            )
            return int(cur.lastrowid)

    def create_many(
        self,
        *,
        employee_ids: Sequence[int],
        title: str,
        message: str,
        type: NotificationType,
    ) -> int:
        if not employee_ids:
            return 0
        rows = [(int(eid), title, message, NotificationType(type).value) for eid in employee_ids]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                "INSERT INTO notifications(employee_id, title, message, type) VALUES(%s,%s,%s,%s)",
                rows,
            )
            return len(rows)

    def get_by_id(self, notification_id: int) -> Optional[Notification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM notifications WHERE notification_id=%s", (int(notification_id),))
            r = fetchone(cur)
            return _to_notification(r) if r else None

    def list_for_employee(self, employee_id: int, *, unread_only: bool = False, limit: int = 200) -> Sequence[Notification]:
        sql = f"SELECT {_COLUMNS} FROM notifications WHERE employee_id=%s"
        if unread_only:
            sql += " AND is_read=0"
        sql += " ORDER BY created_at DESC, notification_id DESC LIMIT %s"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, (int(employee_id), int(limit)))
            return [_to_notification(r) for r in fetchall(cur)]

    def set_read(self, notification_id: int, read: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE notifications SET is_read=%s WHERE notification_id=%s",
                (1 if read else 0, int(notification_id)),
            )
            return cur.rowcount > 0
