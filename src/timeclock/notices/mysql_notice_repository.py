from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import NotificationType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Notice
from .repository import NoticeRepository

_COLUMNS = "notice_id, title, content, type, active, created_at, updated_at"


def _to_notice(r: dict) -> Notice:
    return Notice(
        notice_id=int(r["notice_id"]),
        title=r["title"],
        content=r["content"],
        type=NotificationType(r["type"]),
        active=bool(r.get("active")),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLNoticeRepository(NoticeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, title: str, content: str, type: NotificationType) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO notices(title, content, type, active) VALUES(%s,%s,%s,1)",
                (title, content, NotificationType(type).value),
            )
            return int(cur.lastrowid)

    def get_by_id(self, notice_id: int) -> Optional[Notice]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM notices WHERE notice_id=%s", (int(notice_id),))
            r = fetchone(cur)
            return _to_notice(r) if r else None

    def list_notices(self, *, active_only: bool = False) -> Sequence[Notice]:
        sql = f"SELECT {_COLUMNS} FROM notices"
        if active_only:
            sql += " WHERE active=1"
        sql += " ORDER BY created_at DESC, notice_id DESC"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql)
            return [_to_notice(r) for r in fetchall(cur)]

    def update(self, notice_id: int, *, title: str, content: str, type: NotificationType, active: bool) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE notices SET title=%s, content=%s, type=%s, active=%s WHERE notice_id=%s",
                (title, content, NotificationType(type).value, 1 if active else 0, int(notice_id)),
            )

    def delete_by_id(self, notice_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM notices WHERE notice_id=%s", (int(notice_id),))
            return cur.rowcount > 0
