from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from ..common.validators import parse_bool, parse_enum, require_non_empty
from ..core.enums import NotificationType
from ..core.exceptions import NotFoundError
from ..notifications.service import NotificationService
from .model import Notice
from .repository import NoticeRepository

logger = logging.getLogger(__name__)


class NoticeService:
    def __init__(self, notices: NoticeRepository, notifications: NotificationService):
        self._notices = notices
        self._notifications = notifications

    def list_active(self) -> Sequence[Notice]:
        return self._notices.list_notices(active_only=True)

    def list_all(self) -> Sequence[Notice]:
        return self._notices.list_notices()

    def get_notice(self, notice_id: int) -> Notice:
        notice = self._notices.get_by_id(int(notice_id))
        if not notice:
            raise NotFoundError("Notice not found")
        return notice

    def create_notice(self, data: Mapping[str, Any]) -> Notice:
        """Publish a notice and push it to every employee as a notification."""
        title = require_non_empty(data.get("title"), "Title")
        content = require_non_empty(data.get("content"), "Content")
        kind = parse_enum(NotificationType, data.get("type") or NotificationType.INFO.value, "type")

        notice_id = self._notices.create(title=title, content=content, type=kind)
        sent = self._notifications.broadcast(f"Notice: {title}", content, kind)
        logger.info("Notice %s published to %d employees", notice_id, sent)
        return self.get_notice(notice_id)

    def update_notice(self, notice_id: int, data: Mapping[str, Any]) -> Notice:
        current = self.get_notice(notice_id)
        title = require_non_empty(data.get("title", current.title), "Title")
        content = require_non_empty(data.get("content", current.content), "Content")
        kind = parse_enum(NotificationType, data.get("type") or current.type.value, "type")
        active = parse_bool(data.get("active", current.active), "active")

        self._notices.update(current.notice_id, title=title, content=content, type=kind, active=active)
        return self.get_notice(current.notice_id)

    def delete_notice(self, notice_id: int) -> None:
        current = self.get_notice(notice_id)
        if not self._notices.delete_by_id(current.notice_id):
            raise NotFoundError("Notice not found")
        logger.info("Notice %s deleted", current.notice_id)
