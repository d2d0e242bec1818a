from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import NotificationType
from ..core.exceptions import AuthorizationError, NotFoundError
from ..employees.repository import EmployeeRepository
from .model import Notification
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationService:
    """Use case: per-employee notifications and broadcast to the whole staff."""

    def __init__(self, notifications: NotificationRepository, employees: EmployeeRepository):
        self._notifications = notifications
        self._employees = employees

    def notify(
        self,
        employee_id: int,
        title: str,
        message: str,
        type: NotificationType = NotificationType.INFO,
    ) -> int:
        notification_id = self._notifications.create(
            employee_id=int(employee_id),
            title=require_non_empty(title, "Title"),
            message=require_non_empty(message, "Message"),
            type=NotificationType(type),
        )
        logger.info("Notification %s sent to employee %s: %s", notification_id, employee_id, title)
        return notification_id

    def broadcast(self, title: str, message: str, type: NotificationType = NotificationType.INFO) -> int:
        employee_ids = [e.employee_id for e in self._employees.list_all()]
        sent = self._notifications.create_many(
            employee_ids=employee_ids,
            title=require_non_empty(title, "Title"),
            message=require_non_empty(message, "Message"),
            type=NotificationType(type),
        )
        logger.info("Broadcast '%s' delivered to %d employees", title, sent)
        return sent

    def list_for_employee(
        self,
        employee_id: int,
        *,
        unread_only: bool = False,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[Notification]:
        return self._notifications.list_for_employee(int(employee_id), unread_only=unread_only, limit=limit)

    def mark(self, notification_id: int, *, read: bool = True, employee_id: Optional[int] = None) -> Notification:
        """Set the read flag. When employee_id is given it must own the notification."""
        notification = self._notifications.get_by_id(int(notification_id))
        if not notification:
            raise NotFoundError("Notification not found")
        if employee_id is not None and notification.employee_id != int(employee_id):
            raise AuthorizationError("Not your notification")

        if notification.read != bool(read):
            self._notifications.set_read(notification.notification_id, bool(read))
        return self._notifications.get_by_id(notification.notification_id)
