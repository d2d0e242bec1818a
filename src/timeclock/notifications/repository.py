from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import NotificationType
from .model import Notification


class NotificationRepository(Protocol):
    def create(self, *, employee_id: int, title: str, message: str, type: NotificationType) -> int:
        raise NotImplementedError

    def create_many(
        self,
        *,
        employee_ids: Sequence[int],
        title: str,
        message: str,
        type: NotificationType,
    ) -> int:
        """Insert the same notification for each employee; returns rows inserted."""

        raise NotImplementedError

    def get_by_id(self, notification_id: int) -> Optional[Notification]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int, *, unread_only: bool = False, limit: int = 200) -> Sequence[Notification]:
        raise NotImplementedError

    def set_read(self, notification_id: int, read: bool) -> bool:
        raise NotImplementedError
