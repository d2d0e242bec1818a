from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import NotificationType


@dataclass(frozen=True)
class Notification:
    notification_id: int
    employee_id: int
    title: str
    message: str
    type: NotificationType
    read: bool = False
    created_at: Optional[datetime] = None
