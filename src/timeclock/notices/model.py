from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import NotificationType


@dataclass(frozen=True)
class Notice:
    """Board message shown to every employee while active."""

    notice_id: int
    title: str
    content: str
    type: NotificationType
    active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
