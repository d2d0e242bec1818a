from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import RequestStatus, TimeOffType


@dataclass(frozen=True)
class TimeOff:
    """Inclusive date range an employee is away (vacation, sick leave, ...)."""

    timeoff_id: int
    employee_id: int
    start_date: date
    end_date: date
    type: TimeOffType
    status: RequestStatus
    reason: Optional[str] = None
    admin_comment: Optional[str] = None
    approved_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class TimeOffData:
    start_date: date
    end_date: date
    type: TimeOffType
    reason: Optional[str]
    status: RequestStatus
    admin_comment: Optional[str] = None
