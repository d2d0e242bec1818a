from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import RequestStatus


@dataclass(frozen=True)
class Overtime:
    overtime_id: int
    employee_id: int
    work_date: date
    hours: float
    reason: str
    status: RequestStatus
    admin_comment: Optional[str] = None
    approved_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class OvertimeData:
    work_date: date
    hours: float
    reason: str
    status: RequestStatus
    admin_comment: Optional[str] = None
