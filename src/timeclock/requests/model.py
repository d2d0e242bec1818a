from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..core.enums import PunchType, RequestStatus


@dataclass(frozen=True)
class CorrectionRequest:
    """Employee asks to set one punch of a past day to a given time."""

    request_id: int
    employee_id: int
    work_date: date
    field: PunchType
    requested_time: time
    reason: str
    status: RequestStatus
    created_at: Optional[datetime] = None
    admin_comment: Optional[str] = None
    decided_at: Optional[datetime] = None


@dataclass(frozen=True)
class JustificationRequest:
    """Employee explains an absence or irregular day."""

    request_id: int
    employee_id: int
    work_date: date
    reason: str
    status: RequestStatus
    created_at: Optional[datetime] = None
    admin_comment: Optional[str] = None
    decided_at: Optional[datetime] = None
