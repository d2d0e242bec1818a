from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import PunchType


@dataclass(frozen=True)
class DailyRecord:
    """Domain entity: one employee's clock events for one calendar date."""

    record_id: int
    employee_id: int
    work_date: date
    entry: Optional[datetime] = None
    lunch_start: Optional[datetime] = None
    lunch_end: Optional[datetime] = None
    exit: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def stamp(self, punch_type: PunchType) -> Optional[datetime]:
        return getattr(self, punch_type.field)

    def next_punch(self) -> Optional[PunchType]:
        for punch_type in PunchType.sequence():
            if self.stamp(punch_type) is None:
                return punch_type
        return None


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model for reports/exports (record joined with employee)."""

    employee_id: int
    name: str
    dept: Optional[str]
    role: Optional[str]
    hourly_rate: float
    work_date: date
    entry: Optional[datetime] = None
    lunch_start: Optional[datetime] = None
    lunch_end: Optional[datetime] = None
    exit: Optional[datetime] = None
