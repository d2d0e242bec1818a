from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import PunchType
from .model import AttendanceReportRow, DailyRecord


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[DailyRecord]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int, *, start_date: date, end_date: date) -> Sequence[DailyRecord]:
        raise NotImplementedError

    def set_punch(
        self,
        *,
        employee_id: int,
        work_date: date,
        punch_type: PunchType,
        value: datetime,
    ) -> DailyRecord:
        """Upsert the (employee, date) record and set one clock field."""

        raise NotImplementedError

    def get_report_rows(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        raise NotImplementedError

    def count(self, *, work_date: Optional[date] = None) -> int:
        raise NotImplementedError

    def employee_ids_with_entry(self, work_date: date) -> set[int]:
        raise NotImplementedError

    def employee_ids_with_record(self, work_date: date) -> set[int]:
        raise NotImplementedError

    def recent_for_dates(self, dates: Sequence[date], *, limit: int) -> Sequence[dict]:
        """Most recently updated records on the given dates, joined with employee name."""

        raise NotImplementedError

    def last_entry(self, employee_id: int) -> Optional[datetime]:
        raise NotImplementedError
