from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import days_back, now_local
from ..core.constants import DEFAULT_HISTORY_DAYS
from ..core.enums import PunchType
from ..core.exceptions import DayOffError, ValidationError
from ..employees.service import EmployeeService
from .model import DailyRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class PunchService:
    """Use case: register clock punches and read an employee's daily records."""

    def __init__(self, attendance: AttendanceRepository, employees: EmployeeService):
        self._attendance = attendance
        self._employees = employees

    def register_punch(
        self,
        employee_id: int,
        punch_type: PunchType,
        *,
        now: Optional[datetime] = None,
    ) -> DailyRecord:
        now = now or now_local()
        today = now.date()

        employee = self._employees.get_employee(employee_id)
        if self._employees.is_off_day(employee.employee_id, today):
            raise DayOffError("Today is your day off. Punching is not allowed.")

        record = self._attendance.get_for_employee_and_date(employee.employee_id, today)
        if record and record.stamp(punch_type) is not None:
            raise ValidationError(f"{punch_type.label} already registered today")

        previous = punch_type.previous()
        if previous is not None and (record is None or record.stamp(previous) is None):
            missing = record.next_punch() if record else PunchType.ENTRY
            raise ValidationError(f"Register {missing.label.lower()} first")

        saved = self._attendance.set_punch(
            employee_id=employee.employee_id,
            work_date=today,
            punch_type=punch_type,
            value=now.replace(microsecond=0),
        )
        logger.info("Punch %s registered for employee %s at %s", punch_type.value, employee.employee_id, now)
        return saved

    def get_record(self, employee_id: int, work_date: date) -> Optional[DailyRecord]:
        return self._attendance.get_for_employee_and_date(int(employee_id), work_date)

    def recent_records(
        self,
        employee_id: int,
        *,
        days: int = DEFAULT_HISTORY_DAYS,
        today: Optional[date] = None,
    ) -> Sequence[DailyRecord]:
        today = today or now_local().date()
        employee = self._employees.get_employee(employee_id)
        return self._attendance.list_for_employee(
            employee.employee_id,
            start_date=days_back(today, days),
            end_date=today,
        )

