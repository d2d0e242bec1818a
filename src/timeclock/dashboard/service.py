from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..core.enums import AbsenceKind
from ..employees.service import EmployeeService
from ..timeoffs.repository import TimeOffRepository

RECENT_RECORDS = 10


def _employee_card(employee) -> dict:
    return {
        "employee_id": employee.employee_id,
        "name": employee.name,
        "dept": employee.dept,
        "role": employee.role,
        "email": employee.email,
        "phone": employee.phone,
    }


class DashboardService:
    """Read-only admin overview: who is missing today and headline counters."""

    def __init__(
        self,
        employees: EmployeeService,
        attendance: AttendanceRepository,
        timeoffs: TimeOffRepository,
    ):
        self._employees = employees
        self._attendance = attendance
        self._timeoffs = timeoffs

    def absent(self, day: Optional[date] = None) -> dict:
        """Employees without an entry punch on the day, with the reason when one is known."""
        day = day or now_local().date()
        present = self._attendance.employee_ids_with_entry(day)
        on_leave = {t.employee_id: t for t in self._timeoffs.approved_covering(day)}

        absent: list[dict] = []
        for employee in self._employees.list_employees():
            if employee.employee_id in present:
                continue

            item = {"employee": _employee_card(employee)}
            leave = on_leave.get(employee.employee_id)
            if leave:
                item["status"] = AbsenceKind.TIME_OFF
                item["time_off"] = leave
            elif self._employees.is_off_day(employee.employee_id, day):
                item["status"] = AbsenceKind.DAY_OFF
            else:
                item["status"] = AbsenceKind.MISSING
                item["last_entry"] = self._attendance.last_entry(employee.employee_id)
            absent.append(item)

        return {
            "date": day,
            "absent": absent,
            "total": len(absent),
            "missing": sum(1 for a in absent if a["status"] == AbsenceKind.MISSING),
            "time_off": sum(1 for a in absent if a["status"] == AbsenceKind.TIME_OFF),
            "day_off": sum(1 for a in absent if a["status"] == AbsenceKind.DAY_OFF),
        }

    def stats(self, today: Optional[date] = None) -> dict:
        today = today or now_local().date()
        yesterday = today - timedelta(days=1)

        employee_count = self._employees.count_employees()
        with_record = self._attendance.employee_ids_with_record(today)
        return {
            "employee_count": employee_count,
            "records_today": self._attendance.count(work_date=today),
            "records_yesterday": self._attendance.count(work_date=yesterday),
            "total_records": self._attendance.count(),
            "recent_records": list(self._attendance.recent_for_dates([today, yesterday], limit=RECENT_RECORDS)),
            "absent_count": max(0, employee_count - len(with_record)),
        }
