from __future__ import annotations

import csv
import io
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import format_hours
from ..core.exceptions import ValidationError
from ..employees.service import EmployeeService
from ..overtime.repository import OvertimeRepository
from ..overtime.service import overtime_pay
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator

# Days above this many worked hours, or without lunch above the second one, are flagged.
LONG_DAY_HOURS = 10
NO_LUNCH_HOURS = 6
TOP_EMPLOYEES = 5

CSV_FIELDS = [
    "work_date",
    "employee_id",
    "name",
    "dept",
    "role",
    "entry",
    "lunch_start",
    "lunch_end",
    "exit",
    "worked_hours",
    "hourly_rate",
    "pay",
]


@dataclass(frozen=True)
class ReportData:
    start: date
    end: date
    rows: list[dict]
    summary: list[dict]
    totals: dict = field(default_factory=dict)


def _clock(value: Optional[datetime]) -> str:
    return value.strftime("%H:%M") if value else "-"


class PayrollReportService:
    """Use case: worked hours and pay per record, per employee and per department."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        overtimes: OvertimeRepository,
        employees: EmployeeService,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._attendance = attendance
        self._overtimes = overtimes
        self._employees = employees
        self._calculator = calculator or StandardPayrollCalculator()

    def build_report(self, *, start: date, end: date, employee_id: Optional[int] = None) -> ReportData:
        if start > end:
            raise ValidationError("Start date cannot be after end date")

        query_rows = self._attendance.get_report_rows(start_date=start, end_date=end, employee_id=employee_id)

        summary_map: dict[int, dict] = {}
        out_rows: list[dict] = []

        for r in query_rows:
            minutes = self._calculator.worked_minutes(r)
            pay = self._calculator.pay(minutes, r.hourly_rate)

            out_rows.append(
                {
                    "work_date": r.work_date.strftime("%Y-%m-%d"),
                    "employee_id": r.employee_id,
                    "name": r.name,
                    "dept": r.dept or "-",
                    "role": r.role or "-",
                    "entry": _clock(r.entry),
                    "lunch_start": _clock(r.lunch_start),
                    "lunch_end": _clock(r.lunch_end),
                    "exit": _clock(r.exit),
                    "worked_minutes": minutes,
                    "worked_hours": format_hours(minutes),
                    "hourly_rate": r.hourly_rate,
                    "pay": pay,
                }
            )

            s = summary_map.get(r.employee_id)
            if not s:
                s = {
                    "employee_id": r.employee_id,
                    "name": r.name,
                    "dept": r.dept or "-",
                    "hourly_rate": r.hourly_rate,
                    "days": 0,
                    "total_minutes": 0,
                    "pay": 0.0,
                }
                summary_map[r.employee_id] = s
            s["days"] += 1
            s["total_minutes"] += minutes
            s["pay"] += pay

        approved = self._overtimes.approved_hours(start_date=start, end_date=end, employee_id=employee_id)
        for emp_id in approved:
            if emp_id not in summary_map:
                emp = self._employees.get_employee(emp_id)
                summary_map[emp_id] = {
                    "employee_id": emp.employee_id,
                    "name": emp.name,
                    "dept": emp.dept or "-",
                    "hourly_rate": emp.hourly_rate,
                    "days": 0,
                    "total_minutes": 0,
                    "pay": 0.0,
                }

        summary: list[dict] = []
        for s in summary_map.values():
            ot_hours = approved.get(s["employee_id"], 0.0)
            ot_pay = overtime_pay(ot_hours, s["hourly_rate"])
            pay = round(s["pay"], 2)
            summary.append(
                {
                    **s,
                    "total_hours": format_hours(s["total_minutes"]),
                    "pay": pay,
                    "overtime_hours": round(ot_hours, 2),
                    "overtime_pay": ot_pay,
                    "total_pay": round(pay + ot_pay, 2),
                }
            )
        summary.sort(key=lambda x: x["total_minutes"], reverse=True)

        total_minutes = sum(s["total_minutes"] for s in summary)
        totals = {
            "records": len(out_rows),
            "employees": len(summary),
            "total_minutes": total_minutes,
            "total_hours": format_hours(total_minutes),
            "pay": round(sum(s["pay"] for s in summary), 2),
            "overtime_hours": round(sum(s["overtime_hours"] for s in summary), 2),
            "overtime_pay": round(sum(s["overtime_pay"] for s in summary), 2),
            "total_pay": round(sum(s["total_pay"] for s in summary), 2),
        }
        return ReportData(start=start, end=end, rows=out_rows, summary=summary, totals=totals)

    def export_csv(self, report: ReportData) -> bytes:
        """One line per record plus a TOTAL line; UTF-8 with BOM so spreadsheets detect the encoding."""
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS, extrasaction="ignore")
        writer.writeheader()
        for row in report.rows:
            writer.writerow(row)
        writer.writerow(
            {
                "work_date": "TOTAL",
                "worked_hours": report.totals.get("total_hours", "00:00"),
                "pay": f"{report.totals.get('pay', 0.0):.2f}",
            }
        )
        return out.getvalue().encode("utf-8-sig")

    def analytics(self, *, start: date, end: date) -> dict:
        """Department breakdown, top employees, daily totals and long-day alerts."""
        if start > end:
            raise ValidationError("Start date cannot be after end date")

        query_rows = self._attendance.get_report_rows(start_date=start, end_date=end)

        depts: dict[str, dict] = {}
        per_employee: dict[int, dict] = {}
        daily: dict[date, dict] = {}
        alerts: list[dict] = []

        for r in query_rows:
            minutes = self._calculator.worked_minutes(r)
            hours = minutes / 60
            dept = r.dept or "-"

            d = depts.setdefault(dept, {"dept": dept, "minutes": 0, "employees": set(), "cost": 0.0})
            d["minutes"] += minutes
            d["employees"].add(r.employee_id)
            d["cost"] += self._calculator.pay(minutes, r.hourly_rate)

            e = per_employee.setdefault(r.employee_id, {"employee_id": r.employee_id, "name": r.name, "dept": dept, "minutes": 0})
            e["minutes"] += minutes

            day = daily.setdefault(r.work_date, {"minutes": 0, "count": 0})
            day["minutes"] += minutes
            day["count"] += 1

            if hours > LONG_DAY_HOURS:
                alerts.append(
                    {
                        "type": "long_day",
                        "employee_id": r.employee_id,
                        "work_date": r.work_date.strftime("%Y-%m-%d"),
                        "message": f"{r.name} worked {hours:.1f}h on {r.work_date:%Y-%m-%d}",
                    }
                )
            if r.lunch_start is None and hours > NO_LUNCH_HOURS:
                alerts.append(
                    {
                        "type": "no_lunch",
                        "employee_id": r.employee_id,
                        "work_date": r.work_date.strftime("%Y-%m-%d"),
                        "message": f"{r.name} worked {hours:.1f}h without a lunch break on {r.work_date:%Y-%m-%d}",
                    }
                )

        departments = [
            {
                "dept": d["dept"],
                "total_hours": round(d["minutes"] / 60, 2),
                "employees": len(d["employees"]),
                "avg_hours": round(d["minutes"] / 60 / len(d["employees"]), 2),
                "total_cost": round(d["cost"], 2),
            }
            for d in depts.values()
        ]
        departments.sort(key=lambda x: x["total_hours"], reverse=True)

        top = sorted(per_employee.values(), key=lambda x: x["minutes"], reverse=True)[:TOP_EMPLOYEES]

        return {
            "start": start.strftime("%Y-%m-%d"),
            "end": end.strftime("%Y-%m-%d"),
            "departments": departments,
            "top_employees": [
                {"employee_id": e["employee_id"], "name": e["name"], "dept": e["dept"], "hours": round(e["minutes"] / 60, 2)}
                for e in top
            ],
            "daily": [
                {
                    "work_date": d.strftime("%Y-%m-%d"),
                    "total_hours": round(v["minutes"] / 60, 2),
                    "records": v["count"],
                    "avg_hours": round(v["minutes"] / 60 / v["count"], 2),
                }
                for d, v in sorted(daily.items())
            ],
            "alerts": alerts,
        }
