"""In-memory repositories used by service and API tests."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from werkzeug.security import generate_password_hash

from timeclock.admins.model import Admin
from timeclock.attendance.model import AttendanceReportRow, DailyRecord
from timeclock.container import Container, wire
from timeclock.core.enums import NotificationType, PunchType, RequestStatus
from timeclock.employees.model import Employee, EmployeeData
from timeclock.notices.model import Notice
from timeclock.notifications.model import Notification
from timeclock.overtime.model import Overtime, OvertimeData
from timeclock.requests.model import CorrectionRequest, JustificationRequest
from timeclock.timeoffs.model import TimeOff, TimeOffData

FIXED_NOW = datetime(2026, 3, 2, 9, 0, 0)


class InMemoryEmployees:
    def __init__(self):
        self._rows: dict[int, Employee] = {}
        self._off_days: dict[int, set[int]] = {}
        self._id = 0

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._rows.get(int(employee_id))

    def get_by_pin(self, pin: str) -> Optional[Employee]:
        return next((e for e in self._rows.values() if e.pin == pin), None)

    def list_all(self) -> Sequence[Employee]:
        return sorted(self._rows.values(), key=lambda e: e.name)

    def count(self) -> int:
        return len(self._rows)

    def create(self, data: EmployeeData) -> int:
        self._id += 1
        self._rows[self._id] = Employee(employee_id=self._id, created_at=FIXED_NOW, updated_at=FIXED_NOW, **vars(data))
        return self._id

    def update(self, employee_id: int, data: EmployeeData) -> bool:
        current = self._rows.get(int(employee_id))
        if not current:
            return False
        self._rows[current.employee_id] = replace(current, **vars(data))
        return True

    def delete_by_id(self, employee_id: int) -> bool:
        self._off_days.pop(int(employee_id), None)
        return self._rows.pop(int(employee_id), None) is not None

    def list_off_days(self, employee_id: int) -> Sequence[int]:
        return sorted(self._off_days.get(int(employee_id), set()))

    def add_off_day(self, employee_id: int, day_of_week: int) -> bool:
        days = self._off_days.setdefault(int(employee_id), set())
        if day_of_week in days:
            return False
        days.add(day_of_week)
        return True

    def remove_off_day(self, employee_id: int, day_of_week: int) -> bool:
        days = self._off_days.get(int(employee_id), set())
        if day_of_week not in days:
            return False
        days.discard(day_of_week)
        return True


class InMemoryAdmins:
    def __init__(self, admins: Sequence[Admin] = ()):
        self._rows = {a.admin_id: a for a in admins}

    def get_by_id(self, admin_id: int) -> Optional[Admin]:
        return self._rows.get(int(admin_id))

    def get_by_username(self, username: str) -> Optional[Admin]:
        return next((a for a in self._rows.values() if a.username == username), None)


class InMemoryAttendance:
    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self._by_key: dict[tuple[int, date], DailyRecord] = {}
        self._id = 0

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[DailyRecord]:
        return self._by_key.get((int(employee_id), work_date))

    def list_for_employee(self, employee_id: int, *, start_date: date, end_date: date) -> Sequence[DailyRecord]:
        items = [
            r
            for (eid, d), r in self._by_key.items()
            if eid == int(employee_id) and start_date <= d <= end_date
        ]
        return sorted(items, key=lambda r: r.work_date, reverse=True)

    def set_punch(self, *, employee_id: int, work_date: date, punch_type: PunchType, value: datetime) -> DailyRecord:
        key = (int(employee_id), work_date)
        record = self._by_key.get(key)
        if record is None:
            self._id += 1
            record = DailyRecord(record_id=self._id, employee_id=int(employee_id), work_date=work_date, created_at=value)
        record = replace(record, **{punch_type.field: value, "updated_at": value})
        self._by_key[key] = record
        return record

    def get_report_rows(self, *, start_date=None, end_date=None, employee_id=None) -> Sequence[AttendanceReportRow]:
        out = []
        for (eid, d), r in self._by_key.items():
            if start_date is not None and d < start_date:
                continue
            if end_date is not None and d > end_date:
                continue
            if employee_id is not None and eid != int(employee_id):
                continue
            emp = self._employees.get_by_id(eid)
            out.append(
                AttendanceReportRow(
                    employee_id=eid,
                    name=emp.name,
                    dept=emp.dept,
                    role=emp.role,
                    hourly_rate=emp.hourly_rate,
                    work_date=d,
                    entry=r.entry,
                    lunch_start=r.lunch_start,
                    lunch_end=r.lunch_end,
                    exit=r.exit,
                )
            )
        out.sort(key=lambda x: (x.work_date, x.name), reverse=True)
        return out

    def count(self, *, work_date: Optional[date] = None) -> int:
        return sum(1 for (_, d) in self._by_key if work_date is None or d == work_date)

    def employee_ids_with_entry(self, work_date: date) -> set[int]:
        return {eid for (eid, d), r in self._by_key.items() if d == work_date and r.entry is not None}

    def employee_ids_with_record(self, work_date: date) -> set[int]:
        return {eid for (eid, d) in self._by_key if d == work_date}

    def recent_for_dates(self, dates: Sequence[date], *, limit: int) -> Sequence[dict]:
        items = [r for (_, d), r in self._by_key.items() if d in set(dates)]
        items.sort(key=lambda r: r.updated_at or datetime.min, reverse=True)
        return [
            {
                "record_id": r.record_id,
                "employee_id": r.employee_id,
                "name": self._employees.get_by_id(r.employee_id).name,
                "work_date": r.work_date,
                "entry": r.entry,
                "exit": r.exit,
                "updated_at": r.updated_at,
            }
            for r in items[:limit]
        ]

    def last_entry(self, employee_id: int) -> Optional[datetime]:
        items = [r for (eid, _), r in self._by_key.items() if eid == int(employee_id) and r.entry is not None]
        if not items:
            return None
        return max(items, key=lambda r: r.work_date).entry


class InMemoryRequests:
    def __init__(self):
        self._corrections: dict[int, CorrectionRequest] = {}
        self._justifications: dict[int, JustificationRequest] = {}
        self._id = 0

    def _next(self) -> int:
        self._id += 1
        return self._id

    def create_correction(self, *, employee_id, work_date, field, requested_time, reason) -> int:
        rid = self._next()
        self._corrections[rid] = CorrectionRequest(
            request_id=rid,
            employee_id=int(employee_id),
            work_date=work_date,
            field=field,
            requested_time=requested_time,
            reason=reason,
            status=RequestStatus.PENDING,
            created_at=FIXED_NOW,
        )
        return rid

    def get_correction(self, request_id: int) -> Optional[CorrectionRequest]:
        return self._corrections.get(int(request_id))

    def list_corrections(self, *, status=None, employee_id=None, limit=200) -> Sequence[dict]:
        return [
            {"request_id": r.request_id, "kind": "correction", "employee_id": r.employee_id, "status": r.status.value}
            for r in self._corrections.values()
            if (status is None or r.status == status) and (employee_id is None or r.employee_id == employee_id)
        ][:limit]

    def decide_correction(self, *, request_id, status, admin_comment=None) -> bool:
        req = self._corrections.get(int(request_id))
        if not req or req.status != RequestStatus.PENDING:
            return False
        self._corrections[req.request_id] = replace(req, status=status, admin_comment=admin_comment, decided_at=FIXED_NOW)
        return True

    def create_justification(self, *, employee_id, work_date, reason) -> int:
        rid = self._next()
        self._justifications[rid] = JustificationRequest(
            request_id=rid,
            employee_id=int(employee_id),
            work_date=work_date,
            reason=reason,
            status=RequestStatus.PENDING,
            created_at=FIXED_NOW,
        )
        return rid

    def get_justification(self, request_id: int) -> Optional[JustificationRequest]:
        return self._justifications.get(int(request_id))

    def list_justifications(self, *, status=None, employee_id=None, limit=200) -> Sequence[dict]:
        return [
            {"request_id": r.request_id, "kind": "justification", "employee_id": r.employee_id, "status": r.status.value}
            for r in self._justifications.values()
            if (status is None or r.status == status) and (employee_id is None or r.employee_id == employee_id)
        ][:limit]

    def decide_justification(self, *, request_id, status, admin_comment=None) -> bool:
        req = self._justifications.get(int(request_id))
        if not req or req.status != RequestStatus.PENDING:
            return False
        self._justifications[req.request_id] = replace(
            req, status=status, admin_comment=admin_comment, decided_at=FIXED_NOW
        )
        return True


class InMemoryTimeOffs:
    def __init__(self):
        self._rows: dict[int, TimeOff] = {}
        self._id = 0

    def create(self, *, employee_id: int, data: TimeOffData, approved_by: Optional[str] = None) -> int:
        self._id += 1
        self._rows[self._id] = TimeOff(
            timeoff_id=self._id,
            employee_id=int(employee_id),
            start_date=data.start_date,
            end_date=data.end_date,
            type=data.type,
            status=data.status,
            reason=data.reason,
            admin_comment=data.admin_comment,
            approved_by=approved_by,
            created_at=FIXED_NOW,
        )
        return self._id

    def get_by_id(self, timeoff_id: int) -> Optional[TimeOff]:
        return self._rows.get(int(timeoff_id))

    def update(self, timeoff_id: int, data: TimeOffData) -> None:
        current = self._rows[int(timeoff_id)]
        self._rows[current.timeoff_id] = replace(current, **vars(data))

    def decide(self, *, timeoff_id, status, admin_comment, approved_by) -> bool:
        current = self._rows.get(int(timeoff_id))
        if not current or current.status != RequestStatus.PENDING:
            return False
        self._rows[current.timeoff_id] = replace(
            current, status=status, admin_comment=admin_comment, approved_by=approved_by
        )
        return True

    def delete_by_id(self, timeoff_id: int) -> bool:
        return self._rows.pop(int(timeoff_id), None) is not None

    def list_all(self, *, employee_id=None, status=None, limit=200) -> Sequence[dict]:
        items = [
            t
            for t in self._rows.values()
            if (employee_id is None or t.employee_id == employee_id) and (status is None or t.status == status)
        ]
        items.sort(key=lambda t: t.start_date, reverse=True)
        return [{"timeoff_id": t.timeoff_id, "employee_id": t.employee_id, "status": t.status.value} for t in items][:limit]

    def find_overlapping_approved(self, employee_id, start_date, end_date, *, exclude_id=None) -> Optional[TimeOff]:
        for t in self._rows.values():
            if t.employee_id != int(employee_id) or t.status != RequestStatus.APPROVED:
                continue
            if exclude_id is not None and t.timeoff_id == int(exclude_id):
                continue
            if t.start_date <= end_date and t.end_date >= start_date:
                return t
        return None

    def approved_covering(self, day: date) -> Sequence[TimeOff]:
        return [t for t in self._rows.values() if t.status == RequestStatus.APPROVED and t.covers(day)]


class InMemoryOvertimes:
    def __init__(self):
        self._rows: dict[int, Overtime] = {}
        self._id = 0

    def create(self, *, employee_id: int, data: OvertimeData, approved_by: Optional[str] = None) -> int:
        self._id += 1
        self._rows[self._id] = Overtime(
            overtime_id=self._id,
            employee_id=int(employee_id),
            work_date=data.work_date,
            hours=data.hours,
            reason=data.reason,
            status=data.status,
            admin_comment=data.admin_comment,
            approved_by=approved_by,
            created_at=FIXED_NOW,
        )
        return self._id

    def get_by_id(self, overtime_id: int) -> Optional[Overtime]:
        return self._rows.get(int(overtime_id))

    def update(self, overtime_id: int, data: OvertimeData, *, approved_by: Optional[str] = None) -> None:
        current = self._rows[int(overtime_id)]
        self._rows[current.overtime_id] = replace(current, approved_by=approved_by or current.approved_by, **vars(data))

    def decide(self, *, overtime_id, status, admin_comment, approved_by) -> bool:
        current = self._rows.get(int(overtime_id))
        if not current or current.status != RequestStatus.PENDING:
            return False
        self._rows[current.overtime_id] = replace(
            current, status=status, admin_comment=admin_comment, approved_by=approved_by
        )
        return True

    def delete_by_id(self, overtime_id: int) -> bool:
        return self._rows.pop(int(overtime_id), None) is not None

    def list_all(self, *, employee_id=None, status=None, limit=200) -> Sequence[dict]:
        items = [
            o
            for o in self._rows.values()
            if (employee_id is None or o.employee_id == employee_id) and (status is None or o.status == status)
        ]
        return [{"overtime_id": o.overtime_id, "employee_id": o.employee_id, "status": o.status.value} for o in items][:limit]

    def find_active_for_date(self, employee_id, work_date, *, exclude_id=None) -> Optional[Overtime]:
        for o in self._rows.values():
            if o.employee_id != int(employee_id) or o.work_date != work_date:
                continue
            if o.status == RequestStatus.REJECTED:
                continue
            if exclude_id is not None and o.overtime_id == int(exclude_id):
                continue
            return o
        return None

    def approved_hours(self, *, start_date, end_date, employee_id=None) -> dict[int, float]:
        totals: dict[int, float] = {}
        for o in self._rows.values():
            if o.status != RequestStatus.APPROVED or not start_date <= o.work_date <= end_date:
                continue
            if employee_id is not None and o.employee_id != int(employee_id):
                continue
            totals[o.employee_id] = totals.get(o.employee_id, 0.0) + o.hours
        return totals


class InMemoryNotifications:
    def __init__(self):
        self.rows: dict[int, Notification] = {}
        self._id = 0

    def create(self, *, employee_id, title, message, type) -> int:
        self._id += 1
        self.rows[self._id] = Notification(
            notification_id=self._id,
            employee_id=int(employee_id),
            title=title,
            message=message,
            type=NotificationType(type),
            created_at=FIXED_NOW,
        )
        return self._id

    def create_many(self, *, employee_ids, title, message, type) -> int:
        for eid in employee_ids:
            self.create(employee_id=eid, title=title, message=message, type=type)
        return len(employee_ids)

    def get_by_id(self, notification_id: int) -> Optional[Notification]:
        return self.rows.get(int(notification_id))

    def list_for_employee(self, employee_id, *, unread_only=False, limit=200) -> Sequence[Notification]:
        items = [
            n for n in self.rows.values() if n.employee_id == int(employee_id) and (not unread_only or not n.read)
        ]
        items.sort(key=lambda n: n.notification_id, reverse=True)
        return items[:limit]

    def set_read(self, notification_id: int, read: bool) -> bool:
        current = self.rows.get(int(notification_id))
        if not current:
            return False
        self.rows[current.notification_id] = replace(current, read=bool(read))
        return True

    def for_employee(self, employee_id: int) -> list[Notification]:
        return [n for n in self.rows.values() if n.employee_id == employee_id]


class InMemoryNotices:
    def __init__(self):
        self._rows: dict[int, Notice] = {}
        self._id = 0

    def create(self, *, title, content, type) -> int:
        self._id += 1
        self._rows[self._id] = Notice(notice_id=self._id, title=title, content=content, type=type, created_at=FIXED_NOW)
        return self._id

    def get_by_id(self, notice_id: int) -> Optional[Notice]:
        return self._rows.get(int(notice_id))

    def list_notices(self, *, active_only: bool = False) -> Sequence[Notice]:
        items = [n for n in self._rows.values() if n.active or not active_only]
        return sorted(items, key=lambda n: n.notice_id, reverse=True)

    def update(self, notice_id, *, title, content, type, active) -> None:
        current = self._rows[int(notice_id)]
        self._rows[current.notice_id] = replace(current, title=title, content=content, type=type, active=active)

    def delete_by_id(self, notice_id: int) -> bool:
        return self._rows.pop(int(notice_id), None) is not None


def make_admin(admin_id: int = 1, username: str = "admin", password: str = "admin123") -> Admin:
    return Admin(admin_id=admin_id, username=username, password_hash=generate_password_hash(password), name="Admin User")


def build_fake_container(*, admins: Sequence[Admin] = ()) -> Container:
    employees = InMemoryEmployees()
    return wire(
        employees_repo=employees,
        admins_repo=InMemoryAdmins(admins),
        attendance_repo=InMemoryAttendance(employees),
        requests_repo=InMemoryRequests(),
        timeoffs_repo=InMemoryTimeOffs(),
        overtimes_repo=InMemoryOvertimes(),
        notifications_repo=InMemoryNotifications(),
        notices_repo=InMemoryNotices(),
    )
