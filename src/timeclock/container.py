from __future__ import annotations

from dataclasses import dataclass

from .admins.mysql_admin_repository import MySQLAdminRepository
from .admins.repository import AdminRepository
from .admins.service import AuthService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import PunchService
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .notices.mysql_notice_repository import MySQLNoticeRepository
from .notices.repository import NoticeRepository
from .notices.service import NoticeService
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.repository import NotificationRepository
from .notifications.service import NotificationService
from .overtime.mysql_overtime_repository import MySQLOvertimeRepository
from .overtime.repository import OvertimeRepository
from .overtime.service import OvertimeService
from .payroll.service import PayrollReportService
from .requests.mysql_request_repository import MySQLRequestRepository
from .requests.repository import RequestRepository
from .requests.service import RequestService
from .timeoffs.mysql_timeoff_repository import MySQLTimeOffRepository
from .timeoffs.repository import TimeOffRepository
from .timeoffs.service import TimeOffService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    admins_repo: AdminRepository
    attendance_repo: AttendanceRepository
    requests_repo: RequestRepository
    timeoffs_repo: TimeOffRepository
    overtimes_repo: OvertimeRepository
    notifications_repo: NotificationRepository
    notices_repo: NoticeRepository

    employee_service: EmployeeService
    auth_service: AuthService
    punch_service: PunchService
    notification_service: NotificationService
    request_service: RequestService
    timeoff_service: TimeOffService
    overtime_service: OvertimeService
    notice_service: NoticeService
    payroll_report_service: PayrollReportService
    dashboard_service: DashboardService


def wire(
    *,
    employees_repo: EmployeeRepository,
    admins_repo: AdminRepository,
    attendance_repo: AttendanceRepository,
    requests_repo: RequestRepository,
    timeoffs_repo: TimeOffRepository,
    overtimes_repo: OvertimeRepository,
    notifications_repo: NotificationRepository,
    notices_repo: NoticeRepository,
) -> Container:
    """Build every service on top of the given repositories (MySQL or in-memory)."""
    employee_service = EmployeeService(employees_repo)
    notification_service = NotificationService(notifications_repo, employees_repo)

    return Container(
        employees_repo=employees_repo,
        admins_repo=admins_repo,
        attendance_repo=attendance_repo,
        requests_repo=requests_repo,
        timeoffs_repo=timeoffs_repo,
        overtimes_repo=overtimes_repo,
        notifications_repo=notifications_repo,
        notices_repo=notices_repo,
        employee_service=employee_service,
        auth_service=AuthService(admins_repo, employee_service),
        punch_service=PunchService(attendance_repo, employee_service),
        notification_service=notification_service,
        request_service=RequestService(requests_repo, attendance_repo, employee_service, notification_service),
        timeoff_service=TimeOffService(timeoffs_repo, employee_service, notification_service),
        overtime_service=OvertimeService(overtimes_repo, employee_service, notification_service),
        notice_service=NoticeService(notices_repo, notification_service),
        payroll_report_service=PayrollReportService(attendance_repo, overtimes_repo, employee_service),
        dashboard_service=DashboardService(employee_service, attendance_repo, timeoffs_repo),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire(
        employees_repo=MySQLEmployeeRepository(conn),
        admins_repo=MySQLAdminRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        requests_repo=MySQLRequestRepository(conn),
        timeoffs_repo=MySQLTimeOffRepository(conn),
        overtimes_repo=MySQLOvertimeRepository(conn),
        notifications_repo=MySQLNotificationRepository(conn),
        notices_repo=MySQLNoticeRepository(conn),
    )
