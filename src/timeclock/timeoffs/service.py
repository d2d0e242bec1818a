from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..common.validators import optional_text, parse_enum, require_decision, require_non_empty, require_transition
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import NotificationType, RequestStatus, TimeOffType
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..employees.service import EmployeeService
from ..notifications.service import NotificationService
from .model import TimeOff, TimeOffData
from .repository import TimeOffRepository

logger = logging.getLogger(__name__)


def _period(entry) -> str:
    return f"{entry.start_date:%Y-%m-%d} to {entry.end_date:%Y-%m-%d}"


class TimeOffService:
    """Use case: time-off requests (employee) and time-off management (admin).

    At most one approved entry may cover any given day of an employee; every
    write that could break this re-checks against the stored approved entries.
    """

    def __init__(
        self,
        timeoffs: TimeOffRepository,
        employees: EmployeeService,
        notifications: NotificationService,
    ):
        self._timeoffs = timeoffs
        self._employees = employees
        self._notifications = notifications

    def _validate(self, data: Mapping[str, Any], *, default_status: RequestStatus) -> TimeOffData:
        start = parse_iso_date(data.get("start_date"))
        end = parse_iso_date(data.get("end_date"))
        if start > end:
            raise ValidationError("Start date cannot be after end date")

        raw_status = data.get("status")
        status = parse_enum(RequestStatus, raw_status, "status") if raw_status else default_status
        return TimeOffData(
            start_date=start,
            end_date=end,
            type=parse_enum(TimeOffType, data.get("type"), "type"),
            reason=optional_text(data.get("reason")),
            status=status,
            admin_comment=optional_text(data.get("admin_comment")),
        )

    def _check_overlap(self, employee_id: int, data: TimeOffData, *, exclude_id: Optional[int] = None) -> None:
        clash = self._timeoffs.find_overlapping_approved(
            employee_id,
            data.start_date,
            data.end_date,
            exclude_id=exclude_id,
        )
        if clash:
            raise ConflictError(f"Employee already has approved time off from {_period(clash)}")

    def get_time_off(self, timeoff_id: int) -> TimeOff:
        entry = self._timeoffs.get_by_id(int(timeoff_id))
        if not entry:
            raise NotFoundError("Time off not found")
        return entry

    def list_time_offs(self, *, status: Optional[Any] = None, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[dict]:
        status_filter = parse_enum(RequestStatus, status, "status") if status else None
        return self._timeoffs.list_all(status=status_filter, limit=limit)

    def list_for_employee(self, employee_id: int, *, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[dict]:
        return self._timeoffs.list_all(employee_id=int(employee_id), limit=limit)

    def request_time_off(self, employee_id: int, data: Mapping[str, Any]) -> TimeOff:
        """Employee self-service: always starts pending and needs a reason."""
        employee = self._employees.get_employee(employee_id)
        require_non_empty(data.get("reason"), "Reason")
        payload = self._validate({**data, "status": None}, default_status=RequestStatus.PENDING)
        self._check_overlap(employee.employee_id, payload)

        timeoff_id = self._timeoffs.create(employee_id=employee.employee_id, data=payload)
        logger.info("Time off %s requested by employee %s (%s)", timeoff_id, employee.employee_id, _period(payload))
        self._notifications.notify(
            employee.employee_id,
            "Time off request sent",
            f"Your {payload.type.label} request for {_period(payload)} was sent for review.",
            NotificationType.INFO,
        )
        return self.get_time_off(timeoff_id)

    def create_time_off(self, employee_id: int, data: Mapping[str, Any], *, created_by: str = "Admin") -> TimeOff:
        """Admin entry: approved unless another status is given."""
        employee = self._employees.get_employee(employee_id)
        payload = self._validate(data, default_status=RequestStatus.APPROVED)
        self._check_overlap(employee.employee_id, payload)

        approved_by = created_by if payload.status.is_decision else None
        timeoff_id = self._timeoffs.create(employee_id=employee.employee_id, data=payload, approved_by=approved_by)
        logger.info("Time off %s created for employee %s (%s)", timeoff_id, employee.employee_id, _period(payload))
        self._notifications.notify(
            employee.employee_id,
            "New time off registered",
            f"Your {payload.type.label} was registered for {_period(payload)}.",
            NotificationType.INFO,
        )
        return self.get_time_off(timeoff_id)

    def update_time_off(self, timeoff_id: int, data: Mapping[str, Any]) -> TimeOff:
        current = self.get_time_off(timeoff_id)
        payload = self._validate(data, default_status=current.status)
        require_transition(current.status, payload.status)
        self._check_overlap(current.employee_id, payload, exclude_id=current.timeoff_id)

        self._timeoffs.update(current.timeoff_id, payload)
        logger.info("Time off %s updated (status=%s)", current.timeoff_id, payload.status.value)

        verb = payload.status.value if payload.status.is_decision else "updated"
        self._notifications.notify(
            current.employee_id,
            f"Time off request {verb}",
            f"Your time off request for {_period(payload)} was {verb}."
            + (f" Note: {payload.reason}" if payload.reason else ""),
            NotificationType.for_status(payload.status),
        )
        return self.get_time_off(current.timeoff_id)

    def decide_time_off(
        self,
        timeoff_id: int,
        status: Any,
        *,
        admin_comment: str = "",
        approved_by: str = "Admin",
    ) -> TimeOff:
        new_status = require_decision(status)
        comment = optional_text(admin_comment)
        current = self.get_time_off(timeoff_id)
        if current.status == new_status:
            return current
        require_transition(current.status, new_status)

        if new_status == RequestStatus.APPROVED:
            self._check_overlap(current.employee_id, current, exclude_id=current.timeoff_id)

        decided = self._timeoffs.decide(
            timeoff_id=current.timeoff_id,
            status=new_status,
            admin_comment=comment,
            approved_by=approved_by,
        )
        if not decided:
            raise ConflictError("Time off was already decided")

        logger.info("Time off %s %s by %s", current.timeoff_id, new_status.value, approved_by)
        self._notifications.notify(
            current.employee_id,
            f"Time off request {new_status.value}",
            f"Your time off request for {_period(current)} was {new_status.value}."
            + (f" Comment: {comment}" if comment else ""),
            NotificationType.for_status(new_status),
        )
        return self.get_time_off(current.timeoff_id)

    def delete_time_off(self, timeoff_id: int) -> None:
        current = self.get_time_off(timeoff_id)
        if not self._timeoffs.delete_by_id(current.timeoff_id):
            raise NotFoundError("Time off not found")

        logger.info("Time off %s deleted", current.timeoff_id)
        self._notifications.notify(
            current.employee_id,
            "Time off cancelled",
            f"Your time off for {_period(current)} was cancelled.",
            NotificationType.WARNING,
        )
