from __future__ import annotations

import logging
import math
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..common.validators import optional_text, parse_enum, require_decision, require_non_empty, require_transition
from ..core.constants import DEFAULT_LIST_LIMIT, MAX_OVERTIME_HOURS, OVERTIME_MULTIPLIER
from ..core.enums import NotificationType, RequestStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..employees.service import EmployeeService
from ..notifications.service import NotificationService
from .model import Overtime, OvertimeData
from .repository import OvertimeRepository

logger = logging.getLogger(__name__)


def overtime_pay(hours: float, hourly_rate: float) -> float:
    return round(float(hours) * float(hourly_rate) * OVERTIME_MULTIPLIER, 2)


def _require_hours(value: Any) -> float:
    try:
        hours = float(value)
    except (TypeError, ValueError):
        raise ValidationError("Hours must be a number")
    if not math.isfinite(hours):
        raise ValidationError("Hours must be a number")
    if hours <= 0 or hours > MAX_OVERTIME_HOURS:
        raise ValidationError(f"Overtime must be more than 0 and at most {MAX_OVERTIME_HOURS} hours")
    return round(hours, 2)


def _status_message(entry, status: RequestStatus) -> str:
    if status == RequestStatus.APPROVED:
        return f"Your {entry.hours:g}h of overtime on {entry.work_date:%Y-%m-%d} were approved!"
    if status == RequestStatus.REJECTED:
        return f"Your {entry.hours:g}h of overtime on {entry.work_date:%Y-%m-%d} were rejected."
    return f"{entry.hours:g}h of overtime registered for {entry.work_date:%Y-%m-%d}."


class OvertimeService:
    """Use case: overtime requests and their approval.

    One pending or approved entry per employee and date; rejected entries do
    not block a new request for the same day.
    """

    def __init__(
        self,
        overtimes: OvertimeRepository,
        employees: EmployeeService,
        notifications: NotificationService,
    ):
        self._overtimes = overtimes
        self._employees = employees
        self._notifications = notifications

    def _validate(self, data: Mapping[str, Any], *, default_status: RequestStatus) -> OvertimeData:
        raw_status = data.get("status")
        return OvertimeData(
            work_date=parse_iso_date(data.get("date")),
            hours=_require_hours(data.get("hours")),
            reason=require_non_empty(data.get("reason"), "Reason"),
            status=parse_enum(RequestStatus, raw_status, "status") if raw_status else default_status,
            admin_comment=optional_text(data.get("admin_comment")),
        )

    def _check_unique(self, employee_id: int, data, *, exclude_id: Optional[int] = None) -> None:
        if self._overtimes.find_active_for_date(employee_id, data.work_date, exclude_id=exclude_id):
            raise ConflictError("Overtime is already registered for this employee on this date")

    def get_overtime(self, overtime_id: int) -> Overtime:
        entry = self._overtimes.get_by_id(int(overtime_id))
        if not entry:
            raise NotFoundError("Overtime entry not found")
        return entry

    def list_overtime(self, *, status: Optional[Any] = None, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[dict]:
        status_filter = parse_enum(RequestStatus, status, "status") if status else None
        return self._overtimes.list_all(status=status_filter, limit=limit)

    def list_for_employee(self, employee_id: int, *, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[dict]:
        return self._overtimes.list_all(employee_id=int(employee_id), limit=limit)

    def _create(self, employee_id: int, payload: OvertimeData, *, approved_by: Optional[str]) -> Overtime:
        employee = self._employees.get_employee(employee_id)
        if payload.status != RequestStatus.REJECTED:
            self._check_unique(employee.employee_id, payload)

        overtime_id = self._overtimes.create(
            employee_id=employee.employee_id,
            data=payload,
            approved_by=approved_by if payload.status == RequestStatus.APPROVED else None,
        )
        logger.info(
            "Overtime %s registered for employee %s: %sh on %s (%s)",
            overtime_id,
            employee.employee_id,
            payload.hours,
            payload.work_date,
            payload.status.value,
        )
        self._notifications.notify(
            employee.employee_id,
            "Overtime",
            _status_message(payload, payload.status),
            NotificationType.for_status(payload.status),
        )
        return self.get_overtime(overtime_id)

    def request_overtime(self, employee_id: int, data: Mapping[str, Any]) -> Overtime:
        payload = self._validate({**data, "status": None, "admin_comment": None}, default_status=RequestStatus.PENDING)
        return self._create(employee_id, payload, approved_by=None)

    def create_overtime(self, employee_id: int, data: Mapping[str, Any], *, created_by: str = "Admin") -> Overtime:
        payload = self._validate(data, default_status=RequestStatus.PENDING)
        return self._create(employee_id, payload, approved_by=created_by)

    def update_overtime(self, overtime_id: int, data: Mapping[str, Any], *, updated_by: str = "Admin") -> Overtime:
        current = self.get_overtime(overtime_id)
        payload = self._validate(data, default_status=current.status)
        require_transition(current.status, payload.status)
        if payload.status != RequestStatus.REJECTED:
            self._check_unique(current.employee_id, payload, exclude_id=current.overtime_id)

        approved_by = updated_by if payload.status == RequestStatus.APPROVED else None
        self._overtimes.update(current.overtime_id, payload, approved_by=approved_by)
        logger.info("Overtime %s updated (status=%s)", current.overtime_id, payload.status.value)

        self._notifications.notify(
            current.employee_id,
            "Overtime updated",
            _status_message(payload, payload.status),
            NotificationType.for_status(payload.status),
        )
        return self.get_overtime(current.overtime_id)

    def decide_overtime(
        self,
        overtime_id: int,
        status: Any,
        *,
        admin_comment: str = "",
        approved_by: str = "Admin",
    ) -> Overtime:
        new_status = require_decision(status)
        comment = optional_text(admin_comment)
        current = self.get_overtime(overtime_id)
        if current.status == new_status:
            return current
        require_transition(current.status, new_status)

        decided = self._overtimes.decide(
            overtime_id=current.overtime_id,
            status=new_status,
            admin_comment=comment,
            approved_by=approved_by if new_status == RequestStatus.APPROVED else None,
        )
        if not decided:
            raise ConflictError("Overtime was already decided")

        logger.info("Overtime %s %s by %s", current.overtime_id, new_status.value, approved_by)
        self._notifications.notify(
            current.employee_id,
            f"Overtime {new_status.value}",
            _status_message(current, new_status)
            + (f" Comment: {comment}" if comment else ""),
            NotificationType.for_status(new_status),
        )
        return self.get_overtime(current.overtime_id)

    def delete_overtime(self, overtime_id: int) -> None:
        current = self.get_overtime(overtime_id)
        if not self._overtimes.delete_by_id(current.overtime_id):
            raise NotFoundError("Overtime entry not found")

        logger.info("Overtime %s deleted", current.overtime_id)
        self._notifications.notify(
            current.employee_id,
            "Overtime removed",
            f"Your overtime entry for {current.work_date:%Y-%m-%d} was removed.",
            NotificationType.WARNING,
        )
