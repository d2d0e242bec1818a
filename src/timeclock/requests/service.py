from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import parse_clock_time
from ..common.validators import optional_text, parse_enum, require_decision, require_non_empty, require_transition
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import NotificationType, PunchType, RequestStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..employees.service import EmployeeService
from ..notifications.service import NotificationService
from .model import CorrectionRequest, JustificationRequest
from .repository import RequestRepository

logger = logging.getLogger(__name__)


class RequestService:
    """Use case: employees file corrections/justifications, admins decide them."""

    def __init__(
        self,
        requests: RequestRepository,
        attendance: AttendanceRepository,
        employees: EmployeeService,
        notifications: NotificationService,
    ):
        self._requests = requests
        self._attendance = attendance
        self._employees = employees
        self._notifications = notifications

    # -------- Create --------
    def create_correction(
        self,
        *,
        employee_id: int,
        work_date: date,
        field: Any,
        requested_time: str,
        reason: str,
    ) -> CorrectionRequest:
        employee = self._employees.get_employee(employee_id)
        punch_type = parse_enum(PunchType, field, "field")
        when = parse_clock_time(requested_time)
        reason = require_non_empty(reason, "Reason")

        request_id = self._requests.create_correction(
            employee_id=employee.employee_id,
            work_date=work_date,
            field=punch_type,
            requested_time=when,
            reason=reason,
        )
        logger.info("Correction %s filed by employee %s for %s", request_id, employee.employee_id, work_date)
        return self._requests.get_correction(request_id)

    def create_justification(self, *, employee_id: int, work_date: date, reason: str) -> JustificationRequest:
        employee = self._employees.get_employee(employee_id)
        reason = require_non_empty(reason, "Reason")

        request_id = self._requests.create_justification(
            employee_id=employee.employee_id,
            work_date=work_date,
            reason=reason,
        )
        logger.info("Justification %s filed by employee %s for %s", request_id, employee.employee_id, work_date)
        return self._requests.get_justification(request_id)

    # -------- List --------
    def list_requests(
        self,
        *,
        kind: Optional[str] = None,
        status: Optional[Any] = None,
        employee_id: Optional[int] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> dict:
        """Return {"corrections": [...], "justifications": [...]}; kind narrows to one list."""
        if kind not in (None, "", "corrections", "justifications"):
            raise ValidationError("Invalid type (expected corrections or justifications)")
        status_filter = parse_enum(RequestStatus, status, "status") if status else None
        employee_filter = int(employee_id) if employee_id is not None else None

        corrections: list[dict] = []
        justifications: list[dict] = []
        if kind in (None, "", "corrections"):
            corrections = list(
                self._requests.list_corrections(status=status_filter, employee_id=employee_filter, limit=limit)
            )
        if kind in (None, "", "justifications"):
            justifications = list(
                self._requests.list_justifications(status=status_filter, employee_id=employee_filter, limit=limit)
            )
        return {"corrections": corrections, "justifications": justifications}

    # -------- Decide --------
    def _apply_correction(self, req: CorrectionRequest) -> None:
        new_value = datetime.combine(req.work_date, req.requested_time)
        record = self._attendance.get_for_employee_and_date(req.employee_id, req.work_date)

        stamps = {p: (record.stamp(p) if record else None) for p in PunchType.sequence()}
        stamps[req.field] = new_value

        previous: Optional[datetime] = None
        for punch_type in PunchType.sequence():
            value = stamps[punch_type]
            if value is None:
                continue
            if previous is not None and value < previous:
                raise ValidationError(f"{punch_type.label} cannot be earlier than the previous punch")
            previous = value

        self._attendance.set_punch(
            employee_id=req.employee_id,
            work_date=req.work_date,
            punch_type=req.field,
            value=new_value,
        )

    def decide_correction(self, request_id: int, status: Any, *, admin_comment: str = "") -> CorrectionRequest:
        new_status = require_decision(status)
        comment = optional_text(admin_comment)
        req = self._requests.get_correction(int(request_id))
        if not req:
            raise NotFoundError("Correction request not found")
        if req.status == new_status:
            return req
        require_transition(req.status, new_status)

        if new_status == RequestStatus.APPROVED:
            self._apply_correction(req)

        decided = self._requests.decide_correction(
            request_id=req.request_id,
            status=new_status,
            admin_comment=comment,
        )
        if not decided:
            raise ConflictError("Request was already decided")

        logger.info("Correction %s %s", req.request_id, new_status.value)
        self._notifications.notify(
            req.employee_id,
            f"Correction {new_status.value}",
            f"Your {req.field.label.lower()} correction for {req.work_date:%Y-%m-%d} was {new_status.value}."
            + (f" Comment: {comment}" if comment else ""),
            NotificationType.for_status(new_status),
        )
        return self._requests.get_correction(req.request_id)

    def decide_justification(self, request_id: int, status: Any, *, admin_comment: str = "") -> JustificationRequest:
        new_status = require_decision(status)
        comment = optional_text(admin_comment)
        req = self._requests.get_justification(int(request_id))
        if not req:
            raise NotFoundError("Justification request not found")
        if req.status == new_status:
            return req
        require_transition(req.status, new_status)

        decided = self._requests.decide_justification(
            request_id=req.request_id,
            status=new_status,
            admin_comment=comment,
        )
        if not decided:
            raise ConflictError("Request was already decided")

        logger.info("Justification %s %s", req.request_id, new_status.value)
        self._notifications.notify(
            req.employee_id,
            f"Justification {new_status.value}",
            f"Your justification for {req.work_date:%Y-%m-%d} was {new_status.value}."
            + (f" Comment: {comment}" if comment else ""),
            NotificationType.for_status(new_status),
        )
        return self._requests.get_justification(req.request_id)
