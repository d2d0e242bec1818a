from __future__ import annotations

import logging
import secrets
from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import js_weekday
from ..common.validators import optional_text, require_non_empty, require_non_negative_number, require_pin
from ..core.constants import DEFAULT_DEPARTMENT, DEFAULT_JOB_ROLE, PIN_LENGTH
from ..core.exceptions import AuthenticationError, ConflictError, DomainError, NotFoundError, ValidationError
from .model import Employee, EmployeeData, ImportResult
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

_MAX_PIN_ATTEMPTS = 50


def initials(name: str) -> str:
    return "".join(part[0] for part in name.split() if part).upper()[:2]


class EmployeeService:
    """Use case: manage the employee directory (admin) and PIN lookup (kiosk)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_employees(self) -> Sequence[Employee]:
        return self._employees.list_all()

    def count_employees(self) -> int:
        return self._employees.count()

    def get_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def authenticate_pin(self, pin: str) -> Employee:
        pin = (pin or "").strip()
        employee = self._employees.get_by_pin(pin) if pin else None
        if not employee:
            raise AuthenticationError("Invalid PIN")
        return employee

    def generate_pin(self) -> str:
        low = 10 ** (PIN_LENGTH - 1)
        for _ in range(_MAX_PIN_ATTEMPTS):
            pin = str(low + secrets.randbelow(9 * low))
            if not self._employees.get_by_pin(pin):
                return pin
        raise ConflictError("Could not generate a unique PIN")

    def _validate(self, data: Mapping[str, Any], *, pin: str) -> EmployeeData:
        name = require_non_empty(data.get("name", ""), "Name")
        rate = data.get("hourly_rate")
        hourly_rate = require_non_negative_number(rate, "Hourly rate") if rate not in (None, "") else 0.0
        return EmployeeData(
            name=name,
            dept=optional_text(data.get("dept")),
            role=optional_text(data.get("role")),
            pin=pin,
            hourly_rate=round(hourly_rate, 2),
            email=optional_text(data.get("email")),
            phone=optional_text(data.get("phone")),
            document_id=optional_text(data.get("document_id")),
            address=optional_text(data.get("address")),
            avatar=initials(name),
        )

    def _check_pin_free(self, pin: str, *, employee_id: Optional[int] = None) -> None:
        owner = self._employees.get_by_pin(pin)
        if owner and owner.employee_id != employee_id:
            raise ConflictError("PIN already in use")

    def create_employee(self, data: Mapping[str, Any]) -> Employee:
        raw_pin = optional_text(data.get("pin"))
        if raw_pin:
            pin = require_pin(raw_pin)
            self._check_pin_free(pin)
        else:
            pin = self.generate_pin()

        payload = self._validate(data, pin=pin)
        employee_id = self._employees.create(payload)
        logger.info("Employee created: %s (id=%s)", payload.name, employee_id)
        return self.get_employee(employee_id)

    def update_employee(self, employee_id: int, data: Mapping[str, Any]) -> Employee:
        current = self.get_employee(employee_id)

        raw_pin = optional_text(data.get("pin"))
        pin = current.pin
        if raw_pin and raw_pin != current.pin:
            pin = require_pin(raw_pin)
            self._check_pin_free(pin, employee_id=current.employee_id)

        payload = self._validate(data, pin=pin)
        self._employees.update(current.employee_id, payload)
        return self.get_employee(current.employee_id)

    def delete_employee(self, employee_id: int) -> None:
        employee = self.get_employee(employee_id)
        if not self._employees.delete_by_id(employee.employee_id):
            raise ValidationError("Failed to delete employee")
        logger.info("Employee deleted: %s (id=%s)", employee.name, employee.employee_id)

    def import_employees(self, rows: Sequence[Mapping[str, Any]]) -> ImportResult:
        """Bulk create from already-parsed rows; PINs are always generated."""
        count = 0
        errors: list[dict] = []
        for row in rows:
            data = dict(row)
            data["pin"] = None
            data["dept"] = optional_text(data.get("dept")) or DEFAULT_DEPARTMENT
            data["role"] = optional_text(data.get("role")) or DEFAULT_JOB_ROLE
            try:
                self.create_employee(data)
                count += 1
            except DomainError as e:
                errors.append({"name": data.get("name"), "error": str(e)})

        logger.info("Employee import finished: %d created, %d failed", count, len(errors))
        return ImportResult(count=count, errors=errors)

    # -------- Weekly off days --------
    @staticmethod
    def _require_day(day_of_week: Any) -> int:
        if isinstance(day_of_week, bool) or not isinstance(day_of_week, int) or not 0 <= day_of_week <= 6:
            raise ValidationError("day_of_week must be an integer between 0 (Sunday) and 6 (Saturday)")
        return day_of_week

    def list_off_days(self, employee_id: int) -> Sequence[int]:
        employee = self.get_employee(employee_id)
        return self._employees.list_off_days(employee.employee_id)

    def add_off_day(self, employee_id: int, day_of_week: Any) -> Sequence[int]:
        employee = self.get_employee(employee_id)
        day = self._require_day(day_of_week)
        if not self._employees.add_off_day(employee.employee_id, day):
            raise ConflictError("This day off is already configured")
        return self._employees.list_off_days(employee.employee_id)

    def remove_off_day(self, employee_id: int, day_of_week: Any) -> Sequence[int]:
        employee = self.get_employee(employee_id)
        day = self._require_day(day_of_week)
        if not self._employees.remove_off_day(employee.employee_id, day):
            raise NotFoundError("Day off not configured")
        return self._employees.list_off_days(employee.employee_id)

    def is_off_day(self, employee_id: int, work_date: date) -> bool:
        return js_weekday(work_date) in self._employees.list_off_days(int(employee_id))
