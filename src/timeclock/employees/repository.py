from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee, EmployeeData


class EmployeeRepository(Protocol):
    """Repository interface for employees.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_pin(self, pin: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError

    def create(self, data: EmployeeData) -> int:
        raise NotImplementedError

    def update(self, employee_id: int, data: EmployeeData) -> bool:
        raise NotImplementedError

    def delete_by_id(self, employee_id: int) -> bool:
        raise NotImplementedError

    # Weekly off days (0 = Sunday ... 6 = Saturday)
    def list_off_days(self, employee_id: int) -> Sequence[int]:
        raise NotImplementedError

    def add_off_day(self, employee_id: int, day_of_week: int) -> bool:
        """Return False when the day is already configured."""

        raise NotImplementedError

    def remove_off_day(self, employee_id: int, day_of_week: int) -> bool:
        raise NotImplementedError
