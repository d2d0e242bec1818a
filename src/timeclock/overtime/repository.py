from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import RequestStatus
from .model import Overtime, OvertimeData


class OvertimeRepository(Protocol):
    def create(self, *, employee_id: int, data: OvertimeData, approved_by: Optional[str] = None) -> int:
        raise NotImplementedError

    def get_by_id(self, overtime_id: int) -> Optional[Overtime]:
        raise NotImplementedError

    def update(self, overtime_id: int, data: OvertimeData, *, approved_by: Optional[str] = None) -> None:
        raise NotImplementedError

    def decide(
        self,
        *,
        overtime_id: int,
        status: RequestStatus,
        admin_comment: Optional[str],
        approved_by: Optional[str],
    ) -> bool:
        """Only a pending entry can be decided; returns False otherwise."""

        raise NotImplementedError

    def delete_by_id(self, overtime_id: int) -> bool:
        raise NotImplementedError

    def list_all(
        self,
        *,
        employee_id: Optional[int] = None,
        status: Optional[RequestStatus] = None,
        limit: int = 200,
    ) -> Sequence[dict]:
        """Return UI rows (joined with employee, including hourly rate)."""

        raise NotImplementedError

    def find_active_for_date(
        self,
        employee_id: int,
        work_date: date,
        *,
        exclude_id: Optional[int] = None,
    ) -> Optional[Overtime]:
        """A pending or approved entry of the employee on that date."""

        raise NotImplementedError

    def approved_hours(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> dict[int, float]:
        """Approved overtime hours per employee within the date range."""

        raise NotImplementedError
