from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import RequestStatus
from .model import TimeOff, TimeOffData


class TimeOffRepository(Protocol):
    def create(self, *, employee_id: int, data: TimeOffData, approved_by: Optional[str] = None) -> int:
        raise NotImplementedError

    def get_by_id(self, timeoff_id: int) -> Optional[TimeOff]:
        raise NotImplementedError

    def update(self, timeoff_id: int, data: TimeOffData) -> None:
        raise NotImplementedError

    def decide(
        self,
        *,
        timeoff_id: int,
        status: RequestStatus,
        admin_comment: Optional[str],
        approved_by: Optional[str],
    ) -> bool:
        """Only a pending entry can be decided; returns False otherwise."""

        raise NotImplementedError

    def delete_by_id(self, timeoff_id: int) -> bool:
        raise NotImplementedError

    def list_all(
        self,
        *,
        employee_id: Optional[int] = None,
        status: Optional[RequestStatus] = None,
        limit: int = 200,
    ) -> Sequence[dict]:
        """Return UI rows (joined with employee), latest start date first."""

        raise NotImplementedError

    def find_overlapping_approved(
        self,
        employee_id: int,
        start_date: date,
        end_date: date,
        *,
        exclude_id: Optional[int] = None,
    ) -> Optional[TimeOff]:
        raise NotImplementedError

    def approved_covering(self, day: date) -> Sequence[TimeOff]:
        """Approved entries whose range includes the given day."""

        raise NotImplementedError
