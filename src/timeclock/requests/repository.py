from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..core.enums import PunchType, RequestStatus
from .model import CorrectionRequest, JustificationRequest


class RequestRepository(Protocol):
    # Corrections
    def create_correction(
        self,
        *,
        employee_id: int,
        work_date: date,
        field: PunchType,
        requested_time: time,
        reason: str,
    ) -> int:
        raise NotImplementedError

    def get_correction(self, request_id: int) -> Optional[CorrectionRequest]:
        raise NotImplementedError

    def list_corrections(
        self,
        *,
        status: Optional[RequestStatus] = None,
        employee_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[dict]:
        """Return UI rows (joined with employee)."""

        raise NotImplementedError

    def decide_correction(self, *, request_id: int, status: RequestStatus, admin_comment: Optional[str] = None) -> bool:
        """Only a pending request can be decided; returns False otherwise."""

        raise NotImplementedError

    # Justifications
    def create_justification(self, *, employee_id: int, work_date: date, reason: str) -> int:
        raise NotImplementedError

    def get_justification(self, request_id: int) -> Optional[JustificationRequest]:
        raise NotImplementedError

    def list_justifications(
        self,
        *,
        status: Optional[RequestStatus] = None,
        employee_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[dict]:
        raise NotImplementedError

    def decide_justification(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        admin_comment: Optional[str] = None,
    ) -> bool:
        raise NotImplementedError
