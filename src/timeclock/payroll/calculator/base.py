from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Protocol


class PunchTimes(Protocol):
    entry: Optional[datetime]
    lunch_start: Optional[datetime]
    lunch_end: Optional[datetime]
    exit: Optional[datetime]


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def worked_minutes(self, row: PunchTimes) -> int:
        raise NotImplementedError

    def pay(self, minutes: int, hourly_rate: float) -> float:
        return round(minutes / 60 * float(hourly_rate or 0), 2)
