from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Session role used for access control."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class PunchType(str, Enum):
    """Clock events of a working day, in the order they must happen."""

    ENTRY = "entry"
    LUNCH_START = "lunchStart"
    LUNCH_END = "lunchEnd"
    EXIT = "exit"

    @property
    def field(self) -> str:
        """Attribute name on DailyRecord."""
        return _PUNCH_FIELDS[self]

    @property
    def label(self) -> str:
        return _PUNCH_LABELS[self]

    @classmethod
    def sequence(cls) -> tuple["PunchType", ...]:
        return (cls.ENTRY, cls.LUNCH_START, cls.LUNCH_END, cls.EXIT)

    def previous(self) -> "PunchType | None":
        seq = self.sequence()
        idx = seq.index(self)
        return seq[idx - 1] if idx > 0 else None


_PUNCH_FIELDS = {
    PunchType.ENTRY: "entry",
    PunchType.LUNCH_START: "lunch_start",
    PunchType.LUNCH_END: "lunch_end",
    PunchType.EXIT: "exit",
}

_PUNCH_LABELS = {
    PunchType.ENTRY: "Entry",
    PunchType.LUNCH_START: "Lunch start",
    PunchType.LUNCH_END: "Lunch end",
    PunchType.EXIT: "Exit",
}


class RequestStatus(str, Enum):
    """Approval workflow status (corrections, justifications, time off, overtime)."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    def can_transition_to(self, new: "RequestStatus") -> bool:
        if new == self:
            return True
        return self == RequestStatus.PENDING

    @property
    def is_decision(self) -> bool:
        return self != RequestStatus.PENDING


class TimeOffType(str, Enum):
    VACATION = "vacation"
    SICK = "sick"
    MEDICAL = "medical"
    PERSONAL = "personal"

    @property
    def label(self) -> str:
        return {
            TimeOffType.VACATION: "vacation",
            TimeOffType.SICK: "sick leave",
            TimeOffType.MEDICAL: "medical appointment",
            TimeOffType.PERSONAL: "personal day off",
        }[self]


class NotificationType(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"

    @classmethod
    def for_status(cls, status: RequestStatus) -> "NotificationType":
        if status == RequestStatus.APPROVED:
            return cls.SUCCESS
        if status == RequestStatus.REJECTED:
            return cls.ERROR
        return cls.INFO


class AbsenceKind(str, Enum):
    MISSING = "missing"
    TIME_OFF = "timeoff"
    DAY_OFF = "day_off"
