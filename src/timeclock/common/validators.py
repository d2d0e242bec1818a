from __future__ import annotations

import math
from typing import Any, Optional

from ..core.constants import PIN_LENGTH
from ..core.enums import RequestStatus
from ..core.exceptions import ValidationError

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def optional_text(value: Any) -> Optional[str]:
    v = (str(value) if value is not None else "").strip()
    return v or None


def require_pin(value: str) -> str:
    pin = value.strip() if isinstance(value, str) else ""
    if len(pin) != PIN_LENGTH or not pin.isdigit():
        raise ValidationError(f"PIN must have exactly {PIN_LENGTH} digits")
    return pin


def require_non_negative_number(value: Any, field_name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not math.isfinite(number):
        raise ValidationError(f"{field_name} must be a number")
    if number < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return number


def require_int(value: Any, field_name: str) -> int:
    """Accept an int or a string of digits; booleans are not ids."""
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise ValidationError(f"{field_name} must be an integer")


def parse_bool(value: Any, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        v = value.strip().lower()
        if v in _TRUE_VALUES:
            return True
        if v in _FALSE_VALUES:
            return False
    raise ValidationError(f"{field_name} must be true or false")


def parse_enum(enum_cls, value: Any, field_name: str):
    try:
        return enum_cls(value)
    except (TypeError, ValueError):
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"Invalid {field_name} (expected one of: {allowed})")

def require_decision(value: Any) -> RequestStatus:
    status = parse_enum(RequestStatus, value, "status")
    if status == RequestStatus.PENDING:
        raise ValidationError("Decision must be approved or rejected")
    return status


def require_transition(current: RequestStatus, new: RequestStatus) -> None:
    if not current.can_transition_to(new):
        raise ValidationError(f"Request already {current.value}")
