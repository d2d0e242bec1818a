from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from typing import Any

from ..core.exceptions import ValidationError


def _as_text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(_as_text(value), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_clock_time(value: str) -> time:
    """Parse HH:MM or HH:MM:SS."""
    v = _as_text(value)
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValidationError("Invalid time (HH:MM)")


def parse_month(value: str) -> tuple[date, date]:
    """Parse YYYY-MM into the first and last day of that month."""
    try:
        first = datetime.strptime(_as_text(value), "%Y-%m").date()
    except ValueError:
        raise ValidationError(f"Invalid month (YYYY-MM): {value!r}")
    return month_bounds(first.year, first.month)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    _, last_day = calendar.monthrange(year, month)
    return date(year, month, 1), date(year, month, last_day)


def ranges_overlap(start_a: date, end_a: date, start_b: date, end_b: date) -> bool:
    """Inclusive date ranges overlap."""
    return start_a <= end_b and end_a >= start_b


def js_weekday(d: date) -> int:
    """Day of week with 0 = Sunday ... 6 = Saturday."""
    return (d.weekday() + 1) % 7


def minutes_between(start: datetime, end: datetime) -> int:
    return int((end - start).total_seconds() // 60)


def format_hours(minutes: int) -> str:
    minutes = max(int(minutes), 0)
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch it.
    """
    return datetime.now()


def days_back(today: date, days: int) -> date:
    return today - timedelta(days=max(int(days), 1) - 1)
