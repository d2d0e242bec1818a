from __future__ import annotations

from datetime import date, datetime

import pytest

from timeclock.core.enums import PunchType
from timeclock.core.exceptions import DayOffError, NotFoundError, ValidationError

MONDAY = datetime(2026, 3, 2, 8, 0, 12, 345)


def test_full_day_in_order(container, alice):
    svc = container.punch_service
    svc.register_punch(alice.employee_id, PunchType.ENTRY, now=MONDAY)
    svc.register_punch(alice.employee_id, PunchType.LUNCH_START, now=MONDAY.replace(hour=12))
    svc.register_punch(alice.employee_id, PunchType.LUNCH_END, now=MONDAY.replace(hour=13))
    record = svc.register_punch(alice.employee_id, PunchType.EXIT, now=MONDAY.replace(hour=17))

    assert record.entry == datetime(2026, 3, 2, 8, 0, 12)
    assert record.exit == datetime(2026, 3, 2, 17, 0, 12)
    assert record.next_punch() is None
    assert container.attendance_repo.count(work_date=date(2026, 3, 2)) == 1


def test_same_punch_twice_is_rejected(container, alice):
    svc = container.punch_service
    svc.register_punch(alice.employee_id, PunchType.ENTRY, now=MONDAY)

    with pytest.raises(ValidationError, match="Entry already registered today"):
        svc.register_punch(alice.employee_id, PunchType.ENTRY, now=MONDAY.replace(hour=9))


def test_punch_out_of_order_is_rejected(container, alice):
    with pytest.raises(ValidationError, match="Register entry first"):
        container.punch_service.register_punch(alice.employee_id, PunchType.EXIT, now=MONDAY)

    container.punch_service.register_punch(alice.employee_id, PunchType.ENTRY, now=MONDAY)
    with pytest.raises(ValidationError, match="Register lunch start first"):
        container.punch_service.register_punch(alice.employee_id, PunchType.LUNCH_END, now=MONDAY)
    with pytest.raises(ValidationError, match="Register lunch start first"):
        container.punch_service.register_punch(alice.employee_id, PunchType.EXIT, now=MONDAY)
    assert container.attendance_repo.get_for_employee_and_date(alice.employee_id, MONDAY.date()).exit is None


def test_punch_on_weekly_day_off_is_forbidden(container, alice):
    container.employee_service.add_off_day(alice.employee_id, 1)  # Monday

    with pytest.raises(DayOffError) as exc:
        container.punch_service.register_punch(alice.employee_id, PunchType.ENTRY, now=MONDAY)
    assert exc.value.status_code == 403
    assert container.attendance_repo.count() == 0

    # Tuesday is still a working day
    container.punch_service.register_punch(alice.employee_id, PunchType.ENTRY, now=MONDAY.replace(day=3))


def test_unknown_employee(container):
    with pytest.raises(NotFoundError):
        container.punch_service.register_punch(99, PunchType.ENTRY, now=MONDAY)


def test_recent_records_window(container, alice):
    svc = container.punch_service
    for day in (1, 2, 3, 9):
        svc.register_punch(alice.employee_id, PunchType.ENTRY, now=datetime(2026, 3, day, 8, 0))

    records = svc.recent_records(alice.employee_id, days=7, today=date(2026, 3, 9))

    assert [r.work_date for r in records] == [date(2026, 3, 9), date(2026, 3, 3)]
