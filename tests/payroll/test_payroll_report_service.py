from __future__ import annotations

from datetime import date, datetime

import pytest

from timeclock.core.enums import PunchType
from timeclock.core.exceptions import ValidationError

START = date(2026, 3, 1)
END = date(2026, 3, 31)


def _day(container, employee_id, day, entry, exit, lunch=None):
    repo = container.attendance_repo
    work_date = date(2026, 3, day)
    stamps = [(PunchType.ENTRY, entry), (PunchType.EXIT, exit)]
    if lunch:
        stamps += [(PunchType.LUNCH_START, lunch[0]), (PunchType.LUNCH_END, lunch[1])]
    for punch_type, (h, m) in stamps:
        repo.set_punch(
            employee_id=employee_id,
            work_date=work_date,
            punch_type=punch_type,
            value=datetime(2026, 3, day, h, m),
        )


def test_report_rows_summary_and_totals(container, alice, bob):
    _day(container, alice.employee_id, 2, (8, 0), (17, 0), lunch=((12, 0), (13, 0)))
    _day(container, alice.employee_id, 3, (9, 0), (13, 30))
    _day(container, bob.employee_id, 2, (10, 0), (12, 0))
    container.overtime_service.create_overtime(
        alice.employee_id, {"date": "2026-03-03", "hours": 2, "reason": "Stock", "status": "approved"}
    )

    report = container.payroll_report_service.build_report(start=START, end=END)

    assert len(report.rows) == 3
    first_alice = next(r for r in report.rows if r["employee_id"] == alice.employee_id and r["work_date"] == "2026-03-02")
    assert first_alice["worked_hours"] == "08:00"
    assert first_alice["pay"] == 160.0
    assert first_alice["lunch_start"] == "12:00"

    no_lunch = next(r for r in report.rows if r["work_date"] == "2026-03-03")
    assert no_lunch["lunch_start"] == "-"

    alice_sum, bob_sum = report.summary
    assert alice_sum["employee_id"] == alice.employee_id
    assert alice_sum["days"] == 2
    assert alice_sum["total_hours"] == "12:30"
    assert alice_sum["pay"] == 250.0
    assert alice_sum["overtime_hours"] == 2
    assert alice_sum["overtime_pay"] == 60.0
    assert alice_sum["total_pay"] == 310.0
    assert bob_sum["pay"] == 30.0

    assert report.totals["records"] == 3
    assert report.totals["employees"] == 2
    assert report.totals["total_hours"] == "14:30"
    assert report.totals["total_pay"] == 340.0


def test_pending_overtime_is_not_paid(container, alice):
    container.overtime_service.request_overtime(alice.employee_id, {"date": "2026-03-03", "hours": 2, "reason": "x"})

    report = container.payroll_report_service.build_report(start=START, end=END)

    assert report.summary == []
    assert report.totals["total_pay"] == 0


def test_employee_with_only_overtime_is_listed(container, bob):
    container.overtime_service.create_overtime(
        bob.employee_id, {"date": "2026-03-05", "hours": 4, "reason": "Event", "status": "approved"}
    )

    report = container.payroll_report_service.build_report(start=START, end=END)

    assert [s["name"] for s in report.summary] == ["Bob Stone"]
    assert report.summary[0]["days"] == 0
    assert report.summary[0]["total_pay"] == 90.0


def test_report_for_one_employee(container, alice, bob):
    _day(container, alice.employee_id, 2, (8, 0), (9, 0))
    _day(container, bob.employee_id, 2, (8, 0), (9, 0))

    report = container.payroll_report_service.build_report(start=START, end=END, employee_id=bob.employee_id)

    assert {r["employee_id"] for r in report.rows} == {bob.employee_id}


def test_report_rejects_inverted_period(container):
    with pytest.raises(ValidationError):
        container.payroll_report_service.build_report(start=END, end=START)


def test_export_csv(container, alice):
    _day(container, alice.employee_id, 2, (8, 0), (12, 0))
    svc = container.payroll_report_service

    data = svc.export_csv(svc.build_report(start=START, end=END))

    assert data.startswith(b"\xef\xbb\xbf")
    lines = data.decode("utf-8-sig").splitlines()
    assert lines[0].startswith("work_date,employee_id,name,dept")
    assert lines[1].startswith("2026-03-02,1,Alice Martin,Sales,Seller,08:00,-,-,12:00,04:00,20.0,80.0")
    assert lines[-1] == "TOTAL,,,,,,,,,04:00,,80.00"


def test_analytics(container, alice, bob):
    _day(container, alice.employee_id, 2, (7, 0), (18, 30))
    _day(container, bob.employee_id, 2, (9, 0), (17, 0), lunch=((12, 0), (12, 30)))
    _day(container, bob.employee_id, 3, (9, 0), (11, 0))

    result = container.payroll_report_service.analytics(start=START, end=END)

    assert [d["dept"] for d in result["departments"]] == ["Sales", "Support"]
    sales = result["departments"][0]
    assert sales["total_hours"] == 11.5
    assert sales["total_cost"] == 230.0
    assert [e["name"] for e in result["top_employees"]] == ["Alice Martin", "Bob Stone"]
    assert [d["work_date"] for d in result["daily"]] == ["2026-03-02", "2026-03-03"]
    assert result["daily"][0]["records"] == 2

    kinds = sorted((a["type"], a["employee_id"]) for a in result["alerts"])
    assert kinds == [("long_day", alice.employee_id), ("no_lunch", alice.employee_id)]
