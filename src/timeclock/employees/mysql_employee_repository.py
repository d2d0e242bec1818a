from __future__ import annotations

from typing import Optional, Sequence

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone
from .model import Employee, EmployeeData
from .repository import EmployeeRepository

_COLUMNS = """
    employee_id, name, dept, role, pin, hourly_rate,
    email, phone, document_id, address, avatar, created_at, updated_at
"""


def _to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        name=r["name"],
        dept=r.get("dept"),
        role=r.get("role"),
        pin=r["pin"],
        hourly_rate=as_float(r.get("hourly_rate")),
        email=r.get("email"),
        phone=r.get("phone"),
        document_id=r.get("document_id"),
        address=r.get("address"),
        avatar=r.get("avatar"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def get_by_pin(self, pin: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE pin=%s", (pin,))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY name ASC")
            return [_to_employee(r) for r in fetchall(cur)]

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM employees")
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def create(self, data: EmployeeData) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(
                    name, dept, role, pin, hourly_rate, email, phone, document_id, address, avatar
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    data.name,
                    data.dept,
                    data.role,
                    data.pin,
                    data.hourly_rate,
                    data.email,
                    data.phone,
                    data.document_id,
                    data.address,
                    data.avatar,
                ),
            )
            return int(cur.lastrowid)

    def update(self, employee_id: int, data: EmployeeData) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET name=%s, dept=%s, role=%s, pin=%s, hourly_rate=%s,
                    email=%s, phone=%s, document_id=%s, address=%s, avatar=%s
                WHERE employee_id=%s
                """,
                (
                    data.name,
                    data.dept,
                    data.role,
                    data.pin,
                    data.hourly_rate,
                    data.email,
                    data.phone,
                    data.document_id,
                    data.address,
                    data.avatar,
                    int(employee_id),
                ),
            )
            return cur.rowcount > 0

    def delete_by_id(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (int(employee_id),))
            return cur.rowcount > 0

    def list_off_days(self, employee_id: int) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT day_of_week FROM employee_weekly_off_days
                WHERE employee_id=%s
                ORDER BY day_of_week ASC
                """,
                (int(employee_id),),
            )
            return [int(r["day_of_week"]) for r in fetchall(cur)]

    def add_off_day(self, employee_id: int, day_of_week: int) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO employee_weekly_off_days(employee_id, day_of_week) VALUES(%s,%s)",
                    (int(employee_id), int(day_of_week)),
                )
                return True
        except IntegrityError as e:
            if e.errno == errorcode.ER_DUP_ENTRY:
                return False
            raise

    def remove_off_day(self, employee_id: int, day_of_week: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM employee_weekly_off_days WHERE employee_id=%s AND day_of_week=%s",
                (int(employee_id), int(day_of_week)),
            )
            return cur.rowcount > 0
