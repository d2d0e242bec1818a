from __future__ import annotations

from typing import Optional

from werkzeug.security import check_password_hash

from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from ..employees.service import EmployeeService
from .model import Admin, SessionUser
from .repository import AdminRepository


class AuthService:
    """Use case: authenticate admins (username/password) and employees (PIN)."""

    def __init__(self, admins: AdminRepository, employees: EmployeeService):
        self._admins = admins
        self._employees = employees

    def authenticate_admin(self, username: str, password: str) -> SessionUser:
        username = require_non_empty(username, "Username")
        require_non_empty(password, "Password")

        admin = self._admins.get_by_username(username)
        if not admin:
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(admin.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid username or password")

        return SessionUser(role=Role.ADMIN, name=admin.name, admin_id=admin.admin_id, username=admin.username)

    def authenticate_employee(self, pin: str) -> SessionUser:
        employee = self._employees.authenticate_pin(pin)
        return SessionUser(role=Role.EMPLOYEE, name=employee.name, employee_id=employee.employee_id)

    def get_admin(self, admin_id: int) -> Optional[Admin]:
        return self._admins.get_by_id(int(admin_id))
