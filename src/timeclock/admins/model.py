from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Admin:
    admin_id: int
    username: str
    password_hash: str
    name: str


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    role: Role
    name: str
    admin_id: Optional[int] = None
    employee_id: Optional[int] = None
    username: Optional[str] = None
