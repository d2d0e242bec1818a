from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: Plain data object (no DB access code).
    """

    employee_id: int
    name: str
    dept: Optional[str]
    role: Optional[str]
    pin: str
    hourly_rate: float
    email: Optional[str] = None
    phone: Optional[str] = None
    document_id: Optional[str] = None
    address: Optional[str] = None
    avatar: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class EmployeeData:
    """Validated input for create/update."""

    name: str
    dept: Optional[str]
    role: Optional[str]
    pin: str
    hourly_rate: float
    email: Optional[str]
    phone: Optional[str]
    document_id: Optional[str]
    address: Optional[str]
    avatar: str


@dataclass(frozen=True)
class ImportResult:
    count: int
    errors: list[dict]
