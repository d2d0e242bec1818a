from __future__ import annotations

import dataclasses
import logging
from datetime import date, datetime, time
from enum import Enum
from functools import wraps
from typing import Any

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import DomainError, ValidationError

logger = logging.getLogger(__name__)


def to_json(value: Any) -> Any:
    """Convert domain objects (dataclasses, enums, dates) to JSON-ready values."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_json(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    return value


def ok(payload: Any = None, *, status: int = 200, **extra):
    body = {"success": True}
    if payload is not None:
        body["data"] = to_json(payload)
    body.update({k: to_json(v) for k, v in extra.items()})
    return jsonify(body), status


def error_response(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def json_endpoint(view):
    """Map domain errors to JSON error responses; log anything unexpected."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return error_response(str(e), e.status_code)
        except Exception:
            logger.exception("Unhandled error in %s %s", request.method, request.path)
            return error_response("Internal server error", 500)

    return wrapper


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "role" not in session:
            return error_response("Please sign in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "role" not in session:
            return error_response("Please sign in to continue", 401)
        if session.get("role") != Role.ADMIN.value:
            return error_response("Administrator access required", 403)
        return view(*args, **kwargs)

    return wrapper


def employee_required(view):
    """Allow only a PIN-authenticated employee session."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "role" not in session:
            return error_response("Please sign in with your PIN", 401)
        if session.get("role") != Role.EMPLOYEE.value:
            return error_response("Employee session required", 403)
        return view(*args, **kwargs)

    return wrapper


def current_employee_id() -> int:
    return int(session["employee_id"])


def current_admin_name() -> str:
    return str(session.get("name") or "Admin")
