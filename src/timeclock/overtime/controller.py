from __future__ import annotations

from flask import Flask, request

from ..common.http import (
    admin_required,
    current_admin_name,
    current_employee_id,
    employee_required,
    json_body,
    json_endpoint,
    ok,
)
from ..common.validators import require_int
from ..container import Container
from ..core.enums import RequestStatus
from ..core.exceptions import NotFoundError, ValidationError

_DECISIONS = {"approve": RequestStatus.APPROVED, "reject": RequestStatus.REJECTED}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/overtime", methods=["POST"], endpoint="api_overtime_request")
    @json_endpoint
    @employee_required
    def api_overtime_request():
        entry = container.overtime_service.request_overtime(current_employee_id(), json_body())
        return ok(entry, message="Overtime request sent", status=201)

    @app.route("/api/overtime", methods=["GET"], endpoint="api_overtime_mine")
    @json_endpoint
    @employee_required
    def api_overtime_mine():
        return ok(list(container.overtime_service.list_for_employee(current_employee_id())))

    @app.route("/api/admin/overtime", methods=["GET"], endpoint="api_admin_overtime")
    @json_endpoint
    @admin_required
    def api_admin_overtime():
        return ok(list(container.overtime_service.list_overtime(status=request.args.get("status"))))

    @app.route("/api/admin/overtime", methods=["POST"], endpoint="api_admin_overtime_create")
    @json_endpoint
    @admin_required
    def api_admin_overtime_create():
        data = json_body()
        if data.get("employee_id") in (None, ""):
            raise ValidationError("employee_id is required")
        employee_id = require_int(data.get("employee_id"), "employee_id")
        entry = container.overtime_service.create_overtime(employee_id, data, created_by=current_admin_name())
        return ok(entry, message="Overtime registered", status=201)

    @app.route("/api/admin/overtime/<int:overtime_id>", methods=["PUT"], endpoint="api_admin_overtime_update")
    @json_endpoint
    @admin_required
    def api_admin_overtime_update(overtime_id: int):
        entry = container.overtime_service.update_overtime(overtime_id, json_body(), updated_by=current_admin_name())
        return ok(entry, message="Overtime updated")

    @app.route("/api/admin/overtime/<int:overtime_id>", methods=["DELETE"], endpoint="api_admin_overtime_delete")
    @json_endpoint
    @admin_required
    def api_admin_overtime_delete(overtime_id: int):
        container.overtime_service.delete_overtime(overtime_id)
        return ok(message="Overtime deleted")

    @app.route(
        "/api/admin/overtime/<int:overtime_id>/<action>",
        methods=["POST"],
        endpoint="api_admin_overtime_decide",
    )
    @json_endpoint
    @admin_required
    def api_admin_overtime_decide(overtime_id: int, action: str):
        status = _DECISIONS.get(action)
        if status is None:
            raise NotFoundError("Unknown action")
        data = request.get_json(silent=True) or {}
        entry = container.overtime_service.decide_overtime(
            overtime_id,
            status,
            admin_comment=data.get("admin_comment") or "",
            approved_by=current_admin_name(),
        )
        return ok(entry, message=f"Overtime {status.value}")
