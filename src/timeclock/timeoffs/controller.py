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
    # -------- Employee --------
    @app.route("/api/timeoffs", methods=["POST"], endpoint="api_timeoff_request")
    @json_endpoint
    @employee_required
    def api_timeoff_request():
        entry = container.timeoff_service.request_time_off(current_employee_id(), json_body())
        return ok(entry, message="Time off request sent", status=201)

    @app.route("/api/timeoffs", methods=["GET"], endpoint="api_timeoff_mine")
    @json_endpoint
    @employee_required
    def api_timeoff_mine():
        return ok(list(container.timeoff_service.list_for_employee(current_employee_id())))

    # -------- Admin --------
    @app.route("/api/admin/timeoffs", methods=["GET"], endpoint="api_admin_timeoffs")
    @json_endpoint
    @admin_required
    def api_admin_timeoffs():
        return ok(list(container.timeoff_service.list_time_offs(status=request.args.get("status"))))

    @app.route("/api/admin/timeoffs", methods=["POST"], endpoint="api_admin_timeoff_create")
    @json_endpoint
    @admin_required
    def api_admin_timeoff_create():
        data = json_body()
        if data.get("employee_id") in (None, ""):
            raise ValidationError("employee_id is required")
        employee_id = require_int(data.get("employee_id"), "employee_id")
        entry = container.timeoff_service.create_time_off(employee_id, data, created_by=current_admin_name())
        return ok(entry, message="Time off created", status=201)

    @app.route("/api/admin/timeoffs/<int:timeoff_id>", methods=["PUT"], endpoint="api_admin_timeoff_update")
    @json_endpoint
    @admin_required
    def api_admin_timeoff_update(timeoff_id: int):
        entry = container.timeoff_service.update_time_off(timeoff_id, json_body())
        return ok(entry, message="Time off updated")

    @app.route("/api/admin/timeoffs/<int:timeoff_id>", methods=["DELETE"], endpoint="api_admin_timeoff_delete")
    @json_endpoint
    @admin_required
    def api_admin_timeoff_delete(timeoff_id: int):
        container.timeoff_service.delete_time_off(timeoff_id)
        return ok(message="Time off deleted")

    @app.route("/api/admin/timeoffs/<int:timeoff_id>/<action>", methods=["POST"], endpoint="api_admin_timeoff_decide")
    @json_endpoint
    @admin_required
    def api_admin_timeoff_decide(timeoff_id: int, action: str):
        status = _DECISIONS.get(action)
        if status is None:
            raise NotFoundError("Unknown action")
        data = request.get_json(silent=True) or {}
        entry = container.timeoff_service.decide_time_off(
            timeoff_id,
            status,
            admin_comment=data.get("admin_comment") or "",
            approved_by=current_admin_name(),
        )
        return ok(entry, message=f"Time off {status.value}")
