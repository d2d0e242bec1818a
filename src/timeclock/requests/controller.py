from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import admin_required, current_employee_id, employee_required, json_body, json_endpoint, ok
from ..common.validators import optional_text
from ..container import Container
from ..core.enums import RequestStatus
from ..core.exceptions import NotFoundError, ValidationError

_DECISIONS = {"approve": RequestStatus.APPROVED, "reject": RequestStatus.REJECTED}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/requests", methods=["POST"], endpoint="api_request_create")
    @json_endpoint
    @employee_required
    def api_request_create():
        data = json_body()
        kind = optional_text(data.get("type"))
        work_date = parse_iso_date(data.get("date"))

        if kind == "correction":
            created = container.request_service.create_correction(
                employee_id=current_employee_id(),
                work_date=work_date,
                field=data.get("field"),
                requested_time=data.get("requested_time"),
                reason=data.get("reason"),
            )
        elif kind == "justification":
            created = container.request_service.create_justification(
                employee_id=current_employee_id(),
                work_date=work_date,
                reason=data.get("reason"),
            )
        else:
            raise ValidationError("Invalid type (expected correction or justification)")

        return ok(created, message="Request sent", status=201)

    @app.route("/api/requests", methods=["GET"], endpoint="api_request_mine")
    @json_endpoint
    @employee_required
    def api_request_mine():
        data = container.request_service.list_requests(
            kind=request.args.get("type"),
            status=request.args.get("status"),
            employee_id=current_employee_id(),
        )
        return ok(data)

    @app.route("/api/admin/requests", methods=["GET"], endpoint="api_admin_requests")
    @json_endpoint
    @admin_required
    def api_admin_requests():
        data = container.request_service.list_requests(
            kind=request.args.get("type"),
            status=request.args.get("status"),
            employee_id=request.args.get("employee_id", type=int),
        )
        return ok(data)

    @app.route(
        "/api/admin/requests/<kind>/<int:request_id>/<action>",
        methods=["POST"],
        endpoint="api_admin_request_decide",
    )
    @json_endpoint
    @admin_required
    def api_admin_request_decide(kind: str, request_id: int, action: str):
        status = _DECISIONS.get(action)
        if status is None:
            raise NotFoundError("Unknown action")

        data = request.get_json(silent=True) or {}
        comment = data.get("admin_comment") or ""

        if kind == "corrections":
            decided = container.request_service.decide_correction(request_id, status, admin_comment=comment)
        elif kind == "justifications":
            decided = container.request_service.decide_justification(request_id, status, admin_comment=comment)
        else:
            raise NotFoundError("Unknown request type")

        return ok(decided, message=f"Request {status.value}")
