from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import now_local
from ..common.http import current_employee_id, employee_required, json_body, json_endpoint, ok
from ..common.validators import parse_enum
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_DAYS
from ..core.enums import PunchType


def register(app: Flask, container: Container) -> None:
    @app.route("/api/punches", methods=["POST"], endpoint="api_punch")
    @json_endpoint
    @employee_required
    def api_punch():
        data = json_body()
        punch_type = parse_enum(PunchType, data.get("type"), "punch type")
        record = container.punch_service.register_punch(current_employee_id(), punch_type)
        return ok(record, message=f"{punch_type.label} registered", status=201)

    @app.route("/api/punches/today", methods=["GET"], endpoint="api_punch_today")
    @json_endpoint
    @employee_required
    def api_punch_today():
        record = container.punch_service.get_record(current_employee_id(), now_local().date())
        next_punch = record.next_punch() if record else PunchType.ENTRY
        return ok({"record": record, "next": next_punch})

    @app.route("/api/me/history", methods=["GET"], endpoint="api_my_history")
    @json_endpoint
    @employee_required
    def api_my_history():
        days = request.args.get("days", DEFAULT_HISTORY_DAYS, type=int)
        records = container.punch_service.recent_records(current_employee_id(), days=days)
        return ok(list(records))
