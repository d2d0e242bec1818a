from __future__ import annotations

from flask import Flask, request

from ..common.http import current_employee_id, employee_required, json_body, json_endpoint, ok
from ..common.validators import parse_bool
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/notifications", methods=["GET"], endpoint="api_notifications")
    @json_endpoint
    @employee_required
    def api_notifications():
        unread_only = request.args.get("unread", "").lower() in {"1", "true", "yes"}
        items = container.notification_service.list_for_employee(current_employee_id(), unread_only=unread_only)
        unread = sum(1 for n in items if not n.read)
        return ok(list(items), unread=unread)

    @app.route("/api/notifications/<int:notification_id>", methods=["PATCH"], endpoint="api_notification_mark")
    @json_endpoint
    @employee_required
    def api_notification_mark(notification_id: int):
        data = json_body()
        notification = container.notification_service.mark(
            notification_id,
            read=parse_bool(data.get("read", True), "read"),
            employee_id=current_employee_id(),
        )
        return ok(notification)
