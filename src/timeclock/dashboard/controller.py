from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import admin_required, json_endpoint, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/absent", methods=["GET"], endpoint="api_admin_absent")
    @json_endpoint
    @admin_required
    def api_admin_absent():
        day_s = request.args.get("date")
        day = parse_iso_date(day_s) if day_s else None
        return ok(container.dashboard_service.absent(day))

    @app.route("/api/admin/dashboard-stats", methods=["GET"], endpoint="api_admin_dashboard_stats")
    @json_endpoint
    @admin_required
    def api_admin_dashboard_stats():
        return ok(container.dashboard_service.stats())
