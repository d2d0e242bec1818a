from __future__ import annotations

from datetime import date

from flask import Flask, request

from ..common.datetime_utils import month_bounds, now_local, parse_iso_date, parse_month
from ..common.http import admin_required, current_employee_id, employee_required, json_endpoint, ok
from ..container import Container
from ..core.exceptions import ValidationError


def _period_from_args() -> tuple[date, date]:
    """?month=YYYY-MM, or ?start=&end=, defaulting to the current month."""
    month = request.args.get("month")
    if month:
        return parse_month(month)

    today = now_local().date()
    first, last = month_bounds(today.year, today.month)
    start_s = request.args.get("start")
    end_s = request.args.get("end")
    start = parse_iso_date(start_s) if start_s else first
    end = parse_iso_date(end_s) if end_s else last
    if start > end:
        raise ValidationError("Start date cannot be after end date")
    return start, end


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/reports", methods=["GET"], endpoint="api_admin_reports")
    @json_endpoint
    @admin_required
    def api_admin_reports():
        start, end = _period_from_args()
        data = container.payroll_report_service.build_report(
            start=start,
            end=end,
            employee_id=request.args.get("employee_id", type=int),
        )
        return ok(data)

    @app.route("/api/admin/reports/export", methods=["GET"], endpoint="api_admin_reports_export")
    @json_endpoint
    @admin_required
    def api_admin_reports_export():
        start, end = _period_from_args()
        data = container.payroll_report_service.build_report(
            start=start,
            end=end,
            employee_id=request.args.get("employee_id", type=int),
        )
        filename = f"timesheet_{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}.csv"
        return app.response_class(
            container.payroll_report_service.export_csv(data),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/admin/analytics", methods=["GET"], endpoint="api_admin_analytics")
    @json_endpoint
    @admin_required
    def api_admin_analytics():
        start, end = _period_from_args()
        return ok(container.payroll_report_service.analytics(start=start, end=end))

    @app.route("/api/me/report", methods=["GET"], endpoint="api_my_report")
    @json_endpoint
    @employee_required
    def api_my_report():
        start, end = _period_from_args()
        data = container.payroll_report_service.build_report(start=start, end=end, employee_id=current_employee_id())
        return ok(data)
