from __future__ import annotations

from flask import Flask, request

from ..common.http import admin_required, json_body, json_endpoint, ok
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/employees", methods=["GET"], endpoint="api_admin_employees")
    @json_endpoint
    @admin_required
    def api_admin_employees():
        return ok(list(container.employee_service.list_employees()))

    @app.route("/api/admin/employees", methods=["POST"], endpoint="api_admin_employee_create")
    @json_endpoint
    @admin_required
    def api_admin_employee_create():
        employee = container.employee_service.create_employee(json_body())
        return ok(employee, message="Employee created", status=201)

    @app.route("/api/admin/employees/<int:employee_id>", methods=["GET"], endpoint="api_admin_employee_get")
    @json_endpoint
    @admin_required
    def api_admin_employee_get(employee_id: int):
        return ok(container.employee_service.get_employee(employee_id))

    @app.route("/api/admin/employees/<int:employee_id>", methods=["PUT"], endpoint="api_admin_employee_update")
    @json_endpoint
    @admin_required
    def api_admin_employee_update(employee_id: int):
        employee = container.employee_service.update_employee(employee_id, json_body())
        return ok(employee, message="Employee updated")

    @app.route("/api/admin/employees/<int:employee_id>", methods=["DELETE"], endpoint="api_admin_employee_delete")
    @json_endpoint
    @admin_required
    def api_admin_employee_delete(employee_id: int):
        container.employee_service.delete_employee(employee_id)
        return ok(message="Employee deleted")

    @app.route("/api/admin/employees/import", methods=["POST"], endpoint="api_admin_employee_import")
    @json_endpoint
    @admin_required
    def api_admin_employee_import():
        data = request.get_json(silent=True)
        rows = data.get("employees") if isinstance(data, dict) else data
        if not isinstance(rows, list) or not all(isinstance(r, dict) for r in rows):
            raise ValidationError("Expected a list of employee objects")
        result = container.employee_service.import_employees(rows)
        return ok(result, message=f"{result.count} employees imported")

    @app.route(
        "/api/admin/employees/<int:employee_id>/weekly-off-days",
        methods=["GET"],
        endpoint="api_admin_off_days",
    )
    @json_endpoint
    @admin_required
    def api_admin_off_days(employee_id: int):
        return ok(list(container.employee_service.list_off_days(employee_id)))

    @app.route(
        "/api/admin/employees/<int:employee_id>/weekly-off-days",
        methods=["POST"],
        endpoint="api_admin_off_day_add",
    )
    @json_endpoint
    @admin_required
    def api_admin_off_day_add(employee_id: int):
        data = json_body()
        days = container.employee_service.add_off_day(employee_id, data.get("day_of_week"))
        return ok(list(days), message="Day off added", status=201)

    @app.route(
        "/api/admin/employees/<int:employee_id>/weekly-off-days/<int:day_of_week>",
        methods=["DELETE"],
        endpoint="api_admin_off_day_remove",
    )
    @json_endpoint
    @admin_required
    def api_admin_off_day_remove(employee_id: int, day_of_week: int):
        days = container.employee_service.remove_off_day(employee_id, day_of_week)
        return ok(list(days), message="Day off removed")
