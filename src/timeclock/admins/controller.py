from __future__ import annotations

import logging

from flask import Flask, session

from ..common.http import error_response, json_body, json_endpoint, ok
from ..container import Container
from ..core.enums import Role

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="api_login_pin")
    @json_endpoint
    def api_login_pin():
        data = json_body()
        s_user = container.auth_service.authenticate_employee(str(data.get("pin") or ""))
        employee = container.employee_service.get_employee(s_user.employee_id)

        session.clear()
        session.permanent = True
        session["role"] = s_user.role.value
        session["employee_id"] = s_user.employee_id
        session["name"] = s_user.name

        logger.info("Employee %s signed in with PIN", s_user.employee_id)
        return ok(
            {
                "employee_id": employee.employee_id,
                "name": employee.name,
                "dept": employee.dept,
                "role": employee.role,
                "avatar": employee.avatar,
            },
            message=f"Welcome, {employee.name}",
        )

    @app.route("/api/auth/admin", methods=["POST"], endpoint="api_login_admin")
    @json_endpoint
    def api_login_admin():
        data = json_body()
        s_user = container.auth_service.authenticate_admin(
            str(data.get("username") or ""),
            str(data.get("password") or ""),
        )

        session.clear()
        session.permanent = True
        session["role"] = s_user.role.value
        session["admin_id"] = s_user.admin_id
        session["name"] = s_user.name

        logger.info("Admin %s signed in", s_user.username)
        return ok({"admin_id": s_user.admin_id, "username": s_user.username, "name": s_user.name})

    @app.route("/api/auth/admin", methods=["GET"], endpoint="api_admin_session")
    @json_endpoint
    def api_admin_session():
        if session.get("role") != Role.ADMIN.value:
            return error_response("Not signed in as administrator", 401)
        admin = container.auth_service.get_admin(int(session["admin_id"]))
        if not admin:
            session.clear()
            return error_response("Not signed in as administrator", 401)
        return ok({"admin_id": admin.admin_id, "username": admin.username, "name": admin.name})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="api_logout")
    @json_endpoint
    def api_logout():
        session.clear()
        return ok(message="Signed out")
