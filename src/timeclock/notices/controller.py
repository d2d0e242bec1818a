from __future__ import annotations

from flask import Flask

from ..common.http import admin_required, json_body, json_endpoint, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/notices", methods=["GET"], endpoint="api_notices")
    @json_endpoint
    @login_required
    def api_notices():
        return ok(list(container.notice_service.list_active()))

    @app.route("/api/admin/notices", methods=["GET"], endpoint="api_admin_notices")
    @json_endpoint
    @admin_required
    def api_admin_notices():
        return ok(list(container.notice_service.list_all()))

    @app.route("/api/admin/notices", methods=["POST"], endpoint="api_admin_notice_create")
    @json_endpoint
    @admin_required
    def api_admin_notice_create():
        notice = container.notice_service.create_notice(json_body())
        return ok(notice, message="Notice published", status=201)

    @app.route("/api/admin/notices/<int:notice_id>", methods=["PUT"], endpoint="api_admin_notice_update")
    @json_endpoint
    @admin_required
    def api_admin_notice_update(notice_id: int):
        notice = container.notice_service.update_notice(notice_id, json_body())
        return ok(notice, message="Notice updated")

    @app.route("/api/admin/notices/<int:notice_id>", methods=["DELETE"], endpoint="api_admin_notice_delete")
    @json_endpoint
    @admin_required
    def api_admin_notice_delete(notice_id: int):
        container.notice_service.delete_notice(notice_id)
        return ok(message="Notice deleted")
