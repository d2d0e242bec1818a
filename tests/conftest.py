from __future__ import annotations

import os

import pytest

os.environ["APP_ENV"] = "testing"

from fakes import build_fake_container, make_admin  # noqa: E402

from timeclock.main import create_app  # noqa: E402


@pytest.fixture
def container():
    return build_fake_container(admins=[make_admin()])


@pytest.fixture
def alice(container):
    return container.employee_service.create_employee(
        {"name": "Alice Martin", "dept": "Sales", "role": "Seller", "pin": "111111", "hourly_rate": 20}
    )


@pytest.fixture
def bob(container):
    return container.employee_service.create_employee(
        {"name": "Bob Stone", "dept": "Support", "role": "Agent", "pin": "222222", "hourly_rate": 15}
    )


@pytest.fixture
def app(container):
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    resp = client.post("/api/auth/admin", json={"username": "admin", "password": "admin123"})
    assert resp.status_code == 200
    return client
