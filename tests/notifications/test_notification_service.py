from __future__ import annotations

import pytest

from timeclock.core.enums import NotificationType
from timeclock.core.exceptions import AuthorizationError, NotFoundError, ValidationError


def test_notify_and_list_unread(container, alice):
    svc = container.notification_service
    first = svc.notify(alice.employee_id, "Hello", "Welcome aboard")
    svc.notify(alice.employee_id, "Reminder", "Punch your exit", NotificationType.WARNING)

    svc.mark(first, read=True, employee_id=alice.employee_id)

    unread = svc.list_for_employee(alice.employee_id, unread_only=True)
    assert [n.title for n in unread] == ["Reminder"]
    assert len(svc.list_for_employee(alice.employee_id)) == 2


def test_notify_requires_text(container, alice):
    with pytest.raises(ValidationError):
        container.notification_service.notify(alice.employee_id, "", "body")


def test_mark_checks_owner(container, alice, bob):
    svc = container.notification_service
    nid = svc.notify(alice.employee_id, "Hello", "Only for Alice")

    with pytest.raises(AuthorizationError):
        svc.mark(nid, employee_id=bob.employee_id)
    with pytest.raises(NotFoundError):
        svc.mark(999)

    assert svc.mark(nid, read=True).read is True
    assert svc.mark(nid, read=False, employee_id=alice.employee_id).read is False


def test_broadcast_reaches_everyone(container, alice, bob):
    sent = container.notification_service.broadcast("Closed", "Office closed Friday", NotificationType.WARNING)

    assert sent == 2
    assert container.notifications_repo.for_employee(bob.employee_id)[0].type == NotificationType.WARNING


def test_notice_publish_broadcasts(container, alice, bob):
    svc = container.notice_service
    notice = svc.create_notice({"title": "Holiday", "content": "Closed on Monday", "type": "info"})

    assert notice.active
    titles = [n.title for n in container.notifications_repo.for_employee(alice.employee_id)]
    assert titles == ["Notice: Holiday"]

    svc.update_notice(notice.notice_id, {"active": False})
    assert svc.list_active() == []
    assert svc.update_notice(notice.notice_id, {"active": "true"}).active is True
    assert svc.update_notice(notice.notice_id, {"active": "false"}).active is False
    with pytest.raises(ValidationError):
        svc.update_notice(notice.notice_id, {"active": "sometimes"})
    assert [n.title for n in svc.list_all()] == ["Holiday"]

    svc.delete_notice(notice.notice_id)
    with pytest.raises(NotFoundError):
        svc.get_notice(notice.notice_id)


def test_notice_validation(container):
    with pytest.raises(ValidationError):
        container.notice_service.create_notice({"title": "T", "content": ""})
    with pytest.raises(ValidationError):
        container.notice_service.create_notice({"title": "T", "content": "C", "type": "urgent"})
