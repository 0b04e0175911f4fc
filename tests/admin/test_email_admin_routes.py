from __future__ import annotations

import logging

import pytest
from werkzeug.security import generate_password_hash

from src.mailroom.mailroom.container import build_container
from src.mailroom.mailroom.main import create_app
from src.mailroom.mailroom.notifications.smtp_notifier import SMTPNotifier
from src.mailroom.mailroom.settings import Settings

ADMIN_PASSWORD = "letmein"


@pytest.fixture
def smtp_container(printer):
    settings = Settings(
        secret_key="test-secret",
        testing=True,
        admin_password_hash=generate_password_hash(ADMIN_PASSWORD),
        mail_room_name="Jones Mail Room",
        sender_alias="Jones Mail Room",
        email_templates={"notification_subject": "Parcel for {{ person.first_name }}"},
        log_level="WARNING",
    )
    return build_container(settings, label_printer=printer)


@pytest.fixture
def admin(smtp_container):
    client = create_app(container=smtp_container).test_client()
    assert client.post("/admin/login", json={"password": ADMIN_PASSWORD}).status_code == 200
    return client


def test_startup_warns_when_sender_is_not_configured(smtp_container, caplog):
    with caplog.at_level(logging.WARNING):
        create_app(container=smtp_container)

    assert "Email notifications are unavailable" in caplog.text


def test_email_routes_need_login(smtp_container):
    client = create_app(container=smtp_container).test_client()

    assert client.get("/admin/email").status_code == 403
    assert client.put("/admin/templates", json={}).status_code == 403


def test_change_sender_checks_the_connection(admin, smtp_container, mock_smtp):
    resp = admin.put("/admin/email", json={"address": "desk@example.org", "password": "pw", "alias": "Front Desk"})

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["connected"] is True
    assert "password" not in body
    assert mock_smtp["logins"] == [("desk@example.org", "pw")]
    assert admin.get("/admin/email").get_json()["address"] == "desk@example.org"
    assert smtp_container.notifier.sender.alias == "Front Desk"


def test_rejected_sender_is_kept_but_reported(admin, mock_smtp):
    mock_smtp["fail_login"] = True

    resp = admin.put("/admin/email", json={"address": "desk@example.org", "password": "wrong"})

    assert resp.status_code == 200
    assert resp.get_json()["connected"] is False
    assert resp.get_json()["alias"] == "Jones Mail Room"


def test_invalid_sender_address(admin):
    resp = admin.put("/admin/email", json={"address": "not-an-address", "password": "pw"})

    assert resp.status_code == 400


def test_configured_template_overrides_are_applied(smtp_container):
    assert isinstance(smtp_container.notifier, SMTPNotifier)
    sources = smtp_container.notifier.templates.sources()

    assert sources["notification_subject"] == "Parcel for {{ person.first_name }}"


def test_templates_can_be_read_and_changed(admin):
    templates = admin.get("/admin/templates").get_json()["templates"]
    assert set(templates) == {"notification_subject", "notification_body", "reminder_subject", "reminder_body"}

    resp = admin.put("/admin/templates", json={"reminder_subject": "Packages waiting for {{ person.first_name }}"})

    assert resp.status_code == 200
    assert resp.get_json()["templates"]["reminder_subject"] == "Packages waiting for {{ person.first_name }}"


def test_bad_template_update_changes_nothing(admin):
    before = admin.get("/admin/templates").get_json()["templates"]

    resp = admin.put(
        "/admin/templates",
        json={"reminder_subject": "fine", "reminder_body": "{% for %}"},
    )

    assert resp.status_code == 400
    assert admin.get("/admin/templates").get_json()["templates"] == before


def test_email_settings_need_an_smtp_notifier(notifier, printer):
    settings = Settings(
        secret_key="test-secret",
        testing=True,
        admin_password_hash=generate_password_hash(ADMIN_PASSWORD),
        log_level="WARNING",
    )
    client = create_app(container=build_container(settings, notifier=notifier, label_printer=printer)).test_client()
    client.post("/admin/login", json={"password": ADMIN_PASSWORD})

    assert client.get("/admin/email").status_code == 404
