from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.validators import require_email, require_non_empty
from ..common.web import ADMIN_SESSION_KEY, admin_required
from ..container import Container
from ..core.exceptions import NotFoundError, ValidationError
from ..notifications.smtp_notifier import SenderAccount, SMTPNotifier


def _smtp_notifier(container: Container) -> SMTPNotifier:
    if not isinstance(container.notifier, SMTPNotifier):
        raise NotFoundError("Email settings are not available for this notifier")
    return container.notifier


def _sender_to_dict(sender: SenderAccount) -> dict:
    # never echo the password back
    return {"address": sender.address, "alias": sender.alias}


def register(app: Flask, container: Container) -> None:
    @app.route("/admin/login", methods=["POST"], endpoint="admin_login")
    def admin_login():
        data = request.get_json(silent=True) or {}
        container.admin_service.authenticate(str(data.get("password", "")))
        session[ADMIN_SESSION_KEY] = True
        return jsonify({"success": True, "message": "Logged in"})

    @app.route("/admin/logout", methods=["POST"], endpoint="admin_logout")
    def admin_logout():
        session.clear()
        return jsonify({"success": True, "message": "Logged out"})

    @app.route("/admin/email", methods=["GET"], endpoint="get_sender")
    @admin_required
    def get_sender():
        notifier = _smtp_notifier(container)
        return jsonify({"success": True, **_sender_to_dict(notifier.sender)})

    @app.route("/admin/email", methods=["PUT"], endpoint="change_sender")
    @admin_required
    def change_sender():
        notifier = _smtp_notifier(container)
        data = request.get_json(silent=True) or {}
        sender = SenderAccount(
            address=require_email(str(data.get("address", "")), "Sender address"),
            password=require_non_empty(str(data.get("password", "")), "Sender password"),
            alias=str(data.get("alias") or notifier.sender.alias).strip(),
        )
        notifier.set_sender(sender)

        connected = notifier.check_connection()
        message = "Sender changed" if connected else "Sender changed, but the mail server did not accept it"
        return jsonify({"success": True, "message": message, "connected": connected, **_sender_to_dict(sender)})

    @app.route("/admin/templates", methods=["GET"], endpoint="get_templates")
    @admin_required
    def get_templates():
        notifier = _smtp_notifier(container)
        return jsonify({"success": True, "templates": notifier.templates.sources()})

    @app.route("/admin/templates", methods=["PUT"], endpoint="change_templates")
    @admin_required
    def change_templates():
        notifier = _smtp_notifier(container)
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not data:
            raise ValidationError("Expected a JSON object of template name to source")
        notifier.templates.update_many(data)
        return jsonify({"success": True, "message": "Templates updated", "templates": notifier.templates.sources()})
