from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import admin_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/reminders", methods=["POST"], endpoint="send_reminders")
    @admin_required
    def send_reminders():
        # PartialBatchFailure is turned into a 207 by the shared error handler.
        report = container.dispatch_service.send_all_reminders()
        return jsonify({"success": True, "message": f"Sent {len(report.sent)} reminder(s)", **report.to_dict()})
