from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..container import Container
from ..labels.printer import QRLabelPrinter
from ..packages.model import Association
from ..queries.parser import parse_filter, parse_sort


def _as_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def register(app: Flask, container: Container) -> None:
    dispatch = container.dispatch_service

    @app.route("/packages", methods=["POST"], endpoint="check_in")
    def check_in():
        data = request.get_json(silent=True) or {}
        result = dispatch.check_in(
            str(data.get("person_id", "")).strip(),
            str(data.get("comment") or ""),
            notify=_as_bool(data.get("notify", False)),
            print_label=_as_bool(data.get("print_label", False)),
        )
        return jsonify({"success": True, "message": "Package checked in", **result.to_dict()}), 201

    @app.route("/packages", methods=["GET"], endpoint="list_packages")
    def list_packages():
        # Parse first so a bad directive never reaches the query.
        package_filter = parse_filter(request.args.get("filter", ""))
        sort = parse_sort(request.args.get("sort", ""))
        entries = dispatch.list_packages(package_filter, sort)
        return jsonify({"success": True, "packages": [e.to_dict() for e in entries]})

    @app.route("/packages/<int:package_id>", methods=["GET"], endpoint="get_package")
    def get_package(package_id: int):
        entry = Association(person=dispatch.get_owner(package_id), package=dispatch.get_package(package_id))
        return jsonify({"success": True, "package": entry.to_dict()})

    @app.route("/packages/<int:package_id>/checkout", methods=["POST"], endpoint="check_out")
    def check_out(package_id: int):
        owner = dispatch.get_owner(package_id)
        dispatch.check_out(package_id)
        return jsonify({"success": True, "message": f"Package {package_id} checked out to {owner.full_name}"})

    @app.route("/packages/<int:package_id>/notify", methods=["POST"], endpoint="notify_package")
    def notify_package(package_id: int):
        if dispatch.send_notification(package_id):
            return jsonify({"success": True, "message": "Notification sent"})
        return jsonify({"success": False, "message": "Notification could not be sent"}), 502

    @app.route("/packages/<int:package_id>/label", methods=["POST"], endpoint="print_label")
    def print_label(package_id: int):
        if dispatch.print_label(package_id):
            return jsonify({"success": True, "message": "Label printed"})
        return jsonify({"success": False, "message": "Label could not be printed"}), 502

    @app.route("/packages/<int:package_id>/label.png", methods=["GET"], endpoint="label_png")
    def label_png(package_id: int):
        printer = container.label_printer
        if not isinstance(printer, QRLabelPrinter):
            return jsonify({"success": False, "message": "Label preview not available"}), 404
        owner = dispatch.get_owner(package_id)
        buf = io.BytesIO(printer.render(package_id, owner.last_first_name))
        return send_file(buf, mimetype="image/png")
