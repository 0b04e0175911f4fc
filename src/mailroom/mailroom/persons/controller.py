from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required
from ..container import Container
from ..core.exceptions import ValidationError
from .model import Person


def _person_to_dict(p: Person) -> dict:
    return {
        "person_id": p.person_id,
        "first_name": p.first_name,
        "last_name": p.last_name,
        "email_address": p.email_address,
    }


def _person_from_json(data: dict, *, person_id: str | None = None) -> Person:
    return Person(
        person_id=str(person_id if person_id is not None else data.get("person_id", "")),
        first_name=str(data.get("first_name", "")),
        last_name=str(data.get("last_name", "")),
        email_address=str(data.get("email_address", "")),
    )


def register(app: Flask, container: Container) -> None:
    dispatch = container.dispatch_service

    @app.route("/persons", methods=["GET"], endpoint="list_persons")
    def list_persons():
        persons = dispatch.get_person_list(request.args.get("q", ""))
        return jsonify({"success": True, "persons": [_person_to_dict(p) for p in persons]})

    @app.route("/persons/<person_id>", methods=["GET"], endpoint="get_person")
    def get_person(person_id: str):
        return jsonify({"success": True, "person": _person_to_dict(dispatch.get_person(person_id))})

    @app.route("/persons", methods=["POST"], endpoint="add_person")
    @admin_required
    def add_person():
        person = _person_from_json(request.get_json(silent=True) or {})
        dispatch.add_person(person)
        return jsonify({"success": True, "message": "Person added", "person": _person_to_dict(person)}), 201

    @app.route("/persons/<person_id>", methods=["PUT"], endpoint="edit_person")
    @admin_required
    def edit_person(person_id: str):
        data = request.get_json(silent=True) or {}
        if data.get("person_id") not in (None, person_id):
            raise ValidationError("Person ID cannot be changed")
        person = _person_from_json(data, person_id=person_id)
        dispatch.edit_person(person)
        return jsonify({"success": True, "message": "Person updated", "person": _person_to_dict(person)})

    @app.route("/persons/<person_id>", methods=["DELETE"], endpoint="delete_person")
    @admin_required
    def delete_person(person_id: str):
        dispatch.delete_person(person_id)
        return jsonify({"success": True, "message": "Person deleted"})

    @app.route("/persons/import", methods=["POST"], endpoint="import_persons")
    @admin_required
    def import_persons():
        upload = request.files.get("file")
        if upload is None or not upload.filename:
            raise ValidationError("No file uploaded")

        report = dispatch.import_persons_csv(upload.stream, filename=upload.filename)
        body = {
            "success": report.ok,
            "message": f"Imported {len(report.imported)} of {report.total} row(s)",
            **report.to_dict(),
        }
        return jsonify(body), (200 if report.ok else 207)
