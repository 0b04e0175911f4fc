from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, session

from ..core.exceptions import (
    AuthenticationError,
    DomainError,
    DuplicateKeyError,
    InvalidTransitionError,
    NotFoundError,
    PartialBatchFailure,
)

logger = logging.getLogger(__name__)

ADMIN_SESSION_KEY = "is_admin"


def _status_for(error: DomainError) -> int:
    if isinstance(error, PartialBatchFailure):
        return 207
    if isinstance(error, AuthenticationError):
        return 401
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, (DuplicateKeyError, InvalidTransitionError)):
        return 409
    return 400


def error_response(error: DomainError):
    body = {"success": False, "message": str(error)}
    if isinstance(error, PartialBatchFailure):
        body.update(error.report.to_dict())
    return jsonify(body), _status_for(error)


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not session.get(ADMIN_SESSION_KEY):
            return jsonify({"success": False, "message": "Admin login required"}), 403
        return view(*args, **kwargs)

    return wrapper


def register_error_handlers(app: Flask) -> None:
    app.register_error_handler(DomainError, error_response)

    @app.errorhandler(500)
    def internal_error(e):
        logger.exception("Unhandled error while serving request")
        return jsonify({"success": False, "message": "Internal server error"}), 500
