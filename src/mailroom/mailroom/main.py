from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .admin.controller import register as register_admin
from .common.logging_setup import configure_logging
from .common.web import register_error_handlers
from .container import Container, build_container
from .core.enums import StorageBackend
from .database.bootstrap import apply_schema, list_tables
from .notifications.smtp_notifier import SMTPNotifier
from .notifications.controller import register as register_notifications
from .packages.controller import register as register_packages
from .persons.controller import register as register_persons
from .settings import Settings, load_settings

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(settings: Optional[Settings] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    settings = settings or (container.settings if container else load_settings())
    configure_logging(settings.log_level)

    app = Flask(__name__)
    app.secret_key = settings.secret_key
    app.config["DEBUG"] = settings.debug
    app.config["TESTING"] = settings.testing

    if settings.storage_backend == StorageBackend.MYSQL:
        db = settings.db_config
        logger.debug(
            "db=%s@%s:%s/%s", db.get("user"), db.get("host"), db.get("port", 3306), db.get("database")
        )
        if settings.auto_init_db:
            apply_schema(db, schema_path=SCHEMA_PATH)
            logger.info("Schema ready (tables=%d)", len(list_tables(db)))

    container = container or build_container(settings)
    app.extensions["mailroom"] = container

    if isinstance(container.notifier, SMTPNotifier) and not container.notifier.check_connection():
        logger.warning("Email notifications are unavailable until the sender account is fixed (PUT /admin/email)")

    register_error_handlers(app)
    register_admin(app, container)
    register_persons(app, container)
    register_packages(app, container)
    register_notifications(app, container)

    return app
