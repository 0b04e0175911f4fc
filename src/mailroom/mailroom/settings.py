from __future__ import annotations

import importlib
from dataclasses import dataclass, field
from types import ModuleType
from typing import Optional

from .core.constants import DEFAULT_MAIL_ROOM_NAME, DEFAULT_SMTP_HOST, DEFAULT_SMTP_PORT
from .core.enums import StorageBackend
from .core.exceptions import ValidationError


@dataclass(frozen=True)
class Settings:
    """Explicit configuration value handed to the components that need it."""

    secret_key: str
    debug: bool = False
    testing: bool = False
    storage_backend: StorageBackend = StorageBackend.MEMORY
    db_config: dict = field(default_factory=dict)
    auto_init_db: bool = False
    smtp_host: str = DEFAULT_SMTP_HOST
    smtp_port: int = DEFAULT_SMTP_PORT
    sender_address: str = ""
    sender_password: str = ""
    sender_alias: str = DEFAULT_MAIL_ROOM_NAME
    mail_room_name: str = DEFAULT_MAIL_ROOM_NAME
    label_dir: str = "labels"
    admin_password_hash: str = ""
    email_templates: dict = field(default_factory=dict)
    log_level: str = "INFO"

    @classmethod
    def from_module(cls, settings: ModuleType) -> "Settings":
        backend_s = str(getattr(settings, "STORAGE_BACKEND", StorageBackend.MEMORY.value)).lower()
        try:
            backend = StorageBackend(backend_s)
        except ValueError:
            raise ValidationError(f"Unknown STORAGE_BACKEND {backend_s!r}") from None

        return cls(
            secret_key=str(getattr(settings, "SECRET_KEY")),
            debug=bool(getattr(settings, "DEBUG", False)),
            testing=bool(getattr(settings, "TESTING", False)),
            storage_backend=backend,
            db_config=dict(getattr(settings, "DB_CONFIG", {})),
            auto_init_db=bool(getattr(settings, "AUTO_INIT_DB", False)),
            smtp_host=str(getattr(settings, "SMTP_HOST", DEFAULT_SMTP_HOST)),
            smtp_port=int(getattr(settings, "SMTP_PORT", DEFAULT_SMTP_PORT)),
            sender_address=str(getattr(settings, "SENDER_ADDRESS", "")),
            sender_password=str(getattr(settings, "SENDER_PASSWORD", "")),
            sender_alias=str(getattr(settings, "SENDER_ALIAS", DEFAULT_MAIL_ROOM_NAME)),
            mail_room_name=str(getattr(settings, "MAIL_ROOM_NAME", DEFAULT_MAIL_ROOM_NAME)),
            label_dir=str(getattr(settings, "LABEL_DIR", "labels")),
            admin_password_hash=str(getattr(settings, "ADMIN_PASSWORD_HASH", "")),
            email_templates=dict(getattr(settings, "EMAIL_TEMPLATES", {})),
            log_level=str(getattr(settings, "LOG_LEVEL", "INFO")),
        )


def load_settings(module_name: Optional[str] = None) -> Settings:
    if module_name is None:
        from config import get_settings_module

        module_name = get_settings_module()
    return Settings.from_module(importlib.import_module(module_name))
