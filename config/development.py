import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# "memory" keeps everything in-process; "mysql" uses DB_CONFIG
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "mailroom_db"),
}

SMTP_HOST = os.getenv("SMTP_HOST", "smtp.gmail.com")
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
SENDER_ADDRESS = os.getenv("SENDER_ADDRESS", "")
SENDER_PASSWORD = os.getenv("SENDER_PASSWORD", "")
SENDER_ALIAS = os.getenv("SENDER_ALIAS", "Mail Room")
MAIL_ROOM_NAME = os.getenv("MAIL_ROOM_NAME", "Mail Room")

LABEL_DIR = os.getenv("LABEL_DIR", "labels")

# werkzeug password hash, e.g. from scripts/hash_admin_password.py
ADMIN_PASSWORD_HASH = os.getenv("ADMIN_PASSWORD_HASH", "")

# Overrides for notifications/templates.py DEFAULT_TEMPLATES, keyed by template name
EMAIL_TEMPLATES = {}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
