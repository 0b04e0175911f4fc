import os

SECRET_KEY = "test-secret"

STORAGE_BACKEND = "memory"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "mailroom_test"),
}

SMTP_HOST = "localhost"
SMTP_PORT = 2525
SENDER_ADDRESS = "mailroom@example.org"
SENDER_PASSWORD = "test-password"
SENDER_ALIAS = "Test Mail Room"
MAIL_ROOM_NAME = "Test Mail Room"

LABEL_DIR = os.getenv("LABEL_DIR", "labels")

ADMIN_PASSWORD_HASH = ""

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
