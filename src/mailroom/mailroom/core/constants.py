"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

PACKAGE_ID_FORMAT = "%Y%m%d%H%M%S"
MAX_PACKAGE_ID_ATTEMPTS = 50

DEFAULT_SMTP_HOST = "smtp.gmail.com"
DEFAULT_SMTP_PORT = 587
DEFAULT_SMTP_TIMEOUT_SECONDS = 30
DEFAULT_MAIL_ROOM_NAME = "Mail Room"

CSV_COLUMNS = ("last_name", "first_name", "email_address", "person_id")

# Column sizes in database/schema.sql
MAX_PERSON_ID_LENGTH = 64
MAX_NAME_LENGTH = 100
MAX_EMAIL_LENGTH = 255
MAX_COMMENT_LENGTH = 10000
