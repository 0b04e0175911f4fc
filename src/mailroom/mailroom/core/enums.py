from __future__ import annotations

from enum import Enum


class FilterField(str, Enum):
    """Fields a package listing can be filtered on."""

    ALL = "all"
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"
    NOTIFICATION_SENT = "notification_sent"
    PERSON_ID = "person_id"
    PACKAGE_ID = "package_id"


class SortField(str, Enum):
    """Fields a package listing can be ordered by."""

    PERSON_ID = "person_id"
    PACKAGE_ID = "package_id"
    CHECK_IN_TIME = "check_in_time"
    LAST_NAME = "last_name"
    FIRST_NAME = "first_name"


class SortDirection(str, Enum):
    ASCENDING = "ASCENDING"
    DESCENDING = "DESCENDING"


class StorageBackend(str, Enum):
    MEMORY = "memory"
    MYSQL = "mysql"
