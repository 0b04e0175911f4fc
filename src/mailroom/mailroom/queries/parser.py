"""Parse the legacy ``key=value`` filter/sort strings into structured queries.

Examples: ``"checked_in=true"``, ``"person_ID=ASCENDING"``. An empty string
means "no filter" / default order. Anything unrecognised raises
InvalidQueryError here, before the query ever runs.
"""
from __future__ import annotations

from ..core.enums import FilterField, SortDirection, SortField
from ..core.exceptions import InvalidQueryError
from .model import PackageFilter, SortKey

_FILTER_ALIASES = {
    "checked_in": FilterField.CHECKED_IN,
    "checked_out": FilterField.CHECKED_OUT,
    "notification_sent": FilterField.NOTIFICATION_SENT,
    "person_id": FilterField.PERSON_ID,
    "package_id": FilterField.PACKAGE_ID,
}

_SORT_ALIASES = {
    "person_id": SortField.PERSON_ID,
    "package_id": SortField.PACKAGE_ID,
    "check_in_time": SortField.CHECK_IN_TIME,
    "check_in_date": SortField.CHECK_IN_TIME,
    "last_name": SortField.LAST_NAME,
    "first_name": SortField.FIRST_NAME,
}

_DIRECTIONS = {
    "ascending": SortDirection.ASCENDING,
    "asc": SortDirection.ASCENDING,
    "descending": SortDirection.DESCENDING,
    "desc": SortDirection.DESCENDING,
}


def _split(text: str, what: str) -> tuple[str, str]:
    key, sep, value = text.partition("=")
    if not sep or not key.strip() or not value.strip():
        raise InvalidQueryError(f"Malformed {what} {text!r}, expected key=value")
    return key.strip().lower(), value.strip()


def _parse_bool(raw: str) -> bool:
    lowered = raw.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise InvalidQueryError(f"Expected true or false, got {raw!r}")


def parse_filter(text: str | None) -> PackageFilter:
    text = (text or "").strip()
    if not text or text.lower() == "all":
        return PackageFilter.all()

    key, raw = _split(text, "filter")
    field = _FILTER_ALIASES.get(key)
    if field is None:
        raise InvalidQueryError(f"Unknown filter field {key!r}")

    if field == FilterField.PERSON_ID:
        return PackageFilter(field, raw)
    if field == FilterField.PACKAGE_ID:
        try:
            return PackageFilter(field, int(raw))
        except ValueError:
            raise InvalidQueryError(f"Package id must be a number, got {raw!r}") from None
    return PackageFilter(field, _parse_bool(raw))


def parse_sort(text: str | None) -> SortKey:
    text = (text or "").strip()
    if not text:
        return SortKey()

    key, raw = _split(text, "sort")
    field = _SORT_ALIASES.get(key)
    if field is None:
        raise InvalidQueryError(f"Unknown sort field {key!r}")
    direction = _DIRECTIONS.get(raw.lower())
    if direction is None:
        raise InvalidQueryError(f"Unknown sort direction {raw!r}")
    return SortKey(field, direction)
