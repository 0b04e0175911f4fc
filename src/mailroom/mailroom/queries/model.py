from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from ..core.enums import FilterField, SortDirection, SortField
from ..core.exceptions import InvalidQueryError
from ..packages.model import Association

_FLAG_FIELDS = {FilterField.CHECKED_IN, FilterField.CHECKED_OUT, FilterField.NOTIFICATION_SENT}


def _coerce_enum(enum_cls, value, what: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidQueryError(f"Unknown {what}: {value!r}") from None


@dataclass(frozen=True)
class PackageFilter:
    """A single structured predicate over the (person, package) view."""

    field: Union[FilterField, str] = FilterField.ALL
    value: Any = None

    def __post_init__(self):
        field = _coerce_enum(FilterField, self.field, "filter field")
        object.__setattr__(self, "field", field)

        value = self.value
        if field == FilterField.ALL:
            value = None
        elif field in _FLAG_FIELDS:
            if value is None:
                value = True
            if not isinstance(value, bool):
                raise InvalidQueryError(f"Filter {field.value} expects true/false, got {value!r}")
        elif field == FilterField.PERSON_ID:
            if not isinstance(value, str) or not value.strip():
                raise InvalidQueryError("Filter person_id expects a non-empty id")
            value = value.strip()
        elif field == FilterField.PACKAGE_ID:
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidQueryError(f"Filter package_id expects an integer, got {value!r}")
        object.__setattr__(self, "value", value)

    @classmethod
    def all(cls) -> "PackageFilter":
        return cls(FilterField.ALL)

    @classmethod
    def active(cls) -> "PackageFilter":
        return cls(FilterField.CHECKED_IN, True)

    @classmethod
    def checked_out(cls) -> "PackageFilter":
        return cls(FilterField.CHECKED_OUT, True)

    @classmethod
    def for_person(cls, person_id: str) -> "PackageFilter":
        return cls(FilterField.PERSON_ID, person_id)

    def matches(self, entry: Association) -> bool:
        pkg = entry.package
        if self.field == FilterField.ALL:
            return True
        if self.field == FilterField.CHECKED_IN:
            return pkg.is_active == self.value
        if self.field == FilterField.CHECKED_OUT:
            return pkg.checked_out == self.value
        if self.field == FilterField.NOTIFICATION_SENT:
            return pkg.notification_sent == self.value
        if self.field == FilterField.PERSON_ID:
            return entry.person.person_id == self.value
        return pkg.package_id == self.value


@dataclass(frozen=True)
class SortKey:
    field: Union[SortField, str] = SortField.PACKAGE_ID
    direction: Union[SortDirection, str] = SortDirection.ASCENDING

    def __post_init__(self):
        object.__setattr__(self, "field", _coerce_enum(SortField, self.field, "sort field"))
        object.__setattr__(self, "direction", _coerce_enum(SortDirection, self.direction, "sort direction"))

    @classmethod
    def by_person(cls, direction: SortDirection = SortDirection.ASCENDING) -> "SortKey":
        return cls(SortField.PERSON_ID, direction)

    @property
    def descending(self) -> bool:
        return self.direction == SortDirection.DESCENDING

    def key(self, entry: Association):
        if self.field == SortField.PERSON_ID:
            return entry.person.person_id
        if self.field == SortField.CHECK_IN_TIME:
            return entry.package.check_in_time
        if self.field == SortField.LAST_NAME:
            return (entry.person.last_name.lower(), entry.person.first_name.lower())
        if self.field == SortField.FIRST_NAME:
            return (entry.person.first_name.lower(), entry.person.last_name.lower())
        return entry.package.package_id
