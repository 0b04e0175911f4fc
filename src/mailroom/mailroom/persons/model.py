from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Person:
    """Domain entity: someone packages are received for.

    Identity is ``person_id``; two records with the same id are the same person
    even if an edit changed their name or email address.
    """

    person_id: str
    first_name: str = field(compare=False)
    last_name: str = field(compare=False)
    email_address: str = field(compare=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def last_first_name(self) -> str:
        return f"{self.last_name}, {self.first_name}"

    def matches(self, search: str) -> bool:
        needle = search.strip().lower()
        if not needle:
            return True
        haystack = (self.person_id, self.first_name, self.last_name, self.full_name)
        return any(needle in value.lower() for value in haystack)


@dataclass(frozen=True)
class PersonRecord:
    """Raw person row handed over by an importer, not yet validated."""

    person_id: str
    first_name: str
    last_name: str
    email_address: str
    row_number: int = 0

    def to_person(self) -> Person:
        return Person(
            person_id=self.person_id,
            first_name=self.first_name,
            last_name=self.last_name,
            email_address=self.email_address,
        )
