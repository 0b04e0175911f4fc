from __future__ import annotations

from typing import Optional, Sequence

from ..core.exceptions import DuplicateKeyError
from .model import Person
from .repository import PersonRepository


class InMemoryPersonRepository(PersonRepository):
    def __init__(self, persons: Sequence[Person] = ()):
        self._by_id: dict[str, Person] = {}
        for p in persons:
            self.insert(p)

    def get_by_id(self, person_id: str) -> Optional[Person]:
        return self._by_id.get(person_id)

    def list_all(self) -> Sequence[Person]:
        return list(self._by_id.values())

    def insert(self, person: Person) -> None:
        if person.person_id in self._by_id:
            raise DuplicateKeyError(f"Person {person.person_id!r} already exists")
        self._by_id[person.person_id] = person

    def update(self, person: Person) -> bool:
        if person.person_id not in self._by_id:
            return False
        self._by_id[person.person_id] = person
        return True

    def delete_by_id(self, person_id: str) -> bool:
        return self._by_id.pop(person_id, None) is not None
