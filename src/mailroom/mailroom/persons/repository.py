from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Person


class PersonRepository(Protocol):
    """Repository interface for Person.

    Note: the Ledger depends on this interface, not on a concrete store.
    """

    def get_by_id(self, person_id: str) -> Optional[Person]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Person]:
        raise NotImplementedError

    def insert(self, person: Person) -> None:
        raise NotImplementedError

    def update(self, person: Person) -> bool:
        raise NotImplementedError

    def delete_by_id(self, person_id: str) -> bool:
        raise NotImplementedError
