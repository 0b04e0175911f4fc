from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Package


class PackageRepository(Protocol):
    def get_by_id(self, package_id: int) -> Optional[Package]:
        raise NotImplementedError

    def exists(self, package_id: int) -> bool:
        raise NotImplementedError

    def list_all(self) -> Sequence[Package]:
        raise NotImplementedError

    def list_for_owner(self, person_id: str) -> Sequence[Package]:
        raise NotImplementedError

    def insert(self, package: Package) -> None:
        """Store a new package; must reject an id that is already taken."""

        raise NotImplementedError

    def update(self, package: Package) -> bool:
        raise NotImplementedError

    def delete_for_owner(self, person_id: str) -> int:
        raise NotImplementedError
