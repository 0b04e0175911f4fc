from __future__ import annotations

from typing import Optional, Sequence

from ..core.exceptions import DuplicateKeyError
from .model import Package
from .repository import PackageRepository


class InMemoryPackageRepository(PackageRepository):
    def __init__(self):
        self._by_id: dict[int, Package] = {}

    def get_by_id(self, package_id: int) -> Optional[Package]:
        return self._by_id.get(package_id)

    def exists(self, package_id: int) -> bool:
        return package_id in self._by_id

    def list_all(self) -> Sequence[Package]:
        return list(self._by_id.values())

    def list_for_owner(self, person_id: str) -> Sequence[Package]:
        return [p for p in self._by_id.values() if p.owner_person_id == person_id]

    def insert(self, package: Package) -> None:
        if package.package_id in self._by_id:
            raise DuplicateKeyError(f"Package {package.package_id} already exists")
        self._by_id[package.package_id] = package

    def update(self, package: Package) -> bool:
        if package.package_id not in self._by_id:
            return False
        self._by_id[package.package_id] = package
        return True

    def delete_for_owner(self, person_id: str) -> int:
        doomed = [pid for pid, p in self._by_id.items() if p.owner_person_id == person_id]
        for pid in doomed:
            del self._by_id[pid]
        return len(doomed)
