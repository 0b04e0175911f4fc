from __future__ import annotations

from dataclasses import dataclass, field

from ..packages.model import Package
from ..persons.model import Person


@dataclass(frozen=True)
class Batch:
    """One person's outstanding packages, composed into a single reminder."""

    person: Person
    packages: tuple[Package, ...]


@dataclass
class ReminderReport:
    sent: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed

    def to_dict(self) -> dict:
        return {"sent": list(self.sent), "failed": list(self.failed)}
