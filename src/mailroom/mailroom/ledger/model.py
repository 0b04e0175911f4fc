from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ImportFailure:
    row_number: int
    person_id: Optional[str]
    reason: str


@dataclass
class ImportReport:
    """Outcome of a bulk person import: partial success is a normal result."""

    imported: list[str] = field(default_factory=list)
    failures: list[ImportFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def total(self) -> int:
        return len(self.imported) + len(self.failures)

    def merge(self, other: "ImportReport") -> "ImportReport":
        failures = sorted(self.failures + other.failures, key=lambda f: f.row_number)
        return ImportReport(imported=self.imported + other.imported, failures=failures)

    def to_dict(self) -> dict:
        return {
            "imported": list(self.imported),
            "failures": [
                {"row": f.row_number, "person_id": f.person_id, "reason": f.reason}
                for f in self.failures
            ],
        }
