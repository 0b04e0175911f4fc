from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..persons.model import Person


@dataclass(frozen=True)
class Package:
    """Domain entity: a package held in the mail room.

    ``checked_out`` and ``notification_sent`` only ever move from False to True;
    the Ledger is the only place that produces the flipped copies.
    """

    package_id: int
    owner_person_id: str
    check_in_time: datetime
    comment: str = ""
    checked_out: bool = False
    notification_sent: bool = False
    check_out_time: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return not self.checked_out

    def checked_out_at(self, moment: datetime) -> "Package":
        return replace(self, checked_out=True, check_out_time=moment)

    def with_notification_sent(self) -> "Package":
        return replace(self, notification_sent=True)


@dataclass(frozen=True)
class Association:
    """Read-model: a package joined with its owner."""

    person: Person
    package: Package

    def to_dict(self) -> dict:
        pkg = self.package
        return {
            "package_id": pkg.package_id,
            "person_id": self.person.person_id,
            "first_name": self.person.first_name,
            "last_name": self.person.last_name,
            "email_address": self.person.email_address,
            "comment": pkg.comment,
            "check_in_time": pkg.check_in_time.isoformat(),
            "check_out_time": pkg.check_out_time.isoformat() if pkg.check_out_time else None,
            "checked_out": pkg.checked_out,
            "notification_sent": pkg.notification_sent,
        }
