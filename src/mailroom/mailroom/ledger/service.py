from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Iterable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_email, require_max_length, require_non_empty
from ..core.constants import (
    MAX_COMMENT_LENGTH,
    MAX_EMAIL_LENGTH,
    MAX_NAME_LENGTH,
    MAX_PACKAGE_ID_ATTEMPTS,
    MAX_PERSON_ID_LENGTH,
)
from ..core.exceptions import (
    AlreadyCheckedOutError,
    DomainError,
    DuplicateKeyError,
    InvalidTransitionError,
    NotFoundError,
)
from ..packages.id_generator import PackageIdGenerator
from ..packages.model import Association, Package
from ..packages.repository import PackageRepository
from ..persons.model import Person, PersonRecord
from ..persons.repository import PersonRepository
from .model import ImportFailure, ImportReport

logger = logging.getLogger(__name__)


def _validated(person: Person) -> Person:
    person_id = require_non_empty(person.person_id, "Person ID")
    first_name = require_non_empty(person.first_name, "First name")
    last_name = require_non_empty(person.last_name, "Last name")
    email_address = require_email(person.email_address)
    return Person(
        person_id=require_max_length(person_id, MAX_PERSON_ID_LENGTH, "Person ID"),
        first_name=require_max_length(first_name, MAX_NAME_LENGTH, "First name"),
        last_name=require_max_length(last_name, MAX_NAME_LENGTH, "Last name"),
        email_address=require_max_length(email_address, MAX_EMAIL_LENGTH, "Email address"),
    )


class Ledger:
    """Single source of truth for persons and packages.

    Every mutation of either table goes through this class; callers only ever
    get frozen values back. Access is expected to be serialized by the caller
    (one writer at a time).
    """

    def __init__(
        self,
        persons: PersonRepository,
        packages: PackageRepository,
        *,
        id_generator: Optional[PackageIdGenerator] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._persons = persons
        self._packages = packages
        self._clock = clock
        self._ids = id_generator or PackageIdGenerator(clock)

    # Persons

    def add_person(self, person: Person) -> None:
        person = _validated(person)
        if self._persons.get_by_id(person.person_id):
            raise DuplicateKeyError(f"Person {person.person_id!r} already exists")
        self._persons.insert(person)
        logger.info("Added person %s", person.person_id)

    def edit_person(self, person: Person) -> None:
        person = _validated(person)
        self.get_person(person.person_id)
        self._persons.update(person)
        logger.info("Edited person %s", person.person_id)

    def delete_person(self, person_id: str) -> None:
        self.get_person(person_id)
        owned = self._packages.list_for_owner(person_id)
        active = [p.package_id for p in owned if p.is_active]
        if active:
            raise InvalidTransitionError(
                f"Person {person_id!r} still has {len(active)} package(s) in the mail room"
            )
        if owned:
            self._packages.delete_for_owner(person_id)
        self._persons.delete_by_id(person_id)
        logger.info("Deleted person %s (%d checked-out package(s) removed)", person_id, len(owned))

    def get_person(self, person_id: str) -> Person:
        person = self._persons.get_by_id(person_id)
        if not person:
            raise NotFoundError(f"Person {person_id!r} not found")
        return person

    def get_person_list(self, search: str = "") -> list[Person]:
        found = [p for p in self._persons.list_all() if p.matches(search or "")]
        found.sort(key=lambda p: (p.last_name.lower(), p.first_name.lower(), p.person_id))
        return found

    def import_persons(self, records: Iterable[PersonRecord]) -> ImportReport:
        report = ImportReport()
        for rec in records:
            try:
                self.add_person(rec.to_person())
            except DomainError as e:
                report.failures.append(ImportFailure(rec.row_number, rec.person_id or None, str(e)))
            else:
                report.imported.append(rec.person_id.strip())
        logger.info("Imported %d person(s), %d failure(s)", len(report.imported), len(report.failures))
        return report

    # Packages

    def check_in_package(self, person_id: str, comment: str = "") -> int:
        self.get_person(person_id)
        comment = require_max_length((comment or "").strip(), MAX_COMMENT_LENGTH, "Comment")
        now = self._clock()

        for _ in range(MAX_PACKAGE_ID_ATTEMPTS):
            package_id = self._ids.next_id(at=now)
            if self._packages.exists(package_id):
                logger.warning("Package id %s already taken, retrying", package_id)
                self._ids.observe(package_id)
                continue
            package = Package(
                package_id=package_id,
                owner_person_id=person_id,
                check_in_time=now,
                comment=comment,
            )
            try:
                self._packages.insert(package)
            except DuplicateKeyError:
                logger.warning("Package id %s collided on insert, retrying", package_id)
                self._ids.observe(package_id)
                continue
            logger.info("Checked in package %s for %s", package_id, person_id)
            return package_id

        raise DuplicateKeyError(f"Could not allocate a free package id after {MAX_PACKAGE_ID_ATTEMPTS} attempts")

    def check_out_package(self, package_id: int) -> Package:
        package = self.get_package(package_id)
        if package.checked_out:
            raise AlreadyCheckedOutError(f"Package {package_id} was already checked out")
        updated = package.checked_out_at(self._clock())
        self._packages.update(updated)
        logger.info("Checked out package %s", package_id)
        return updated

    def mark_notification_sent(self, package_id: int) -> Package:
        package = self.get_package(package_id)
        if package.notification_sent:
            return package
        updated = package.with_notification_sent()
        self._packages.update(updated)
        return updated

    def get_package(self, package_id: int) -> Package:
        package = self._packages.get_by_id(int(package_id))
        if not package:
            raise NotFoundError(f"Package {package_id} not found")
        return package

    def get_owner(self, package_id: int) -> Person:
        return self.get_person(self.get_package(package_id).owner_person_id)

    def associations(self) -> Sequence[Association]:
        """Snapshot of every (person, package) pair."""
        persons = {p.person_id: p for p in self._persons.list_all()}
        out: list[Association] = []
        for pkg in self._packages.list_all():
            owner = persons.get(pkg.owner_person_id)
            if owner is None:
                logger.error("Package %s references missing person %s", pkg.package_id, pkg.owner_person_id)
                continue
            out.append(Association(person=owner, package=pkg))
        return out
