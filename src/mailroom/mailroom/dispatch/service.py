from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..core.exceptions import PartialBatchFailure
from ..labels.printer import LabelPrinter
from ..ledger.model import ImportReport
from ..ledger.service import Ledger
from ..notifications.batcher import batch_by_person
from ..notifications.model import ReminderReport
from ..notifications.notifier import Notifier
from ..packages.model import Association, Package
from ..persons.importer import Source, read_persons
from ..persons.model import Person
from ..queries.engine import QueryEngine
from ..queries.model import PackageFilter, SortKey

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckInResult:
    package_id: int
    notified: Optional[bool] = None
    label_printed: Optional[bool] = None

    def to_dict(self) -> dict:
        return {
            "package_id": self.package_id,
            "notified": self.notified,
            "label_printed": self.label_printed,
        }


class DispatchService:
    """Use cases exposed to callers (HTTP routes, scripts).

    Single-entity operations let domain errors propagate; bulk operations
    (import, reminders) keep going and report what failed.
    """

    def __init__(
        self,
        ledger: Ledger,
        notifier: Notifier,
        *,
        queries: Optional[QueryEngine] = None,
        printer: Optional[LabelPrinter] = None,
    ):
        self._ledger = ledger
        self._notifier = notifier
        self._queries = queries or QueryEngine(ledger)
        self._printer = printer

    # Package lifecycle

    def check_in(self, person_id: str, comment: str = "", *, notify: bool = False, print_label: bool = False) -> CheckInResult:
        package_id = self._ledger.check_in_package(person_id, comment)
        notified = self.send_notification(package_id) if notify else None
        printed = self.print_label(package_id) if print_label else None
        return CheckInResult(package_id=package_id, notified=notified, label_printed=printed)

    def check_out(self, package_id: int) -> Package:
        return self._ledger.check_out_package(package_id)

    def get_package(self, package_id: int) -> Package:
        return self._ledger.get_package(package_id)

    def get_owner(self, package_id: int) -> Person:
        return self._ledger.get_owner(package_id)

    def list_packages(self, package_filter: Optional[PackageFilter] = None, sort: Optional[SortKey] = None) -> list[Association]:
        return self._queries.select(package_filter, sort)

    # Side effects

    def send_notification(self, package_id: int) -> bool:
        package = self._ledger.get_package(package_id)
        person = self._ledger.get_person(package.owner_person_id)
        if not self._notifier.send_one(person, package):
            logger.warning("Notification for package %s was not sent", package_id)
            return False
        self._ledger.mark_notification_sent(package_id)
        return True

    def send_all_reminders(self) -> ReminderReport:
        batches = batch_by_person(self._queries.active_by_person())
        report = ReminderReport()
        for batch in batches:
            if self._notifier.send_batch(batch.person, batch.packages):
                report.sent.append(batch.person.person_id)
            else:
                report.failed.append(batch.person.person_id)

        logger.info("Reminders: %d sent, %d failed", len(report.sent), len(report.failed))
        if report.failed:
            raise PartialBatchFailure(
                f"{len(report.failed)} of {len(batches)} reminder(s) could not be sent",
                report,
            )
        return report

    def print_label(self, package_id: int) -> bool:
        owner = self._ledger.get_owner(package_id)
        if self._printer is None:
            logger.warning("No label printer configured")
            return False
        return self._printer.print_label(int(package_id), owner.last_first_name)

    # Persons

    def add_person(self, person: Person) -> None:
        self._ledger.add_person(person)

    def edit_person(self, person: Person) -> None:
        self._ledger.edit_person(person)

    def delete_person(self, person_id: str) -> None:
        self._ledger.delete_person(person_id)

    def get_person(self, person_id: str) -> Person:
        return self._ledger.get_person(person_id)

    def get_person_list(self, search: str = "") -> list[Person]:
        return self._ledger.get_person_list(search)

    def import_persons_csv(self, source: Source, *, filename: Optional[str] = None) -> ImportReport:
        records, read_failures = read_persons(source, filename=filename)
        report = self._ledger.import_persons(records)
        return report.merge(ImportReport(failures=read_failures))
