from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .admin.service import AdminAuthService
from .core.enums import StorageBackend
from .database.connection import DBConfig, DatabaseConnection
from .dispatch.service import DispatchService
from .labels.printer import LabelPrinter, QRLabelPrinter
from .ledger.service import Ledger
from .notifications.notifier import Notifier
from .notifications.smtp_notifier import SenderAccount, SMTPNotifier
from .notifications.templates import EmailTemplates
from .packages.memory_package_repository import InMemoryPackageRepository
from .packages.mysql_package_repository import MySQLPackageRepository
from .packages.repository import PackageRepository
from .persons.memory_person_repository import InMemoryPersonRepository
from .persons.mysql_person_repository import MySQLPersonRepository
from .persons.repository import PersonRepository
from .queries.engine import QueryEngine
from .settings import Settings


@dataclass(frozen=True)
class Container:
    settings: Settings

    persons_repo: PersonRepository
    packages_repo: PackageRepository

    ledger: Ledger
    query_engine: QueryEngine
    notifier: Notifier
    label_printer: LabelPrinter
    admin_service: AdminAuthService
    dispatch_service: DispatchService


def _build_repositories(settings: Settings) -> tuple[PersonRepository, PackageRepository]:
    if settings.storage_backend == StorageBackend.MYSQL:
        conn = DatabaseConnection(DBConfig.from_dict(settings.db_config))
        return MySQLPersonRepository(conn), MySQLPackageRepository(conn)
    return InMemoryPersonRepository(), InMemoryPackageRepository()


def build_container(
    settings: Settings,
    *,
    notifier: Optional[Notifier] = None,
    label_printer: Optional[LabelPrinter] = None,
) -> Container:
    persons_repo, packages_repo = _build_repositories(settings)

    ledger = Ledger(persons_repo, packages_repo)
    query_engine = QueryEngine(ledger)

    if notifier is None:
        notifier = SMTPNotifier(
            SenderAccount(
                address=settings.sender_address,
                password=settings.sender_password,
                alias=settings.sender_alias,
            ),
            EmailTemplates(settings.mail_room_name, settings.email_templates),
            host=settings.smtp_host,
            port=settings.smtp_port,
        )
    if label_printer is None:
        label_printer = QRLabelPrinter(settings.label_dir)

    admin_service = AdminAuthService(settings.admin_password_hash)
    dispatch_service = DispatchService(ledger, notifier, queries=query_engine, printer=label_printer)

    return Container(
        settings=settings,
        persons_repo=persons_repo,
        packages_repo=packages_repo,
        ledger=ledger,
        query_engine=query_engine,
        notifier=notifier,
        label_printer=label_printer,
        admin_service=admin_service,
        dispatch_service=dispatch_service,
    )
