from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formataddr
from typing import Sequence

from ..core.constants import DEFAULT_SMTP_HOST, DEFAULT_SMTP_PORT, DEFAULT_SMTP_TIMEOUT_SECONDS
from ..packages.model import Package
from ..persons.model import Person
from .notifier import Notifier
from .templates import EmailTemplates

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SenderAccount:
    address: str
    password: str
    alias: str

    @property
    def configured(self) -> bool:
        return bool(self.address and self.password)


class SMTPNotifier(Notifier):
    """Sends notification/reminder emails over SMTP with STARTTLS."""

    def __init__(
        self,
        sender: SenderAccount,
        templates: EmailTemplates,
        *,
        host: str = DEFAULT_SMTP_HOST,
        port: int = DEFAULT_SMTP_PORT,
        timeout: float = DEFAULT_SMTP_TIMEOUT_SECONDS,
    ):
        self._sender = sender
        self._templates = templates
        self._host = host
        self._port = int(port)
        self._timeout = timeout

    @property
    def sender(self) -> SenderAccount:
        return self._sender

    @property
    def templates(self) -> EmailTemplates:
        return self._templates

    def set_sender(self, sender: SenderAccount) -> None:
        self._sender = sender
        logger.info("Sender account changed to %s", sender.address)

    def send_one(self, person: Person, package: Package) -> bool:
        subject, body = self._templates.render_notification(person, package)
        return self._deliver(person, subject, body)

    def send_batch(self, person: Person, packages: Sequence[Package]) -> bool:
        if not packages:
            return True
        subject, body = self._templates.render_reminder(person, packages)
        return self._deliver(person, subject, body)

    def check_connection(self) -> bool:
        if not self._sender.configured:
            logger.warning("Sender account is not configured")
            return False
        try:
            with self._open():
                pass
        except (smtplib.SMTPException, OSError) as e:
            logger.warning("Failed to connect to the mail server %s:%s: %s", self._host, self._port, e)
            return False
        return True

    def _open(self) -> smtplib.SMTP:
        server = smtplib.SMTP(self._host, self._port, timeout=self._timeout)
        try:
            server.starttls()
            server.login(self._sender.address, self._sender.password)
        except Exception:
            server.close()
            raise
        return server

    def _build_message(self, person: Person, subject: str, body: str) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = formataddr((self._sender.alias, self._sender.address))
        msg["To"] = formataddr((person.full_name, person.email_address))
        msg["Subject"] = subject
        msg.set_content(body)
        return msg

    def _deliver(self, person: Person, subject: str, body: str) -> bool:
        if not self._sender.configured:
            logger.warning("Sender account is not configured; not emailing %s", person.person_id)
            return False

        msg = self._build_message(person, subject, body)
        try:
            with self._open() as server:
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.warning("Failed to email %s (%s): %s", person.person_id, subject, e)
            return False

        logger.info("Emailed %s: %s", person.person_id, subject)
        return True
