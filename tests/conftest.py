from __future__ import annotations

import smtplib
from datetime import datetime, timedelta

import pytest

from src.mailroom.mailroom.ledger.service import Ledger
from src.mailroom.mailroom.packages.memory_package_repository import InMemoryPackageRepository
from src.mailroom.mailroom.persons.memory_person_repository import InMemoryPersonRepository
from src.mailroom.mailroom.persons.model import Person


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class RecordingNotifier:
    """Notifier double: records calls, fails for the person ids in ``fail_for``."""

    def __init__(self, fail_for=()):
        self.fail_for = set(fail_for)
        self.sent_one = []
        self.batches = []

    def send_one(self, person, package) -> bool:
        if person.person_id in self.fail_for:
            return False
        self.sent_one.append((person.person_id, package.package_id))
        return True

    def send_batch(self, person, packages) -> bool:
        if person.person_id in self.fail_for:
            return False
        self.batches.append((person.person_id, [p.package_id for p in packages]))
        return True


class RecordingPrinter:
    def __init__(self, ok: bool = True):
        self.ok = ok
        self.printed = []

    def print_label(self, package_id: int, name: str) -> bool:
        self.printed.append((package_id, name))
        return self.ok


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture
def clock(fixed_now) -> FakeClock:
    return FakeClock(fixed_now)


@pytest.fixture
def person_repo() -> InMemoryPersonRepository:
    return InMemoryPersonRepository()


@pytest.fixture
def package_repo() -> InMemoryPackageRepository:
    return InMemoryPackageRepository()


@pytest.fixture
def ledger(person_repo, package_repo, clock) -> Ledger:
    return Ledger(person_repo, package_repo, clock=clock)


@pytest.fixture
def make_person():
    def _make(person_id: str, first_name: str = "Navin", last_name: str = "Pathak", email: str | None = None) -> Person:
        return Person(
            person_id=person_id,
            first_name=first_name,
            last_name=last_name,
            email_address=email or f"{person_id}@example.edu",
        )

    return _make


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def notifier_factory():
    return RecordingNotifier


@pytest.fixture
def printer() -> RecordingPrinter:
    return RecordingPrinter()


@pytest.fixture
def mock_smtp(monkeypatch):
    """Mock SMTP server for testing."""
    state = {"sent": [], "logins": [], "fail_login": False, "refuse": False}

    class MockSMTP:
        def __init__(self, host, port, timeout=None):
            if state["refuse"]:
                raise ConnectionRefusedError("no server")
            self.host = host
            self.port = port

        def __enter__(self):
            return self

        def __exit__(self, *args):
            pass

        def starttls(self):
            return True

        def login(self, username, password):
            if state["fail_login"]:
                raise smtplib.SMTPAuthenticationError(535, b"bad credentials")
            state["logins"].append((username, password))

        def send_message(self, msg):
            state["sent"].append(msg)

        def close(self):
            pass

    monkeypatch.setattr(smtplib, "SMTP", MockSMTP)
    return state
