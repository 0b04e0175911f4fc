"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the business rules live in the services.
"""

from datetime import datetime

from src.mailroom.mailroom.ledger.service import Ledger
from src.mailroom.mailroom.notifications.batcher import batch_by_person
from src.mailroom.mailroom.packages.memory_package_repository import InMemoryPackageRepository
from src.mailroom.mailroom.persons.memory_person_repository import InMemoryPersonRepository
from src.mailroom.mailroom.persons.model import Person
from src.mailroom.mailroom.queries.engine import QueryEngine


def main():
    ledger = Ledger(InMemoryPersonRepository(), InMemoryPackageRepository(), clock=datetime.now)
    ledger.add_person(Person("np8", "Navin", "Pathak", "np8@example.edu"))
    ledger.add_person(Person("gavin", "Gavin", "Pathak", "gavin@example.edu"))

    first = ledger.check_in_package("np8", "fragile")
    ledger.check_in_package("np8")
    ledger.check_in_package("gavin", "It's huge")
    ledger.check_out_package(first)

    for batch in batch_by_person(QueryEngine(ledger).active_by_person()):
        print(batch.person.full_name, [p.package_id for p in batch.packages])


if __name__ == "__main__":
    main()
