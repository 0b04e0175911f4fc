from __future__ import annotations

from typing import Iterable, Optional

from ..core.exceptions import UngroupedBatchInputError, ValidationError
from ..packages.model import Association, Package
from ..persons.model import Person
from .model import Batch


def batch_by_person(entries: Iterable[Association]) -> list[Batch]:
    """Group active (person, package) pairs into one batch per person.

    Contract: ``entries`` must already be grouped by person (e.g. sorted by
    person id); encounter order is kept for persons and for packages within a
    person. The batcher does not sort. A person showing up again after their
    group was closed raises UngroupedBatchInputError rather than producing a
    second reminder for them.
    """
    batches: list[Batch] = []
    closed: set[str] = set()
    current: Optional[Person] = None
    packages: list[Package] = []

    for entry in entries:
        if entry.package.checked_out:
            raise ValidationError(f"Package {entry.package.package_id} is already checked out")

        if current is None or entry.person.person_id != current.person_id:
            if current is not None:
                if packages:
                    batches.append(Batch(person=current, packages=tuple(packages)))
                closed.add(current.person_id)
            if entry.person.person_id in closed:
                raise UngroupedBatchInputError(
                    f"Person {entry.person.person_id!r} appears in more than one run; input must be grouped by person"
                )
            current = entry.person
            packages = []

        packages.append(entry.package)

    if current is not None and packages:
        batches.append(Batch(person=current, packages=tuple(packages)))
    return batches
