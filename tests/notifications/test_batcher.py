from __future__ import annotations

from datetime import datetime

import pytest

from src.mailroom.mailroom.core.exceptions import UngroupedBatchInputError, ValidationError
from src.mailroom.mailroom.notifications.batcher import batch_by_person
from src.mailroom.mailroom.packages.model import Association, Package
from src.mailroom.mailroom.persons.model import Person

A = Person("a", "Ann", "Able", "a@example.edu")
B = Person("b", "Ben", "Baker", "b@example.edu")


def _pkg(package_id, owner, *, checked_out=False):
    return Package(
        package_id=package_id,
        owner_person_id=owner.person_id,
        check_in_time=datetime(2024, 1, 1, 12, 0),
        checked_out=checked_out,
    )


def test_groups_consecutive_entries_per_person():
    p1, p2, p3 = _pkg(1, A), _pkg(2, A), _pkg(3, B)

    batches = batch_by_person([Association(A, p1), Association(A, p2), Association(B, p3)])

    assert [(b.person, b.packages) for b in batches] == [(A, (p1, p2)), (B, (p3,))]


def test_empty_input_gives_no_batches():
    assert batch_by_person([]) == []


def test_single_entry_gives_single_batch():
    p1 = _pkg(1, B)

    batches = batch_by_person([Association(B, p1)])

    assert len(batches) == 1
    assert batches[0].person == B
    assert batches[0].packages == (p1,)


def test_encounter_order_is_kept():
    p7, p3, p5 = _pkg(7, B), _pkg(3, B), _pkg(5, A)

    batches = batch_by_person([Association(B, p7), Association(B, p3), Association(A, p5)])

    assert [b.person.person_id for b in batches] == ["b", "a"]
    assert [p.package_id for p in batches[0].packages] == [7, 3]


def test_ungrouped_input_is_rejected():
    entries = [Association(A, _pkg(1, A)), Association(B, _pkg(2, B)), Association(A, _pkg(3, A))]

    with pytest.raises(UngroupedBatchInputError):
        batch_by_person(entries)


def test_checked_out_packages_are_rejected():
    with pytest.raises(ValidationError):
        batch_by_person([Association(A, _pkg(1, A, checked_out=True))])
