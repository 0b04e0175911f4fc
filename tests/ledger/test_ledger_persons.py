from __future__ import annotations

import pytest

from src.mailroom.mailroom.core.exceptions import (
    DuplicateKeyError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from src.mailroom.mailroom.persons.model import Person, PersonRecord


def test_added_person_round_trips(ledger, make_person):
    person = make_person("np8", "Navin", "Pathak", "np8@rice.edu")
    ledger.add_person(person)

    fetched = ledger.get_person("np8")

    assert fetched == person
    assert (fetched.first_name, fetched.last_name, fetched.email_address) == ("Navin", "Pathak", "np8@rice.edu")


def test_duplicate_person_id_is_rejected_and_ledger_unchanged(ledger, make_person):
    ledger.add_person(make_person("np8", "Navin", "Pathak"))

    with pytest.raises(DuplicateKeyError):
        ledger.add_person(make_person("np8", "Someone", "Else", "else@example.edu"))

    kept = ledger.get_person("np8")
    assert kept.first_name == "Navin"
    assert len(ledger.get_person_list("")) == 1


@pytest.mark.parametrize(
    "person",
    [
        Person("", "A", "B", "a@example.edu"),
        Person("x1", " ", "B", "a@example.edu"),
        Person("x1", "A", "B", "not-an-email"),
    ],
)
def test_add_person_validates_fields(ledger, person):
    with pytest.raises(ValidationError):
        ledger.add_person(person)


def test_edit_person_replaces_fields_keeps_identity(ledger, make_person):
    ledger.add_person(make_person("np8", "Navin", "Pathak"))

    ledger.edit_person(Person("np8", "Nav", "Pathak", "nav@example.edu"))

    edited = ledger.get_person("np8")
    assert edited.person_id == "np8"
    assert edited.first_name == "Nav"
    assert edited.email_address == "nav@example.edu"


def test_edit_unknown_person_raises(ledger, make_person):
    with pytest.raises(NotFoundError):
        ledger.edit_person(make_person("ghost"))


def test_delete_unknown_person_raises(ledger):
    with pytest.raises(NotFoundError):
        ledger.delete_person("ghost")


def test_delete_person_with_active_packages_is_rejected(ledger, make_person):
    ledger.add_person(make_person("np8"))
    ledger.check_in_package("np8", "")

    with pytest.raises(InvalidTransitionError):
        ledger.delete_person("np8")

    assert ledger.get_person("np8").person_id == "np8"
    assert len(ledger.associations()) == 1


def test_delete_person_after_pickup_removes_history(ledger, make_person, package_repo):
    ledger.add_person(make_person("np8"))
    pkg_id = ledger.check_in_package("np8", "")
    ledger.check_out_package(pkg_id)

    ledger.delete_person("np8")

    with pytest.raises(NotFoundError):
        ledger.get_person("np8")
    assert package_repo.list_all() == []


def test_person_list_search_is_case_insensitive(ledger, make_person):
    ledger.add_person(make_person("np8", "Navin", "Pathak"))
    ledger.add_person(make_person("nathan", "Nathan", "Patrick"))
    ledger.add_person(make_person("cwh1", "Chris", "Henderson"))

    assert [p.person_id for p in ledger.get_person_list("")] == ["cwh1", "np8", "nathan"]
    assert [p.person_id for p in ledger.get_person_list("PAT")] == ["np8", "nathan"]
    assert [p.person_id for p in ledger.get_person_list("cwh")] == ["cwh1"]
    assert [p.person_id for p in ledger.get_person_list("navin path")] == ["np8"]
    assert ledger.get_person_list("zzz") == []


def test_import_reports_duplicate_row_without_aborting(ledger):
    records = [
        PersonRecord("p1", "Ann", "One", "p1@example.edu", row_number=1),
        PersonRecord("p2", "Bob", "Two", "p2@example.edu", row_number=2),
        PersonRecord("p1", "Dup", "Three", "p3@example.edu", row_number=3),
        PersonRecord("p4", "Dan", "Four", "p4@example.edu", row_number=4),
        PersonRecord("p5", "Eve", "Five", "p5@example.edu", row_number=5),
    ]

    report = ledger.import_persons(records)

    assert report.imported == ["p1", "p2", "p4", "p5"]
    assert [(f.row_number, f.person_id) for f in report.failures] == [(3, "p1")]
    assert not report.ok
    assert ledger.get_person("p1").first_name == "Ann"


def test_import_collects_malformed_records(ledger):
    records = [
        PersonRecord("p1", "Ann", "One", "broken", row_number=1),
        PersonRecord("p2", "Bob", "Two", "p2@example.edu", row_number=2),
    ]

    report = ledger.import_persons(records)

    assert report.imported == ["p2"]
    assert report.failures[0].row_number == 1
    assert "valid address" in report.failures[0].reason


@pytest.mark.parametrize(
    "person_id, first, last",
    [
        ("x" * 65, "Navin", "Pathak"),
        ("np8", "N" * 101, "Pathak"),
        ("np8", "Navin", "P" * 101),
    ],
)
def test_values_longer_than_their_columns_are_rejected(ledger, make_person, person_id, first, last):
    with pytest.raises(ValidationError):
        ledger.add_person(make_person(person_id, first, last, "np8@rice.edu"))

    assert ledger.get_person_list() == []


def test_person_ids_are_case_sensitive(ledger, make_person):
    ledger.add_person(make_person("np8"))
    ledger.add_person(make_person("NP8", "Nora"))

    assert ledger.get_person("NP8").first_name == "Nora"
    assert ledger.get_person("np8").first_name == "Navin"
