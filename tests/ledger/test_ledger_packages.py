from __future__ import annotations

from datetime import datetime

import pytest

from src.mailroom.mailroom.core.exceptions import AlreadyCheckedOutError, NotFoundError, ValidationError
from src.mailroom.mailroom.packages.model import Package
from src.mailroom.mailroom.queries.engine import QueryEngine
from src.mailroom.mailroom.queries.model import PackageFilter


def test_check_in_creates_active_package_with_timestamp_id(ledger, make_person, fixed_now):
    ledger.add_person(make_person("np8"))

    pkg_id = ledger.check_in_package("np8", "  fragile ")

    assert pkg_id == 20240101120000
    pkg = ledger.get_package(pkg_id)
    assert pkg.owner_person_id == "np8"
    assert pkg.comment == "fragile"
    assert pkg.check_in_time == fixed_now
    assert pkg.checked_out is False
    assert pkg.notification_sent is False


def test_check_in_for_unknown_person_raises(ledger):
    with pytest.raises(NotFoundError):
        ledger.check_in_package("ghost", "")


def test_check_ins_in_the_same_second_get_distinct_ids(ledger, make_person):
    ledger.add_person(make_person("np8"))

    ids = [ledger.check_in_package("np8", "") for _ in range(3)]

    assert ids == [20240101120000, 20240101120001, 20240101120002]
    assert len(ledger.associations()) == 3


def test_taken_id_is_skipped_not_overwritten(ledger, make_person, package_repo, fixed_now):
    ledger.add_person(make_person("np8"))
    ledger.add_person(make_person("gavin", "Gavin"))
    existing = Package(package_id=20240101120000, owner_person_id="gavin", check_in_time=fixed_now, comment="old")
    package_repo.insert(existing)

    pkg_id = ledger.check_in_package("np8", "new")

    assert pkg_id == 20240101120001
    assert package_repo.get_by_id(20240101120000) == existing


def test_check_out_is_irreversible(ledger, make_person, clock):
    ledger.add_person(make_person("np8"))
    pkg_id = ledger.check_in_package("np8", "")
    clock.advance(hours=3)

    out = ledger.check_out_package(pkg_id)

    assert out.checked_out is True
    assert out.check_out_time == datetime(2024, 1, 1, 15, 0, 0)
    with pytest.raises(AlreadyCheckedOutError):
        ledger.check_out_package(pkg_id)
    assert ledger.get_package(pkg_id).checked_out is True


def test_check_out_unknown_package_raises(ledger):
    with pytest.raises(NotFoundError):
        ledger.check_out_package(1)


def test_read_accessors(ledger, make_person):
    ledger.add_person(make_person("np8"))
    pkg_id = ledger.check_in_package("np8", "")

    assert ledger.get_owner(pkg_id).person_id == "np8"
    with pytest.raises(NotFoundError):
        ledger.get_package(999)
    with pytest.raises(NotFoundError):
        ledger.get_owner(999)
    with pytest.raises(NotFoundError):
        ledger.get_person("ghost")


def test_mark_notification_sent(ledger, make_person):
    ledger.add_person(make_person("np8"))
    pkg_id = ledger.check_in_package("np8", "")

    ledger.mark_notification_sent(pkg_id)
    ledger.mark_notification_sent(pkg_id)

    assert ledger.get_package(pkg_id).notification_sent is True
    with pytest.raises(NotFoundError):
        ledger.mark_notification_sent(12345)


def test_checked_out_package_leaves_active_listing_only(ledger, make_person):
    ledger.add_person(make_person("np8"))
    pkg_id = ledger.check_in_package("np8", "fragile")
    ledger.check_out_package(pkg_id)
    queries = QueryEngine(ledger)

    active = queries.select(PackageFilter.active())
    everything = queries.select(PackageFilter.all())

    assert active == []
    assert [(e.package.package_id, e.package.checked_out) for e in everything] == [(pkg_id, True)]


def test_overlong_comment_is_rejected(ledger, make_person):
    ledger.add_person(make_person("np8"))

    with pytest.raises(ValidationError):
        ledger.check_in_package("np8", "x" * 10001)

    assert ledger.associations() == []
    assert ledger.get_package(ledger.check_in_package("np8", "x" * 600)).comment == "x" * 600
