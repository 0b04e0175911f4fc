from __future__ import annotations

from typing import Iterable, Optional

from ..ledger.service import Ledger
from ..packages.model import Association
from .model import PackageFilter, SortKey


def apply_query(
    entries: Iterable[Association],
    package_filter: Optional[PackageFilter] = None,
    sort: Optional[SortKey] = None,
) -> list[Association]:
    """Filter then order associations.

    Ties on the sort key keep ``package_id`` ascending, so the same query over
    the same data always yields the same order.
    """
    package_filter = package_filter or PackageFilter.all()
    sort = sort or SortKey()

    selected = [e for e in entries if package_filter.matches(e)]
    selected.sort(key=lambda e: e.package.package_id)
    # list.sort is stable, also with reverse=True, so the id order survives ties.
    selected.sort(key=sort.key, reverse=sort.descending)
    return selected


class QueryEngine:
    """Read-only listing over the ledger's (person, package) view."""

    def __init__(self, ledger: Ledger):
        self._ledger = ledger

    def select(self, package_filter: Optional[PackageFilter] = None, sort: Optional[SortKey] = None) -> list[Association]:
        return apply_query(self._ledger.associations(), package_filter, sort)

    def active_by_person(self) -> list[Association]:
        return self.select(PackageFilter.active(), SortKey.by_person())
