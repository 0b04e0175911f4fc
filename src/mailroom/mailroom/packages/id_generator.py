from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local, timestamp_id


class PackageIdGenerator:
    """Monotonic package ids shaped like the check-in timestamp.

    Each id is ``max(yyyyMMddHHmmss(now), last + 1)`` so two check-ins within
    the same second still get distinct, increasing ids. Uniqueness against the
    store is still checked by the Ledger before commit.
    """

    def __init__(self, clock: Callable[[], datetime] = now_local, *, last_issued: Optional[int] = None):
        self._clock = clock
        self._last = last_issued

    def next_id(self, *, at: Optional[datetime] = None) -> int:
        candidate = timestamp_id(at or self._clock())
        if self._last is not None and candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return candidate

    def observe(self, package_id: int) -> None:
        """Never issue ``package_id`` or anything below it again."""
        if self._last is None or package_id > self._last:
            self._last = package_id
