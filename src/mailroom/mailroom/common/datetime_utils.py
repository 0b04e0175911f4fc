from __future__ import annotations

from datetime import datetime

from ..core.constants import PACKAGE_ID_FORMAT


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def timestamp_id(moment: datetime) -> int:
    """Render a moment as a yyyyMMddHHmmss integer (e.g. 20240101120000)."""
    return int(moment.strftime(PACKAGE_ID_FORMAT))


def format_check_in(moment: datetime) -> str:
    return moment.strftime("%a %b %d %Y, %I:%M %p")
