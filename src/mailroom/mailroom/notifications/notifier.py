from __future__ import annotations

from typing import Protocol, Sequence

from ..packages.model import Package
from ..persons.model import Person


class Notifier(Protocol):
    """Outbound notification channel.

    Transport problems are reported as ``False``, never raised.
    """

    def send_one(self, person: Person, package: Package) -> bool:
        raise NotImplementedError

    def send_batch(self, person: Person, packages: Sequence[Package]) -> bool:
        raise NotImplementedError
