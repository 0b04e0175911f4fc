from __future__ import annotations

import logging

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class AdminAuthService:
    """Gate for admin-only operations (person maintenance, reminders, import).

    With no password hash configured every password is refused.
    """

    def __init__(self, password_hash: str = ""):
        self._password_hash = password_hash or ""

    @classmethod
    def from_password(cls, password: str) -> "AdminAuthService":
        return cls(generate_password_hash(password))

    def check_password(self, password: str) -> bool:
        if not self._password_hash or not password:
            return False
        try:
            return check_password_hash(self._password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            logger.warning("Configured admin password hash is not a valid werkzeug hash")
            return False

    def authenticate(self, password: str) -> None:
        if not self.check_password(password):
            raise AuthenticationError("Wrong admin password")
