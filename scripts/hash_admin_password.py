"""Print a werkzeug hash to put into ADMIN_PASSWORD_HASH."""
from __future__ import annotations

import getpass

from werkzeug.security import generate_password_hash


def main() -> None:
    password = getpass.getpass("Admin password: ")
    if len(password) < 6:
        raise SystemExit("Password must be at least 6 characters")
    print(generate_password_hash(password))


if __name__ == "__main__":
    main()
