from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector

from ..core.exceptions import DuplicateKeyError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Package
from .repository import PackageRepository

_COLUMNS = """
    package_id, owner_person_id, comment, check_in_time, check_out_time,
    checked_out, notification_sent
"""


def _to_package(row: dict) -> Package:
    return Package(
        package_id=int(row["package_id"]),
        owner_person_id=str(row["owner_person_id"]),
        check_in_time=row["check_in_time"],
        comment=row.get("comment") or "",
        checked_out=bool(row.get("checked_out", False)),
        notification_sent=bool(row.get("notification_sent", False)),
        check_out_time=row.get("check_out_time"),
    )


class MySQLPackageRepository(PackageRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, package_id: int) -> Optional[Package]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM packages WHERE package_id=%s", (int(package_id),))
            row = fetchone(cur)
            return _to_package(row) if row else None

    def exists(self, package_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS found FROM packages WHERE package_id=%s", (int(package_id),))
            return fetchone(cur) is not None

    def list_all(self) -> Sequence[Package]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM packages ORDER BY package_id")
            return [_to_package(r) for r in fetchall(cur)]

    def list_for_owner(self, person_id: str) -> Sequence[Package]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM packages WHERE owner_person_id=%s ORDER BY package_id",
                (person_id,),
            )
            return [_to_package(r) for r in fetchall(cur)]

    def insert(self, package: Package) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO packages(package_id, owner_person_id, comment, check_in_time,
                                         check_out_time, checked_out, notification_sent)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        package.package_id,
                        package.owner_person_id,
                        package.comment,
                        package.check_in_time,
                        package.check_out_time,
                        int(package.checked_out),
                        int(package.notification_sent),
                    ),
                )
        except mysql.connector.IntegrityError as e:
            raise DuplicateKeyError(f"Package {package.package_id} already exists") from e

    def update(self, package: Package) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE packages
                SET comment=%s, check_out_time=%s, checked_out=%s, notification_sent=%s
                WHERE package_id=%s
                """,
                (
                    package.comment,
                    package.check_out_time,
                    int(package.checked_out),
                    int(package.notification_sent),
                    package.package_id,
                ),
            )
            return cur.rowcount > 0

    def delete_for_owner(self, person_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM packages WHERE owner_person_id=%s", (person_id,))
            return int(cur.rowcount)
