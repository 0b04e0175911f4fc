from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector

from ..core.exceptions import DuplicateKeyError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Person
from .repository import PersonRepository


def _to_person(row: dict) -> Person:
    return Person(
        person_id=str(row["person_id"]),
        first_name=row["first_name"],
        last_name=row["last_name"],
        email_address=row["email_address"],
    )


class MySQLPersonRepository(PersonRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, person_id: str) -> Optional[Person]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT person_id, first_name, last_name, email_address
                FROM persons
                WHERE person_id=%s
                """,
                (person_id,),
            )
            row = fetchone(cur)
            return _to_person(row) if row else None

    def list_all(self) -> Sequence[Person]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT person_id, first_name, last_name, email_address
                FROM persons
                ORDER BY last_name, first_name, person_id
                """
            )
            return [_to_person(r) for r in fetchall(cur)]

    def insert(self, person: Person) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO persons(person_id, first_name, last_name, email_address)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (person.person_id, person.first_name, person.last_name, person.email_address),
                )
        except mysql.connector.IntegrityError as e:
            raise DuplicateKeyError(f"Person {person.person_id!r} already exists") from e

    def update(self, person: Person) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE persons
                SET first_name=%s, last_name=%s, email_address=%s
                WHERE person_id=%s
                """,
                (person.first_name, person.last_name, person.email_address, person.person_id),
            )
            return cur.rowcount > 0

    def delete_by_id(self, person_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM persons WHERE person_id=%s", (person_id,))
            return cur.rowcount > 0
