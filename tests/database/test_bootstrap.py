from __future__ import annotations

import re
from pathlib import Path

from src.mailroom.mailroom.database.bootstrap import _strip_create_db_and_use, iter_sql_statements


def test_splits_on_semicolons():
    sql = "CREATE TABLE a (id INT);\nCREATE TABLE b (id INT);\n"

    assert list(iter_sql_statements(sql)) == ["CREATE TABLE a (id INT)", "CREATE TABLE b (id INT)"]


def test_semicolons_inside_quotes_are_kept():
    sql = "INSERT INTO t VALUES ('a;b', \"c;d\");SELECT 'it\\'s;fine'"

    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b', \"c;d\")",
        "SELECT 'it\\'s;fine'",
    ]


def test_create_database_and_use_are_stripped():
    sql = "CREATE DATABASE IF NOT EXISTS mailroom;\nUSE mailroom;\nCREATE TABLE persons (id INT);\n"

    assert list(iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE persons (id INT)"]


def test_shipped_schema_matches_store_semantics():
    schema = (Path(__file__).resolve().parents[2] / "database" / "schema.sql").read_text(encoding="utf-8")
    statements = list(iter_sql_statements(_strip_create_db_and_use(schema)))

    persons = next(s for s in statements if "TABLE IF NOT EXISTS persons" in s)
    packages = next(s for s in statements if "TABLE IF NOT EXISTS packages" in s)
    assert re.search(r"person_id\s+VARCHAR\(64\)[^,]*COLLATE utf8mb4_bin", persons)
    assert re.search(r"owner_person_id\s+VARCHAR\(64\)[^,]*COLLATE utf8mb4_bin", packages)
    assert re.search(r"comment\s+TEXT", packages)
