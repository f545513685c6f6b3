"""Thin helpers for building and running the SQLite statements the writers need."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterable, Sequence
from typing import NamedTuple

from bagbench.strings import join, repeat


class ForeignKey(NamedTuple):
    """A foreign-key constraint: ``column`` references ``parent_table(parent_column)``."""

    column: str
    parent_table: str
    parent_column: str


def open_db(name: str) -> sqlite3.Connection:
    """Open (or create) the database ``name``.

    The connection runs in autocommit mode, so transactions are only those
    begun explicitly.
    """
    return sqlite3.connect(name, isolation_level=None)


def set_pragma(db: sqlite3.Connection, pragma: str, value: str) -> None:
    """Run ``PRAGMA pragma=value``."""
    exec_statement(db, f"PRAGMA {pragma}={value}")


def create_table(
    db: sqlite3.Connection,
    name: str,
    fields: Sequence[str],
    foreign_keys: Iterable[ForeignKey] = (),
) -> None:
    """Create table ``name`` with the column definitions ``fields`` unless it exists."""
    definitions = list(fields)
    definitions += [
        f"FOREIGN KEY ({column}) REFERENCES {parent_table} ({parent_column})"
        for column, parent_table, parent_column in foreign_keys
    ]
    exec_statement(
        db, f"CREATE TABLE IF NOT EXISTS {name}{join(definitions, ',', '(', ')')};"
    )


def create_index(db: sqlite3.Connection, table: str, key: str) -> None:
    """Create the index ``<key>_INDEX`` on ``table(key)`` unless it exists."""
    exec_statement(db, f"CREATE INDEX IF NOT EXISTS {key}_INDEX ON {table}({key});")


def insert_statement(table: str, fields: Sequence[str]) -> str:
    """The parameterised ``INSERT`` statement for ``fields`` of ``table``."""
    columns = join(list(fields), ",", "(", ")")
    placeholders = join(repeat(len(fields), "?"), ",", "(", ")")
    return f"INSERT INTO {table}{columns} VALUES{placeholders};"


def exec_statement(db: sqlite3.Connection, statement: str) -> None:
    """Run a single statement, discarding any result rows."""
    db.execute(statement)