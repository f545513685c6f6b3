"""SQLite writer storing every message, with its topic name, in one table."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterable, Mapping

from bagbench import sql
from bagbench.message import Message
from bagbench.sqlite_writer import SqliteWriter

DEFAULT_INDICES: tuple[tuple[str, str], ...] = (
    ("MESSAGES", "TOPIC"),
    ("MESSAGES", "TIMESTAMP"),
)


class OneTableSqliteWriter(SqliteWriter):
    """Writes messages into a single ``MESSAGES(TIMESTAMP, TOPIC, DATA)`` table."""

    def __init__(
        self,
        filename: str,
        messages_per_transaction: int = 0,
        indices: Iterable[tuple[str, str]] = DEFAULT_INDICES,
        pragmas: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(filename, messages_per_transaction, indices, pragmas)
        self._insert_message: str | None = None

    def close(self) -> None:
        if self.is_open():
            self._insert_message = None
            super().close()

    def reset(self) -> None:
        """The writer keeps no per-run state."""

    def _initialize_tables(self, db: sqlite3.Connection) -> None:
        sql.create_table(
            db,
            "MESSAGES",
            ["TIMESTAMP INTEGER NOT NULL", "TOPIC TEXT NOT NULL", "DATA BLOB NOT NULL"],
        )

    def _prepare_statements(self, db: sqlite3.Connection) -> None:
        self._insert_message = sql.insert_statement("MESSAGES", ["TIMESTAMP", "TOPIC", "DATA"])

    def _write_to_database(self, message: Message) -> None:
        self._connection().execute(
            self._insert_message, (message.timestamp, message.topic, message.blob)
        )