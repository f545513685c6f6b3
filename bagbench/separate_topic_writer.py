"""SQLite writer keeping topic names in their own table."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterable, Mapping

from bagbench import sql
from bagbench.message import Message
from bagbench.sqlite_writer import SqliteWriter

FIXED_INDICES: tuple[tuple[str, str], ...] = (
    ("MESSAGES", "TIMESTAMP"),
    ("MESSAGES", "TOPIC_ID"),
    ("TOPICS", "TOPIC"),
)


class SeparateTopicTableSqliteWriter(SqliteWriter):
    """Writes topics into ``TOPICS`` and messages, referencing them by id, into ``MESSAGES``.

    The indices built are always those of ``FIXED_INDICES``; the ``indices``
    argument is accepted but not used.
    """

    def __init__(
        self,
        filename: str,
        messages_per_transaction: int = 0,
        indices: Iterable[tuple[str, str]] | None = None,
        pragmas: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(filename, messages_per_transaction, FIXED_INDICES, pragmas)
        self._insert_message: str | None = None
        self._insert_topic: str | None = None
        self._topic_ids: dict[str, int] = {}

    def close(self) -> None:
        if self.is_open():
            self._insert_message = None
            self._insert_topic = None
            super().close()

    def reset(self) -> None:
        """Forget the ids of the topics written so far."""
        self._topic_ids.clear()

    def _initialize_tables(self, db: sqlite3.Connection) -> None:
        sql.create_table(db, "TOPICS", ["ID INTEGER PRIMARY KEY", "TOPIC TEXT NOT NULL"])
        sql.create_table(
            db,
            "MESSAGES",
            ["TIMESTAMP INTEGER NOT NULL", "TOPIC_ID INTEGER NOT NULL", "DATA BLOB NOT NULL"],
            [sql.ForeignKey("TOPIC_ID", "TOPICS", "ID")],
        )

    def _prepare_statements(self, db: sqlite3.Connection) -> None:
        self._insert_message = sql.insert_statement("MESSAGES", ["TIMESTAMP", "TOPIC_ID", "DATA"])
        self._insert_topic = sql.insert_statement("TOPICS", ["TOPIC"])

    def _write_to_database(self, message: Message) -> None:
        topic_id = self._topic_ids.get(message.topic)
        if not topic_id:
            topic_id = self._insert_topic_row(message.topic)
            self._topic_ids[message.topic] = topic_id
        self._connection().execute(
            self._insert_message, (message.timestamp, topic_id, message.blob)
        )

    def _insert_topic_row(self, topic: str) -> int:
        cursor = self._connection().execute(self._insert_topic, (topic,))
        return cursor.lastrowid