"""Base class for message writers that store into an SQLite database."""

from __future__ import annotations

import sqlite3
from abc import abstractmethod
from collections.abc import Iterable, Mapping

from bagbench import sql
from bagbench.interfaces import MessageWriter
from bagbench.message import Message

DEFAULT_PRAGMAS: Mapping[str, str] = {"journal_mode": "MEMORY", "synchronous": "OFF"}


class SqliteWriter(MessageWriter):
    """Writes messages to an SQLite file, grouping them into transactions.

    With ``messages_per_transaction`` of 0 every message is written on its own;
    otherwise each run of that many messages shares one transaction. Pragmas are
    applied in order of their names.
    """

    def __init__(
        self,
        filename: str,
        messages_per_transaction: int = 0,
        indices: Iterable[tuple[str, str]] = (),
        pragmas: Mapping[str, str] | None = None,
    ) -> None:
        self._filename = filename
        self._messages_per_transaction = messages_per_transaction
        self._messages_in_transaction = 0
        self._indices = list(indices)
        chosen = DEFAULT_PRAGMAS if pragmas is None else pragmas
        self._pragmas = dict(sorted(chosen.items()))
        self._db: sqlite3.Connection | None = None
        self._in_transaction = False

    def is_open(self) -> bool:
        """Whether the database is open."""
        return self._db is not None

    def open(self) -> None:
        """Open the database, create its tables, apply pragmas and prepare statements."""
        if self._db is not None:
            return
        db = sql.open_db(self._filename)
        self._db = db
        self._initialize_tables(db)
        self._set_pragmas()
        self._prepare_statements(db)

    def close(self) -> None:
        """Commit any open transaction and close the database."""
        if self._db is None:
            return
        if self._in_transaction:
            self._end_transaction()
        db = self._db
        self._db = None
        self._messages_in_transaction = 0
        db.close()

    def write(self, message: Message) -> None:
        self._connection()
        if self._messages_per_transaction == 0:
            self._write_to_database(message)
            return

        self._messages_in_transaction += 1
        if self._messages_in_transaction == 1:
            self._begin_transaction()

        self._write_to_database(message)

        if self._messages_in_transaction == self._messages_per_transaction:
            self._end_transaction()
            self._messages_in_transaction = 0

    def create_index(self) -> None:
        """Create every configured ``(table, column)`` index."""
        db = self._connection()
        for table, column in self._indices:
            sql.create_index(db, table, column)

    def __enter__(self) -> SqliteWriter:
        self.open()
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def _connection(self) -> sqlite3.Connection:
        if self._db is None:
            raise RuntimeError("writer is not open")
        return self._db

    def _set_pragmas(self) -> None:
        db = self._connection()
        for name, value in self._pragmas.items():
            sql.set_pragma(db, name, value)

    def _begin_transaction(self) -> None:
        sql.exec_statement(self._connection(), "BEGIN TRANSACTION")
        self._in_transaction = True

    def _end_transaction(self) -> None:
        sql.exec_statement(self._connection(), "END TRANSACTION")
        self._in_transaction = False

    @abstractmethod
    def _initialize_tables(self, db: sqlite3.Connection) -> None:
        """Create the tables the writer stores into."""

    @abstractmethod
    def _write_to_database(self, message: Message) -> None:
        """Store one message."""

    @abstractmethod
    def _prepare_statements(self, db: sqlite3.Connection) -> None:
        """Prepare the statements used by :meth:`_write_to_database`."""