"""Command-line entry points for the single-writer benchmarks."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from bagbench.benchmark import (
    SqliteWriterBenchmark,
    TrivialWriterBenchmark,
    write_csv_file,
)
from bagbench.message import MessageGenerator
from bagbench.one_table_writer import OneTableSqliteWriter
from bagbench.profiler import Profiler
from bagbench.stream_writer import MessageStreamWriter

SQLITE_USAGE = (
    "Usage: benchmark <database file name> <number of messages> <message blob size> "
    "<messages per transaction>"
)
TRIVIAL_USAGE = "Usage: benchmark <text file name> <number of messages> <message blob size>"


def _parse_counts(values: Sequence[str]) -> list[int] | None:
    try:
        return [int(value) for value in values]
    except ValueError as error:
        print(f"Invalid number: {error}", file=sys.stderr)
        return None


def sqlite_main(argv: Sequence[str] | None = None) -> int:
    """Benchmark the one-table SQLite writer and write ``sqlite3_writer_benchmark.csv``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 4:
        print(SQLITE_USAGE, file=sys.stderr)
        return 1

    database_name = args[0]
    counts = _parse_counts(args[1:])
    if counts is None:
        return 1
    number_messages, message_blob_size, messages_per_transaction = counts

    benchmark = SqliteWriterBenchmark(
        MessageGenerator(number_messages, [("topic", message_blob_size)]),
        OneTableSqliteWriter(database_name, messages_per_transaction),
        Profiler([], database_name),
    )
    benchmark.run()
    write_csv_file("sqlite3_writer_benchmark.csv", benchmark, True)
    return 0


def trivial_main(argv: Sequence[str] | None = None) -> int:
    """Benchmark writing messages as text lines and write ``trivial_writer_benchmark.csv``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 3:
        print(TRIVIAL_USAGE, file=sys.stderr)
        return 1

    file_name = args[0]
    counts = _parse_counts(args[1:])
    if counts is None:
        return 1
    number_messages, message_blob_size = counts

    with open(file_name, "w", encoding="utf-8") as file_stream:
        benchmark = TrivialWriterBenchmark(
            MessageGenerator(number_messages, [("topic", message_blob_size)]),
            MessageStreamWriter(file_stream),
            Profiler([], file_name),
        )
        benchmark.run()

    write_csv_file("trivial_writer_benchmark.csv", benchmark, True)
    return 0