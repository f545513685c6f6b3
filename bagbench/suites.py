"""Benchmark suites comparing the SQLite writers on small, big and mixed messages."""

from __future__ import annotations

import argparse
import contextlib
import os
from collections.abc import Callable, Sequence

from bagbench.benchmark import SqliteWriterBenchmark, write_csv_file
from bagbench.interfaces import MessageWriter
from bagbench.message import MessageGenerator
from bagbench.one_table_writer import OneTableSqliteWriter
from bagbench.profiler import Profiler
from bagbench.separate_topic_writer import SeparateTopicTableSqliteWriter

ONE_TABLE = "OneTableSqlite"
SEPARATE_TOPIC_TABLE = "SeparateTopicTableSqlite"

BIG_MESSAGES_CSV = "big_messages_benchmark.csv"
SMALL_MESSAGES_CSV = "small_messages_benchmark.csv"
MIXED_MESSAGES_CSV = "mixed_messages_benchmark.csv"


def _remove(file_name: str) -> None:
    with contextlib.suppress(OSError):
        os.remove(file_name)


def single_topic_specification(message_blob_size: int) -> list[tuple[str, int]]:
    """A specification with one topic, ``topic``, of the given blob size."""
    return [("topic", message_blob_size)]


def mixed_specification(
    number_of_small_messages: int,
    small_message_blob_size: int,
    number_of_medium_messages: int,
    medium_message_blob_size: int,
    number_of_big_messages: int,
    big_message_blob_size: int,
) -> list[tuple[str, int]]:
    """Small, then medium, then big topics, each topic numbered from 0 within its kind."""
    kinds = (
        ("small", number_of_small_messages, small_message_blob_size),
        ("medium", number_of_medium_messages, medium_message_blob_size),
        ("big", number_of_big_messages, big_message_blob_size),
    )
    return [
        (f"topic/{kind}/{i}", size)
        for kind, count, size in kinds
        for i in range(count)
    ]


def _run(
    csv_file: str,
    writer: MessageWriter,
    db_name: str,
    loop_count: int,
    specification: list[tuple[str, int]],
    meta_data: list[tuple[str, str]],
    with_header: bool,
) -> SqliteWriterBenchmark:
    benchmark = SqliteWriterBenchmark(
        MessageGenerator(loop_count, specification),
        writer,
        Profiler(meta_data, db_name),
    )
    _remove(db_name)
    benchmark.run()
    _remove(db_name)
    write_csv_file(csv_file, benchmark, with_header)
    return benchmark


def run_single_topic_benchmark(
    csv_file: str,
    description: str,
    writer: MessageWriter,
    db_name: str,
    number_of_messages: int,
    message_blob_size: int,
    transaction_size: int,
    with_header: bool = False,
) -> SqliteWriterBenchmark:
    """Write ``number_of_messages`` messages on one topic and append the result to ``csv_file``.

    The database file is removed before and after the run.
    """
    meta_data = [
        ("description", description),
        ("number of messages", str(number_of_messages)),
        ("message blob size (bytes)", str(message_blob_size)),
        ("transaction size", str(transaction_size)),
    ]
    return _run(
        csv_file,
        writer,
        db_name,
        number_of_messages,
        single_topic_specification(message_blob_size),
        meta_data,
        with_header,
    )


def run_mixed_benchmark(
    csv_file: str,
    description: str,
    writer: MessageWriter,
    db_name: str,
    loop_count: int,
    number_of_small_messages: int,
    small_message_blob_size: int,
    number_of_medium_messages: int,
    medium_message_blob_size: int,
    number_of_big_messages: int,
    big_message_blob_size: int,
    transaction_size: int,
    with_header: bool = False,
) -> SqliteWriterBenchmark:
    """Write ``loop_count`` rounds over small, medium and big topics and append the result."""
    meta_data = [
        ("description", description),
        ("number of small messages", str(number_of_small_messages * loop_count)),
        ("small message blob size (bytes)", str(small_message_blob_size)),
        ("number of medium messages", str(number_of_medium_messages * loop_count)),
        ("medium message blob size (bytes)", str(medium_message_blob_size)),
        ("number of big messages", str(number_of_big_messages * loop_count)),
        ("big message blob size (bytes)", str(big_message_blob_size)),
        ("transaction size", str(transaction_size)),
    ]
    specification = mixed_specification(
        number_of_small_messages,
        small_message_blob_size,
        number_of_medium_messages,
        medium_message_blob_size,
        number_of_big_messages,
        big_message_blob_size,
    )
    return _run(
        csv_file, writer, db_name, loop_count, specification, meta_data, with_header
    )


def run_repeatedly(
    times: int, run: Callable[[bool], object], with_header: bool = False
) -> None:
    """Call ``run(with_header)`` ``times`` times; only the first call may get a header."""
    for _ in range(times):
        run(with_header)
        with_header = False


def one_table_writer(db_name: str, transaction_size: int) -> OneTableSqliteWriter:
    """The one-table writer as configured for the suites."""
    return OneTableSqliteWriter(
        db_name,
        transaction_size,
        [("MESSAGES", "TIMESTAMP"), ("MESSAGES", "TOPIC")],
        # A journal_mode of OFF writes faster but turns off transactions.
        {"journal_mode": "MEMORY", "synchronous": "OFF"},
    )


def separate_topic_writer(
    db_name: str, transaction_size: int
) -> SeparateTopicTableSqliteWriter:
    """The separate-topic-table writer as configured for the suites."""
    return SeparateTopicTableSqliteWriter(
        db_name,
        transaction_size,
        [("MESSAGES", "TIMESTAMP"), ("MESSAGES", "TOPIC_ID"), ("TOPICS", "TOPIC")],
        {"foreign_keys": "ON", "journal_mode": "MEMORY", "synchronous": "OFF"},
    )


def _single_topic_parser(
    prog: str, db_name: str, messages: int, blob_size: int, transaction_size: int
) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog)
    parser.add_argument("--db-name", default=db_name)
    parser.add_argument("--messages", type=int, default=messages)
    parser.add_argument("--blob-size", type=int, default=blob_size)
    parser.add_argument("--transaction-size", type=int, default=transaction_size)
    parser.add_argument("--repetitions", type=int, default=5)
    return parser


def _single_topic_main(csv_file: str, args: argparse.Namespace) -> int:
    def runner(writer: MessageWriter, description: str) -> Callable[[bool], object]:
        return lambda with_header: run_single_topic_benchmark(
            csv_file,
            description,
            writer,
            args.db_name,
            args.messages,
            args.blob_size,
            args.transaction_size,
            with_header,
        )

    run_repeatedly(
        args.repetitions,
        runner(one_table_writer(args.db_name, args.transaction_size), ONE_TABLE),
        True,
    )
    run_repeatedly(
        args.repetitions,
        runner(
            separate_topic_writer(args.db_name, args.transaction_size),
            SEPARATE_TOPIC_TABLE,
        ),
    )
    return 0


def big_messages_main(argv: Sequence[str] | None = None) -> int:
    """Write about 10 GB of full-HD-sized images with each writer, five times."""
    parser = _single_topic_parser(
        "big_messages_benchmark", "big_messages_benchmark.db", 300, 30_000_000, 10
    )
    return _single_topic_main(BIG_MESSAGES_CSV, parser.parse_args(argv))


def small_messages_main(argv: Sequence[str] | None = None) -> int:
    """Write about 1 GB of 10-byte messages with each writer, five times."""
    parser = _single_topic_parser(
        "small_messages_benchmark",
        "small_messages_writer_benchmark.db",
        100_000_000,
        10,
        10_000,
    )
    return _single_topic_main(SMALL_MESSAGES_CSV, parser.parse_args(argv))


def mixed_messages_main(argv: Sequence[str] | None = None) -> int:
    """Write about 10 GB of mixed small, medium and big messages with each writer."""
    parser = argparse.ArgumentParser(prog="mixed_messages_benchmark")
    parser.add_argument("--db-name", default="mixed_messages_benchmark.db")
    parser.add_argument("--loop-count", type=int, default=300)
    parser.add_argument("--small-messages", type=int, default=1000)
    parser.add_argument("--small-blob-size", type=int, default=10)
    parser.add_argument("--medium-messages", type=int, default=100)
    parser.add_argument("--medium-blob-size", type=int, default=1000)
    parser.add_argument("--big-messages", type=int, default=1)
    parser.add_argument("--big-blob-size", type=int, default=30_000_000)
    parser.add_argument("--transaction-size", type=int, default=10_000)
    parser.add_argument(
        "--repetitions",
        type=int,
        default=None,
        help="runs per writer (default: 3 one-table, 5 separate-topic-table)",
    )
    args = parser.parse_args(argv)

    def runner(writer: MessageWriter, description: str) -> Callable[[bool], object]:
        return lambda with_header: run_mixed_benchmark(
            MIXED_MESSAGES_CSV,
            description,
            writer,
            args.db_name,
            args.loop_count,
            args.small_messages,
            args.small_blob_size,
            args.medium_messages,
            args.medium_blob_size,
            args.big_messages,
            args.big_blob_size,
            args.transaction_size,
            with_header,
        )

    one_table_times = 3 if args.repetitions is None else args.repetitions
    separate_times = 5 if args.repetitions is None else args.repetitions

    run_repeatedly(
        one_table_times,
        runner(one_table_writer(args.db_name, args.transaction_size), ONE_TABLE),
        True,
    )
    # Both writers start a fresh file with a header, as the suite always has.
    run_repeatedly(
        separate_times,
        runner(
            separate_topic_writer(args.db_name, args.transaction_size),
            SEPARATE_TOPIC_TABLE,
        ),
        True,
    )
    return 0