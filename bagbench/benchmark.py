"""Benchmarks that push generated messages through a writer while profiling."""

from __future__ import annotations

import contextlib
import os
from abc import ABC, abstractmethod
from typing import TextIO

from bagbench.interfaces import MessageWriter
from bagbench.message import MessageGenerator
from bagbench.profiler import Profiler


class Benchmark(ABC):
    """A runnable benchmark that can report its results as CSV."""

    @abstractmethod
    def run(self) -> None:
        """Carry out the benchmark."""

    @abstractmethod
    def write_csv(self, out_stream: TextIO, with_header: bool) -> None:
        """Write the results, optionally preceded by the header line."""


class _WriterBenchmark(Benchmark):
    """Shared state and CSV output of the writer benchmarks."""

    def __init__(
        self, generator: MessageGenerator, writer: MessageWriter, profiler: Profiler
    ) -> None:
        self._generator = generator
        self._writer = writer
        self._profiler = profiler

    def write_csv(self, out_stream: TextIO, with_header: bool) -> None:
        if with_header:
            out_stream.write(f"{self._profiler.csv_header()}\n")
        out_stream.write(f"{self._profiler.csv_entry()}\n")

    def _write_all(self) -> None:
        tick = self._profiler.measure_progress(
            "write_throughput", self._generator.total_msg_count()
        )
        self._write_with(tick)

    def _write_with(self, tick) -> None:
        for message in self._generator:
            self._writer.write(message)
            tick()


class SqliteWriterBenchmark(_WriterBenchmark):
    """Times writing all messages, then building indices, with an SQLite writer."""

    def __init__(
        self, generator: MessageGenerator, writer: MessageWriter, profiler: Profiler
    ) -> None:
        super().__init__(generator, writer, profiler)

    def run(self) -> None:
        self._generator.reset()
        self._writer.reset()

        self._profiler.take_time_for("start writing time")
        tick = self._profiler.measure_progress(
            "write_throughput", self._generator.total_msg_count()
        )

        self._writer.open()
        self._write_with(tick)

        self._profiler.take_time_for("end writing time")
        self._profiler.take_time_for("start indexing time")

        self._writer.create_index()
        self._writer.close()

        self._profiler.take_time_for("end indexing time")
        self._profiler.track_disk_usage()

    def write_csv(self, out_stream: TextIO, with_header: bool) -> None:
        super().write_csv(out_stream, with_header)


class TrivialWriterBenchmark(_WriterBenchmark):
    """Times writing all messages with a writer that needs no indexing."""

    def __init__(
        self, generator: MessageGenerator, writer: MessageWriter, profiler: Profiler
    ) -> None:
        super().__init__(generator, writer, profiler)

    def run(self) -> None:
        self._generator.reset()
        self._writer.reset()

        tick = self._profiler.measure_progress(
            "write_throughput", self._generator.total_msg_count()
        )
        self._profiler.take_time_for("started writing messages")

        self._writer.open()
        self._write_with(tick)
        self._writer.close()

        self._profiler.take_time_for("finished writing messages")
        self._profiler.track_disk_usage()

    def write_csv(self, out_stream: TextIO, with_header: bool) -> None:
        super().write_csv(out_stream, with_header)


def write_csv_file(file_name: str, benchmark: Benchmark, with_header: bool) -> None:
    """Append the benchmark's results to ``file_name``.

    With ``with_header`` the file is started afresh and the header written first.
    """
    if with_header:
        with contextlib.suppress(OSError):
            os.remove(file_name)
    with open(file_name, "a", encoding="utf-8") as file:
        benchmark.write_csv(file, with_header)