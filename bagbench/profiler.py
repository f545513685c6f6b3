"""Timing and disk-usage profiler producing CSV rows."""

from __future__ import annotations

import math
import os
import time
from collections.abc import Callable, Iterable

TickProgress = Callable[[], None]


class Profiler:
    """Records named time points and the size of a file for a benchmark run."""

    def __init__(self, meta_data: Iterable[tuple[str, str]], file_name: str) -> None:
        self._meta_data = list(meta_data)
        self._file_name = file_name
        self._disk_usage = 0
        self._time_points: list[tuple[str, int]] = []

    def take_time_for(self, task: str) -> None:
        """Record the current time under the name ``task``."""
        self._time_points.append((task, time.time_ns()))

    def track_disk_usage(self) -> None:
        """Record the size of the profiled file, or -1 if it cannot be read."""
        try:
            self._disk_usage = os.path.getsize(self._file_name)
        except OSError:
            self._disk_usage = -1

    def csv_header(self) -> str:
        """The CSV header line matching :meth:`csv_entry`."""
        parts = [f"{key}," for key, _ in self._meta_data]
        parts += [f"{task} (ms)," for task, _ in self._time_points]
        parts.append("disk usage (bytes)")
        return "".join(parts)

    def csv_entry(self) -> str:
        """The CSV data line: metadata, milliseconds since the first time point, disk usage."""
        parts = [f"{value}," for _, value in self._meta_data]
        if self._time_points:
            start = self._time_points[0][1]
            parts += [f"{(stamp - start) // 1_000_000}," for _, stamp in self._time_points]
        parts.append(str(self._disk_usage))
        return "".join(parts)

    def measure_progress(self, subject: str, total: int, increment: int = 1) -> TickProgress:
        """Record ``subject_0`` now and return a tick that records every further 10 %."""
        self.take_time_for(f"{subject}_0")
        next_level = 10
        current = 0

        def tick() -> None:
            nonlocal next_level, current
            current += increment
            progress = math.inf if total == 0 else current / total * 100
            if progress >= next_level:
                self.take_time_for(f"{subject}_{next_level}")
                next_level += 10

        return tick