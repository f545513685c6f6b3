"""Human-readable rendering of bag metadata."""

from __future__ import annotations

import time
from collections.abc import Sequence
from dataclasses import dataclass, field

_INDENTATION_SPACES = 19  # The longest field label plus one space.
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_SIZE_UNITS = ("B", "KiB", "MiB", "GiB", "TiB")


@dataclass(frozen=True)
class TopicMetadata:
    """Name, message type and serialization format of a topic."""

    name: str
    type: str
    serialization_format: str


@dataclass(frozen=True)
class TopicInformation:
    """A topic together with the number of messages stored for it."""

    topic_metadata: TopicMetadata
    message_count: int


@dataclass
class BagMetadata:
    """Summary of a bag. Times and durations are in nanoseconds."""

    storage_identifier: str = ""
    relative_file_paths: list[str] = field(default_factory=list)
    starting_time: int = 0
    duration: int = 0
    message_count: int = 0
    topics_with_message_count: list[TopicInformation] = field(default_factory=list)
    bag_size: int = 0


def format_duration(duration: int) -> dict[str, str]:
    """Split a nanosecond duration since the epoch into local date, time and seconds.

    The keys are ``date``, ``time`` and ``time_in_sec``. The millisecond part is
    written without zero padding.
    """
    milliseconds = int(duration / 1_000_000) if duration < 0 else duration // 1_000_000
    seconds = int(milliseconds / 1000) if milliseconds < 0 else milliseconds // 1000
    fractional = str(int(milliseconds - seconds * 1000))
    local = time.localtime(seconds)
    date = f"{_MONTHS[local.tm_mon - 1]} {local.tm_mday:>2} {local.tm_year}"
    clock = f"{local.tm_hour:02}:{local.tm_min:02}:{local.tm_sec:02}.{fractional}"
    return {"date": date, "time": clock, "time_in_sec": f"{seconds}.{fractional}"}


def format_time_point(duration: int) -> str:
    """Render a nanosecond time point as ``date time (seconds)``."""
    parts = format_duration(duration)
    return f"{parts['date']} {parts['time']} ({parts['time_in_sec']})"


def format_file_size(file_size: int) -> str:
    """Render a byte count in binary units up to TiB."""
    size = float(file_size)
    index = 0
    while size >= 1024 and index < len(_SIZE_UNITS) - 1:
        size /= 1024
        index += 1
    precision = 0 if index == 0 else 1
    return f"{size:.{precision}f} {_SIZE_UNITS[index]}"


def _indented_lines(lines: Sequence[str], indentation_spaces: int) -> str:
    if not lines:
        return "\n"
    indent = " " * indentation_spaces
    return "".join(
        f"{line}\n" if number == 0 else f"{indent}{line}\n"
        for number, line in enumerate(lines)
    )


def format_file_paths(paths: Sequence[str], indentation_spaces: int) -> str:
    """One path per line, every line after the first indented."""
    return _indented_lines(paths, indentation_spaces)


def format_topics_with_type(
    topics: Sequence[TopicInformation], indentation_spaces: int
) -> str:
    """One topic per line, every line after the first indented."""
    lines = [
        f"Topic: {info.topic_metadata.name} | "
        f"Type: {info.topic_metadata.type} | "
        f"Count: {info.message_count} | "
        f"Serialization Format: {info.topic_metadata.serialization_format}"
        for info in topics
    ]
    return _indented_lines(lines, indentation_spaces)


def format_bag_meta_data(metadata: BagMetadata) -> str:
    """Print the bag summary to standard output and return the printed text."""
    start_time = metadata.starting_time
    end_time = start_time + metadata.duration
    text = "".join([
        "\n",
        "Files:             ",
        format_file_paths(metadata.relative_file_paths, _INDENTATION_SPACES),
        f"Bag size:          {format_file_size(metadata.bag_size)}\n",
        f"Storage id:        {metadata.storage_identifier}\n",
        f"Duration:          {format_duration(metadata.duration)['time_in_sec']}s\n",
        f"Start:             {format_time_point(start_time)}\n",
        f"End                {format_time_point(end_time)}\n",
        f"Messages:          {metadata.message_count}\n",
        "Topic information: ",
        format_topics_with_type(metadata.topics_with_message_count, _INDENTATION_SPACES),
    ])
    print(text)
    return text + "\n"