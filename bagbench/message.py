"""Messages and a generator that produces a repeating stream of them."""

from __future__ import annotations

import random
import time
from collections.abc import Iterable, Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class Message:
    """A timestamped blob published on a topic.

    ``timestamp`` is in nanoseconds since the epoch.
    """

    timestamp: int
    topic: str
    blob: bytes

    def __str__(self) -> str:
        return f"{{timestamp_:{self.timestamp},topic:{self.topic},bytes:{len(self.blob)}}}"


class MessageGenerator:
    """Yields messages for every topic of a specification, ``loop_count`` times over.

    The specification is a sequence of ``(topic, blob_size)`` pairs. Each topic
    gets one random blob, reused for all of its messages.
    """

    def __init__(self, loop_count: int, specification: Iterable[tuple[str, int]]) -> None:
        spec = list(specification)
        self._loop_count = loop_count
        self._topics = [topic for topic, _ in spec]
        self._blobs = [random.randbytes(size) for _, size in spec]
        self._total_msg_count = loop_count * len(spec)
        self._current_loop = 0
        self._current_index = 0

    def has_next(self) -> bool:
        """Whether another message remains to be produced."""
        return (
            self._current_loop < self._loop_count
            and self._current_index < len(self._topics)
        )

    def next(self) -> Message:
        """Produce the next message, stamped with the current time."""
        if not self.has_next():
            raise StopIteration("message generator is exhausted")
        message = Message(
            time.time_ns(),
            self._topics[self._current_index],
            self._blobs[self._current_index],
        )
        self._current_index += 1
        if self._current_index >= len(self._topics):
            self._current_index = 0
            self._current_loop += 1
        return message

    def reset(self) -> None:
        """Start again from the first message of the first loop."""
        self._current_index = 0
        self._current_loop = 0

    def total_msg_count(self) -> int:
        """Number of messages a full run produces."""
        return self._total_msg_count

    def __iter__(self) -> Iterator[Message]:
        while self.has_next():
            yield self.next()