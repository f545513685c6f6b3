"""Replays stored messages with their original relative timing."""

from __future__ import annotations

import logging
import queue
import threading
import time
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Protocol

from bagbench.formatter import TopicMetadata

logger = logging.getLogger(__name__)

_READ_AHEAD_LOWER_BOUND_PERCENTAGE = 0.9
_QUEUE_READ_WAIT_PERIOD = 0.1
_LOADER_IDLE_PERIOD = 0.001


@dataclass
class PlayOptions:
    """How many messages to read ahead, and the node name prefix."""

    read_ahead_queue_size: int
    node_prefix: str = ""


@dataclass
class SerializedBagMessage:
    """A stored message: serialized payload, receive time in nanoseconds and topic."""

    serialized_data: bytes
    time_stamp: int
    topic_name: str


@dataclass
class ReplayableMessage:
    """A stored message and its offset, in nanoseconds, from the first message."""

    message: SerializedBagMessage
    time_since_start: int


class SequentialReader(Protocol):
    def has_next(self) -> bool: ...

    def read_next(self) -> SerializedBagMessage: ...

    def get_all_topics_and_types(self) -> Sequence[TopicMetadata]: ...


class Publisher(Protocol):
    def publish(self, serialized_data: bytes) -> None: ...


class Player:
    """Reads messages in a background thread and publishes them on schedule.

    ``publisher_factory(topic_name, topic_type)`` creates the publisher for each
    topic. Setting ``stop_event`` stops loading and playing.
    """

    def __init__(
        self,
        reader: SequentialReader,
        publisher_factory: Callable[[str, str], Publisher],
        stop_event: threading.Event | None = None,
    ) -> None:
        self._reader = reader
        self._publisher_factory = publisher_factory
        self._stop_event = stop_event if stop_event is not None else threading.Event()
        self._message_queue: queue.Queue[ReplayableMessage] = queue.Queue()
        self._publishers: dict[str, Publisher] = {}
        self._loading: Future[None] | None = None
        self._start_time = 0.0

    def play(self, options: PlayOptions) -> None:
        """Publish every stored message, keeping the recorded time offsets."""
        self._prepare_publishers()
        with ThreadPoolExecutor(max_workers=1) as pool:
            self._loading = pool.submit(self._load_storage_content, options)
            try:
                self._wait_for_filled_queue(options)
                self._play_messages_from_queue()
            finally:
                if not self._loading.done():
                    self._loading.cancel()
        self._loading.result()

    def _ok(self) -> bool:
        return not self._stop_event.is_set()

    def _is_storage_completely_loaded(self) -> bool:
        if self._loading is None:
            return True
        if self._loading.done():
            self._loading.result()
            return True
        return False

    def _prepare_publishers(self) -> None:
        for topic in self._reader.get_all_topics_and_types():
            self._publishers[topic.name] = self._publisher_factory(topic.name, topic.type)

    def _wait_for_filled_queue(self, options: PlayOptions) -> None:
        while (
            self._message_queue.qsize() < options.read_ahead_queue_size
            and not self._is_storage_completely_loaded()
            and self._ok()
        ):
            time.sleep(_QUEUE_READ_WAIT_PERIOD)

    def _load_storage_content(self, options: PlayOptions) -> None:
        time_first_message = 0
        if self._reader.has_next():
            message = self._reader.read_next()
            time_first_message = message.time_stamp
            self._message_queue.put(ReplayableMessage(message, 0))

        lower_boundary = int(options.read_ahead_queue_size * _READ_AHEAD_LOWER_BOUND_PERCENTAGE)
        upper_boundary = options.read_ahead_queue_size

        while self._reader.has_next() and self._ok():
            if self._message_queue.qsize() < lower_boundary:
                self._enqueue_up_to_boundary(time_first_message, upper_boundary)
            else:
                time.sleep(_LOADER_IDLE_PERIOD)

    def _enqueue_up_to_boundary(self, time_first_message: int, boundary: int) -> None:
        for _ in range(self._message_queue.qsize(), boundary):
            if not self._reader.has_next():
                break
            message = self._reader.read_next()
            self._message_queue.put(
                ReplayableMessage(message, message.time_stamp - time_first_message)
            )

    def _play_messages_from_queue(self) -> None:
        self._start_time = time.monotonic()
        while True:
            loaded = self._is_storage_completely_loaded()
            self._play_messages_until_queue_empty()
            if loaded or not self._ok():
                return
            logger.warning(
                "Message queue starved. Messages will be delayed. "
                "Consider increasing the --read-ahead-queue-size option."
            )

    def _play_messages_until_queue_empty(self) -> None:
        while self._ok():
            try:
                replayable = self._message_queue.get_nowait()
            except queue.Empty:
                return
            target = self._start_time + replayable.time_since_start / 1e9
            delay = target - time.monotonic()
            if delay > 0:
                self._stop_event.wait(delay)
            if self._ok():
                message = replayable.message
                self._publishers[message.topic_name].publish(message.serialized_data)