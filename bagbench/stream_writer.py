"""A writer that prints a text line per message to a stream."""

from __future__ import annotations

from typing import TextIO

from bagbench.interfaces import MessageWriter
from bagbench.message import Message


class MessageStreamWriter(MessageWriter):
    """Writes the text form of each message, one per line, to ``output_stream``."""

    def __init__(self, output_stream: TextIO) -> None:
        self._output_stream = output_stream

    def open(self) -> None:
        """The stream is owned by the caller; nothing to open."""

    def close(self) -> None:
        """The stream is owned by the caller; nothing to close."""

    def write(self, message: Message) -> None:
        self._output_stream.write(f"{message}\n")
        self._output_stream.flush()

    def create_index(self) -> None:
        """A text stream has no index."""

    def reset(self) -> None:
        """The writer keeps no per-run state."""