"""Abstract interfaces for message writers and readers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from bagbench.message import Message


class MessageWriter(ABC):
    """A sink that stores messages."""

    @abstractmethod
    def open(self) -> None:
        """Prepare the writer for writing."""

    @abstractmethod
    def close(self) -> None:
        """Flush and release any resources."""

    @abstractmethod
    def write(self, message: Message) -> None:
        """Store one message."""

    @abstractmethod
    def create_index(self) -> None:
        """Build any indices over the stored messages."""

    @abstractmethod
    def reset(self) -> None:
        """Forget any per-run state."""


class MessageReader(ABC):
    """A source that returns stored messages."""

    @abstractmethod
    def open(self) -> None:
        """Prepare the reader for reading."""

    @abstractmethod
    def close(self) -> None:
        """Release any resources."""

    @abstractmethod
    def read(self) -> list[Message]:
        """Return all stored messages."""