"""Small helpers for building delimited strings and repeated sequences."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def join(strings: Sequence[str], delimiter: str, prefix: str = "", suffix: str = "") -> str:
    """Join ``strings`` with ``delimiter`` and wrap in ``prefix``/``suffix``.

    An empty sequence yields an empty string, without prefix or suffix.
    """
    if not strings:
        return ""
    return f"{prefix}{delimiter.join(strings)}{suffix}"


def repeat(times: int, element: T) -> list[T]:
    """Return a list holding ``element`` ``times`` times."""
    return [element] * times