"""Capability boundary between snapshots and the host's native text widget."""

from __future__ import annotations

from typing import Protocol


class TextAreaWrapper(Protocol):
    """The five accessors a host text widget must expose.

    ``reason`` is opaque bookkeeping for diagnostics. Implementations clamp
    ``set_selection_range`` offsets to ``[0, len(value)]``.
    """

    def get_value(self) -> str:
        ...

    def set_value(self, reason: str, value: str) -> None:
        ...

    def get_selection_start(self) -> int:
        ...

    def get_selection_end(self) -> int:
        ...

    def set_selection_range(self, reason: str, start: int, end: int) -> None:
        ...


def clamp_offset(value: str, offset: int) -> int:
    return max(0, min(offset, len(value)))


def utf16_to_index(value: str, offset: int) -> int:
    """Translate a UTF-16 code-unit offset into a ``str`` index.

    An offset landing between the halves of a surrogate pair is rounded up
    past the whole character.
    """

    units = 0
    for index, char in enumerate(value):
        if units >= offset:
            return index
        units += 2 if ord(char) > 0xFFFF else 1
    return len(value)


def index_to_utf16(value: str, index: int) -> int:
    return sum(2 if ord(char) > 0xFFFF else 1 for char in value[:index])


class Utf16TextAreaWrapper:
    """Adapts a widget that reports UTF-16 offsets (e.g. a browser bridge)."""

    def __init__(self, inner: TextAreaWrapper) -> None:
        self.inner = inner

    def get_value(self) -> str:
        return self.inner.get_value()

    def set_value(self, reason: str, value: str) -> None:
        self.inner.set_value(reason, value)

    def get_selection_start(self) -> int:
        value = self.inner.get_value()
        return utf16_to_index(value, self.inner.get_selection_start())

    def get_selection_end(self) -> int:
        value = self.inner.get_value()
        return utf16_to_index(value, self.inner.get_selection_end())

    def set_selection_range(self, reason: str, start: int, end: int) -> None:
        value = self.inner.get_value()
        start = clamp_offset(value, start)
        end = clamp_offset(value, end)
        self.inner.set_selection_range(
            reason, index_to_utf16(value, start), index_to_utf16(value, end)
        )


__all__ = [
    "TextAreaWrapper",
    "Utf16TextAreaWrapper",
    "clamp_offset",
    "index_to_utf16",
    "utf16_to_index",
]
