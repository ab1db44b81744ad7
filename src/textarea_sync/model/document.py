"""Line-oriented document backing the structured side of the editor."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Sequence

from .range import EndOfLinePreference, Position, Range

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass(slots=True)
class LineDocument:
    """Immutable-ish text storage built on a simple list-of-lines model.

    ``eol`` is the first separator found in the loaded text; reads requested
    with ``EndOfLinePreference.TEXT_DEFINED`` use it. Mixed line breaks are
    not preserved: ``text`` joins every line with ``eol``.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    eol: str = "\n"
    version: int = 0

    @classmethod
    def from_text(cls, text: str) -> "LineDocument":
        match = _LINE_BREAK.search(text)
        eol = match.group(0) if match else "\n"
        return cls(_lines=_LINE_BREAK.split(text), eol=eol)

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    @property
    def text(self) -> str:
        return self.eol.join(self._lines)

    def get_line_count(self) -> int:
        return len(self._lines)

    def get_line_content(self, line_number: int) -> str:
        return self._lines[line_number - 1]

    def get_line_max_column(self, line_number: int) -> int:
        return len(self._lines[line_number - 1]) + 1

    def _end_of_line(self, eol: EndOfLinePreference) -> str:
        if eol is EndOfLinePreference.LF:
            return "\n"
        if eol is EndOfLinePreference.CRLF:
            return "\r\n"
        if eol is EndOfLinePreference.TEXT_DEFINED:
            return self.eol
        raise ValueError(f"Unknown end-of-line preference {eol!r}")

    def get_value_in_range(
        self, range: Range, eol: EndOfLinePreference = EndOfLinePreference.TEXT_DEFINED
    ) -> str:
        if range.is_empty:
            return ""
        first = range.start_line - 1
        last = range.end_line - 1
        if first == last:
            return self._lines[first][range.start_column - 1 : range.end_column - 1]

        parts = [self._lines[first][range.start_column - 1 :]]
        parts.extend(self._lines[first + 1 : last])
        parts.append(self._lines[last][: range.end_column - 1])
        return self._end_of_line(eol).join(parts)

    def get_offset_at(
        self,
        position: Position,
        eol: EndOfLinePreference = EndOfLinePreference.TEXT_DEFINED,
    ) -> int:
        separator = len(self._end_of_line(eol))
        offset = sum(len(line) + separator for line in self._lines[: position.line - 1])
        return offset + position.column - 1

    def get_position_at(
        self,
        offset: int,
        eol: EndOfLinePreference = EndOfLinePreference.TEXT_DEFINED,
    ) -> Position:
        """Inverse of ``get_offset_at``; offsets past the end clamp to it."""

        separator = len(self._end_of_line(eol))
        running = 0
        for index, line in enumerate(self._lines):
            if offset <= running + len(line):
                return Position(index + 1, max(offset - running, 0) + 1)
            running += len(line) + separator
        return Position(len(self._lines), len(self._lines[-1]) + 1)

    def replace(self, range: Range, text: str) -> "LineDocument":
        """Return a document with ``range`` replaced by ``text``."""

        head = self._lines[range.start_line - 1][: range.start_column - 1]
        tail = self._lines[range.end_line - 1][range.end_column - 1 :]
        lines = list(self._lines)
        lines[range.start_line - 1 : range.end_line] = _LINE_BREAK.split(
            head + text + tail
        )
        return LineDocument(_lines=lines, eol=self.eol, version=self.version + 1)


__all__ = ["LineDocument"]
