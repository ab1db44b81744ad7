"""Positions, ranges and selections over a line model (1-based)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EndOfLinePreference(Enum):
    """Separator used when a read spans several lines."""

    TEXT_DEFINED = "text_defined"
    LF = "lf"
    CRLF = "crlf"


@dataclass(frozen=True, order=True, slots=True)
class Position:
    line: int
    column: int


@dataclass(frozen=True, slots=True)
class Range:
    """Half-open span; the end column is exclusive."""

    start_line: int
    start_column: int
    end_line: int
    end_column: int

    @classmethod
    def from_positions(cls, start: Position, end: Position) -> "Range":
        if end < start:
            start, end = end, start
        return cls(start.line, start.column, end.line, end.column)

    @property
    def start(self) -> Position:
        return Position(self.start_line, self.start_column)

    @property
    def end(self) -> Position:
        return Position(self.end_line, self.end_column)

    @property
    def is_empty(self) -> bool:
        return self.start == self.end


@dataclass(frozen=True, slots=True)
class Selection:
    """Anchor (where the selection began) plus cursor position."""

    selection_start_line: int
    selection_start_column: int
    position_line: int
    position_column: int

    @classmethod
    def from_positions(cls, anchor: Position, cursor: Position) -> "Selection":
        return cls(anchor.line, anchor.column, cursor.line, cursor.column)

    @classmethod
    def collapsed(cls, position: Position) -> "Selection":
        return cls.from_positions(position, position)

    @property
    def anchor(self) -> Position:
        return Position(self.selection_start_line, self.selection_start_column)

    @property
    def cursor(self) -> Position:
        return Position(self.position_line, self.position_column)

    @property
    def start(self) -> Position:
        return min(self.anchor, self.cursor)

    @property
    def end(self) -> Position:
        return max(self.anchor, self.cursor)

    @property
    def is_empty(self) -> bool:
        return self.anchor == self.cursor

    def to_range(self) -> Range:
        return Range.from_positions(self.start, self.end)


__all__ = ["EndOfLinePreference", "Position", "Range", "Selection"]
